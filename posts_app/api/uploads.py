import os

from aws_lambda_powertools import Logger
from fastapi import UploadFile

from posts_app import settings
from posts_app.exceptions import PostValidationException
from posts_app.schemas.post_schema import ImageUpload

ERROR_IMAGES_ONLY = "Images only! Allowed formats: {formats}"
ERROR_IMAGE_TOO_LARGE = "Image exceeds the maximum size of {limit} bytes"

logger = Logger(utc=True)


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lstrip(".").lower()


def read_image(upload: UploadFile | None) -> ImageUpload | None:
    """Validate a multipart image part before it reaches the post service.

    An empty part (a form submitted without choosing a file) counts as no image.
    """
    if upload is None or not upload.filename:
        return None

    formats = [fmt.lower() for fmt in settings.allowed_image_formats]
    content_type = (upload.content_type or "").lower()
    media_type, _, subtype = content_type.partition("/")
    if (
        _extension(upload.filename) not in formats
        or media_type != "image"
        or subtype not in formats
    ):
        logger.info(f"Rejected upload {upload.filename=} {content_type=}")
        raise PostValidationException(
            ERROR_IMAGES_ONLY.format(formats=", ".join(formats)), ["image"]
        )

    data = upload.file.read(settings.max_image_size + 1)
    if len(data) > settings.max_image_size:
        logger.info(f"Rejected upload {upload.filename=}, too large")
        raise PostValidationException(
            ERROR_IMAGE_TOO_LARGE.format(limit=settings.max_image_size), ["image"]
        )
    return ImageUpload(filename=upload.filename, content_type=content_type, data=data)
