import io
import uuid

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image as PILImage
from unidecode import unidecode

from posts_app import settings
from posts_app.exceptions import MediaDeleteException, MediaUploadException
from posts_app.models.post import Image
from posts_app.schemas.post_schema import ImageUpload
from posts_app.services.storage_service import StorageService


def image_url(key: str) -> str:
    if settings.media_public_base_url:
        return f"{settings.media_public_base_url.rstrip('/')}/{key}"
    return f"https://{settings.media_bucket_name}.s3.amazonaws.com/{key}"


class MediaService:
    """Uploads post images to the media bucket and removes them again."""

    ERROR_UPLOAD_FAILED = "Could not upload the image"
    ERROR_UNREADABLE_IMAGE = "Could not read the image"
    ERROR_DELETE_FAILED = "Could not delete the image"

    def __init__(self, storage_service: StorageService | None = None):
        self._logger = Logger(utc=True)
        self._storage_service = storage_service or StorageService()

    def _fit(self, image: ImageUpload) -> bytes:
        """Shrinks the image to fit within the configured bounding box.

        The aspect ratio is kept and smaller images are returned untouched.
        """
        limit = settings.max_image_dimension
        try:
            with PILImage.open(io.BytesIO(image.data)) as picture:
                if picture.width <= limit and picture.height <= limit:
                    return image.data
                image_format = picture.format
                original_size = picture.size
                picture.thumbnail((limit, limit))
                buffer = io.BytesIO()
                picture.save(buffer, format=image_format)
        except (OSError, PILImage.DecompressionBombError) as exc:
            self._logger.warning(f"Unreadable image filename={image.filename}")
            raise MediaUploadException(self.ERROR_UNREADABLE_IMAGE) from exc
        self._logger.info(f"Image resized {original_size=} size={picture.size}")
        return buffer.getvalue()

    def upload(self, image: ImageUpload) -> Image:
        filename = unidecode(image.filename).replace("/", "_").replace(" ", "_")
        key = f"{settings.media_folder}/{uuid.uuid4()}/{filename}"
        data = self._fit(image)
        try:
            self._storage_service.put_object(
                settings.media_bucket_name,
                key,
                data,
                image.content_type,
                acl=settings.media_object_acl,
            )
        except (BotoCoreError, ClientError) as exc:
            self._logger.exception(f"Failed to upload image {key=}")
            raise MediaUploadException(self.ERROR_UPLOAD_FAILED) from exc
        self._logger.info(f"Image uploaded {key=} size={len(data)}")
        return Image(url=image_url(key), id=key)

    def delete(self, image_id: str) -> None:
        try:
            self._storage_service.delete_object(settings.media_bucket_name, image_id)
        except (BotoCoreError, ClientError) as exc:
            raise MediaDeleteException(
                f"{self.ERROR_DELETE_FAILED} {image_id=}"
            ) from exc
