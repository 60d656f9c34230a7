import io

import pytest
from fastapi import UploadFile, status
from pytest_mock import MockerFixture
from starlette.datastructures import Headers

from posts_app import settings
from posts_app.api.uploads import read_image
from posts_app.exceptions import PostValidationException


def make_upload(filename: str, content_type: str, data: bytes) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestReadImage:
    def test_no_upload_means_no_image(self):
        assert read_image(None) is None

    def test_empty_file_part_means_no_image(self):
        assert read_image(make_upload("", "application/octet-stream", b"")) is None

    @pytest.mark.parametrize(
        "filename, content_type",
        [
            ("cat.png", "image/png"),
            ("CAT.JPG", "image/jpeg"),
            ("cat.jpeg", "image/jpeg"),
            ("cat.gif", "image/gif"),
            ("cat.webp", "image/webp"),
        ],
    )
    def test_successfully_read_allowed_image(
        self, filename: str, content_type: str, png_bytes: bytes
    ):
        result = read_image(make_upload(filename, content_type, png_bytes))

        assert result.filename == filename
        assert result.content_type == content_type
        assert result.data == png_bytes

    @pytest.mark.parametrize(
        "filename, content_type",
        [
            ("report.pdf", "application/pdf"),
            ("cat.png", "text/plain"),
            ("cat.svg", "image/svg+xml"),
            ("cat", "image/png"),
        ],
    )
    def test_fail_to_read_disallowed_file(
        self, filename: str, content_type: str, png_bytes: bytes
    ):
        with pytest.raises(PostValidationException) as exc_info:
            read_image(make_upload(filename, content_type, png_bytes))

        assert exc_info.value.status_code == status.HTTP_400_BAD_REQUEST
        assert exc_info.value.detail.startswith("Images only!")
        assert exc_info.value.fields == ["image"]

    def test_fail_to_read_oversized_image(self, mocker: MockerFixture):
        mocker.patch.object(settings, "max_image_size", 16)

        with pytest.raises(PostValidationException) as exc_info:
            read_image(make_upload("cat.png", "image/png", b"x" * 17))

        assert exc_info.value.detail == "Image exceeds the maximum size of 16 bytes"

    def test_successfully_read_image_at_size_limit(self, mocker: MockerFixture):
        mocker.patch.object(settings, "max_image_size", 16)

        result = read_image(make_upload("cat.png", "image/png", b"x" * 16))

        assert result.size == 16

    def test_default_size_limit_is_five_megabytes(self):
        assert settings.max_image_size == 5 * 1024 * 1024
