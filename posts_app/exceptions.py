from typing import Any

from fastapi import HTTPException, status


class MediaDeleteException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class MediaUploadException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail=detail)


class PostNotFoundException(HTTPException):
    def __init__(self, detail: Any = None) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail=detail)


class PostValidationException(HTTPException):
    def __init__(self, detail: Any = None, fields: list[str] | None = None) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail=detail)
        self.fields = fields or []
