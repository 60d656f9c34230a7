import uuid
from typing import Any, Sequence

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from posts_app.models.post import CamelModel, Post


class Message(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    status: int
    id: uuid.UUID
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: Sequence[Any]


def error_response(error: ErrorResponse) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(error), status_code=error.status)


class PostResponse(CamelModel):
    id: str
    title: str
    content: str
    image_url: str | None = None
    image_id: str | None = None
    has_image: bool = False
    author: str | None = None
    created_at: str
    updated_at: str | None = None

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            **post.model_dump(exclude={"image"}),
            image_url=post.image.url if post.image else None,
            image_id=post.image.id if post.image else None,
            has_image=post.has_image,
        )
