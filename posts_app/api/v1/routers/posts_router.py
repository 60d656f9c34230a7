from aws_lambda_powertools import Logger
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from posts_app import deps
from posts_app.api.uploads import read_image
from posts_app.models.response import Message, PostResponse
from posts_app.services.post_service import PostService

MESSAGE_POST_DELETED = "Post deleted successfully"

logger = Logger(utc=True)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    title: str | None = Form(None),
    content: str | None = Form(None),
    image: UploadFile | None = File(None),
    post_service: PostService = Depends(deps.post_service),
) -> PostResponse:
    post = post_service.create_post(title, content, read_image(image))
    return PostResponse.from_post(post)


@router.delete("/{uuid}", status_code=status.HTTP_200_OK)
def delete_post(
    uuid: str, post_service: PostService = Depends(deps.post_service)
) -> Message:
    post_service.delete_post(uuid)
    return Message(message=MESSAGE_POST_DELETED)


@router.get("/{uuid}", status_code=status.HTTP_200_OK)
def get_post_by_uuid(
    uuid: str, post_service: PostService = Depends(deps.post_service)
) -> PostResponse:
    return PostResponse.from_post(post_service.get_post(uuid))


@router.get("", status_code=status.HTTP_200_OK)
def get_posts(
    post_service: PostService = Depends(deps.post_service),
) -> list[PostResponse]:
    return [PostResponse.from_post(post) for post in post_service.get_posts()]


@router.put("/{uuid}", status_code=status.HTTP_200_OK)
def update_post(
    uuid: str,
    title: str | None = Form(None),
    content: str | None = Form(None),
    image: UploadFile | None = File(None),
    post_service: PostService = Depends(deps.post_service),
) -> PostResponse:
    post = post_service.update_post(uuid, title, content, read_image(image))
    return PostResponse.from_post(post)
