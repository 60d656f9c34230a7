import uuid
from typing import Any

import pendulum
from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from posts_app.exceptions import (
    MediaDeleteException,
    PostNotFoundException,
    PostValidationException,
)
from posts_app.models.post import Image, Post
from posts_app.repositories.post_repository import PostRepository
from posts_app.schemas.post_schema import ImageUpload, PostFields
from posts_app.services.media_service import MediaService


def _now() -> str:
    return pendulum.now("UTC").to_iso8601_string()


class PostService:
    ERROR_POST_NOT_FOUND = "Post not found"

    def __init__(
        self,
        post_repository: PostRepository | None = None,
        media_service: MediaService | None = None,
    ):
        self._logger = Logger(utc=True)
        self._repo = post_repository or PostRepository()
        self._media = media_service or MediaService()

    def _validate(self, title: Any, content: Any) -> PostFields:
        try:
            return PostFields(title=title, content=content)
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors()})
            messages = [
                f"{error['loc'][0]}: {error['msg']}" for error in exc.errors()
            ]
            self._logger.info(f"Invalid post {fields=}")
            raise PostValidationException("; ".join(messages), fields) from exc

    def _discard_image(self, image: Image) -> None:
        # Best-effort: a failed delete leaves an orphaned asset and is only logged,
        # it never changes the outcome of the post operation.
        try:
            self._media.delete(image.id)
        except MediaDeleteException as exc:
            self._logger.warning(
                f"Orphaned media asset left behind {image.id=}", exc_info=exc
            )

    def get_post_by_uuid(self, post_uuid: str) -> Post:
        item = self._repo.get_post_by_uuid(post_uuid)
        if not item:
            self._logger.warning(f"Post not found: {post_uuid=}")
            raise PostNotFoundException(self.ERROR_POST_NOT_FOUND)
        return Post(**item)

    def create_post(
        self, title: Any, content: Any, image: ImageUpload | None = None
    ) -> Post:
        fields = self._validate(title, content)
        uploaded = self._media.upload(image) if image else None
        now = _now()
        post = Post(
            id=str(uuid.uuid4()),
            title=fields.title,
            content=fields.content,
            image=uploaded,
            author=None,
            created_at=now,
            updated_at=now,
        )
        try:
            self._repo.create_post(post.model_dump())
        except (BotoCoreError, ClientError):
            if uploaded:
                self._discard_image(uploaded)
            raise
        self._logger.info(f"Post created: {post.id=} has_image={post.has_image}")
        return post

    def delete_post(self, post_uuid: str):
        item = self._repo.delete_post(post_uuid)
        if not item:
            self._logger.warning(f"Post not found: {post_uuid=}")
            raise PostNotFoundException(self.ERROR_POST_NOT_FOUND)
        post = Post(**item)
        self._logger.info(f"Post deleted: {post_uuid=}")
        if post.image:
            self._discard_image(post.image)

    def get_post(self, post_uuid: str) -> Post:
        return self.get_post_by_uuid(post_uuid)

    def get_posts(self) -> list[Post]:
        posts = [Post(**item) for item in self._repo.get_all_posts()]
        return sorted(
            posts, key=lambda post: pendulum.parse(post.created_at), reverse=True
        )

    def update_post(
        self,
        post_uuid: str,
        title: Any,
        content: Any,
        image: ImageUpload | None = None,
    ) -> Post:
        fields = self._validate(title, content)
        existing = self.get_post_by_uuid(post_uuid)

        data: dict[str, Any] = {
            "title": fields.title,
            "content": fields.content,
            "updated_at": _now(),
        }
        uploaded = None
        if image:
            uploaded = self._media.upload(image)
            data["image"] = uploaded.model_dump()

        try:
            item = self._repo.update_post(post_uuid, data)
        except (BotoCoreError, ClientError):
            if uploaded:
                self._discard_image(uploaded)
            raise
        if not item:
            if uploaded:
                self._discard_image(uploaded)
            raise PostNotFoundException(self.ERROR_POST_NOT_FOUND)
        self._logger.info(f"Post updated: {post_uuid=} new_image={bool(uploaded)}")

        if uploaded and existing.image:
            self._discard_image(existing.image)
        return Post(**item)
