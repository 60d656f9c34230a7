import pytest

from posts_app.repositories.post_repository import PostRepository
from posts_app.services.media_service import MediaService
from posts_app.services.post_service import PostService
from posts_app.services.storage_service import StorageService


@pytest.fixture
def post_repository() -> PostRepository:
    return PostRepository()


@pytest.fixture
def storage_service() -> StorageService:
    return StorageService()


@pytest.fixture
def media_service(storage_service: StorageService) -> MediaService:
    return MediaService(storage_service)


@pytest.fixture
def post_service(
    post_repository: PostRepository, media_service: MediaService
) -> PostService:
    return PostService(post_repository, media_service)
