from posts_app.services.media_service import MediaService
from posts_app.services.post_service import PostService


def media_service() -> MediaService:
    return MediaService()


def post_service() -> PostService:
    return PostService(media_service=media_service())
