from fastapi import APIRouter

from posts_app.api.v1.routers import posts_router

router = APIRouter(prefix="/api/v1")
router.include_router(posts_router.router, prefix="/posts", tags=["posts"])

# Unversioned paths used by the browser client.
legacy_router = APIRouter()
legacy_router.include_router(
    posts_router.router, prefix="/posts", tags=["posts"], include_in_schema=False
)
