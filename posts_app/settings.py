from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    debug: bool = False
    app_name: str = "posts-app"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_region: str = Field(default="eu-central-1", alias="AWS_DEFAULT_REGION")
    aws_connect_timeout: float = 5
    aws_read_timeout: float = 45
    aws_max_attempts: int = 3
    allowed_image_formats: list[str] = ["jpg", "jpeg", "png", "gif", "webp"]
    cors_allowed_origins: list[str] = ["*"]
    max_image_dimension: int = 1000
    max_image_size: int = 5 * 1024 * 1024
    media_bucket_name: str = "posts-app-media"
    media_folder: str = "posts_app"
    media_object_acl: str | None = None
    media_public_base_url: str | None = None
    stage: str = "dev"
