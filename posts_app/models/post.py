from humps import camelize
from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=camelize, populate_by_name=True)


class Image(CamelModel):
    """An asset in the media store. ``id`` is the key needed to delete it."""

    url: str
    id: str


class Post(CamelModel):
    id: str
    title: str
    content: str
    image: Image | None = None
    author: str | None = None
    created_at: str
    updated_at: str | None = None

    @property
    def has_image(self) -> bool:
        return self.image is not None
