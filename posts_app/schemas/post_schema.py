from pydantic import BaseModel, ConfigDict, constr

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 5000


class PostFields(BaseModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: constr(
        strip_whitespace=True, min_length=1, max_length=CONTENT_MAX_LENGTH
    )

    model_config = ConfigDict(extra="ignore")


class ImageUpload(BaseModel):
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
