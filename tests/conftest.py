import base64
import uuid

import boto3
import pendulum
import pytest
from moto import mock_aws

from posts_app.models.post import Image, Post
from posts_app.schemas.post_schema import ImageUpload
from posts_app.settings import Settings

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def pytest_configure():
    pytest.aws_default_region = "eu-central-1"
    pytest.media_bucket_name = "test-media"
    pytest.posts_table_name = "test-posts"


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def aws():
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_resource(aws, settings: Settings):
    return boto3.Session().resource(
        "dynamodb",
        region_name=pytest.aws_default_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )


@pytest.fixture
def s3_resource(aws, settings: Settings):
    return boto3.Session().resource(
        "s3",
        region_name=pytest.aws_default_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )


@pytest.fixture
def posts_table(dynamodb_resource):
    return dynamodb_resource.create_table(
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        TableName=pytest.posts_table_name,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        ProvisionedThroughput={"ReadCapacityUnits": 10, "WriteCapacityUnits": 10},
    )


@pytest.fixture
def media_bucket(s3_resource):
    return s3_resource.create_bucket(
        Bucket=pytest.media_bucket_name,
        CreateBucketConfiguration={"LocationConstraint": pytest.aws_default_region},
    )


@pytest.fixture
def image() -> Image:
    key = f"posts_app/{uuid.uuid4()}/cat.png"
    return Image(url=f"https://{pytest.media_bucket_name}.s3.amazonaws.com/{key}", id=key)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def image_upload(png_bytes: bytes) -> ImageUpload:
    return ImageUpload(filename="cat.png", content_type="image/png", data=png_bytes)


@pytest.fixture
def make_post(faker):
    def make(created_at: pendulum.DateTime | None = None) -> Post:
        created_at = (created_at or pendulum.now("UTC")).to_iso8601_string()
        return Post(
            id=str(uuid.uuid4()),
            title=faker.sentence(nb_words=5)[:100],
            content=faker.text(max_nb_chars=500),
            image=None,
            author=None,
            created_at=created_at,
            updated_at=created_at,
        )

    return make


@pytest.fixture
def posts(make_post) -> list[Post]:
    start = pendulum.now("UTC").subtract(days=1)
    return [make_post(start.add(minutes=idx)) for idx in range(10)]


@pytest.fixture
def post_with_image(make_post, image: Image) -> Post:
    post = make_post()
    post.image = image
    return post


@pytest.fixture
def initialize_posts_table(posts_table, posts: list[Post], post_with_image: Post):
    with posts_table.batch_writer() as batch:
        for post in posts + [post_with_image]:
            batch.put_item(Item=post.model_dump())
    return posts_table
