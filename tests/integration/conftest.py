import pytest
from fastapi.testclient import TestClient

from posts_app.http_handler import app


@pytest.fixture
def test_client(posts_table, media_bucket) -> TestClient:
    app.dependency_overrides = {}
    return TestClient(app, raise_server_exceptions=True)
