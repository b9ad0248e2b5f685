"""
Shared fixtures for the Reelfolio tests.

The document store is a mongomock client and the S3 client is a MagicMock,
so nothing here needs network access.
"""

from unittest.mock import MagicMock

import mongomock
import pytest

from reelfolio import create_app

ADMIN_PASSWORD = "let-me-in"

TEST_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test-secret",
    "MONGO_URI": "mongodb://localhost:27017/reelfolio-test",
    "MONGO_DB_NAME": "reelfolio-test",
    "ADMIN_PASSWORD": ADMIN_PASSWORD,
    "CORS_ORIGINS": "http://localhost:5173,http://localhost:3000",
    "DO_SPACES_REGION": "fra1",
    "DO_SPACES_NAME": "reelfolio-test",
    "DO_SPACES_KEY": "key",
    "DO_SPACES_SECRET": "secret",
    "MEDIA_INPUT_POLICY": "either",
    "IS_PRODUCTION": False,
    "BACKGROUND_TASKS_SYNC": True,
}

MEDIA_BASE = "https://reelfolio-test.fra1.digitaloceanspaces.com"

SAMPLE_PROJECT = {
    "title": "Artisan",
    "year": 2025,
    "role": "Director",
    "synopsis": "A short documentary profiling a master watchmaker.",
    "videoUrl": "https://provider/video/v1/videos/abc123.mp4",
    "thumbnailUrl": "https://provider/image/v1/thumbnails/xyz.jpg",
}


@pytest.fixture
def make_app():
    """Build an app with TEST_CONFIG plus overrides and a fresh mongomock store."""
    def _make(**overrides):
        config = dict(TEST_CONFIG)
        config.update(overrides)
        return create_app(config, mongo_client=mongomock.MongoClient())
    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client holding a live admin session."""
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def storage_mock(app):
    """Swap the boto3 S3 client for a MagicMock.

    put_object and delete_object succeed unless a test sets a side_effect.
    """
    client = MagicMock(name="s3")
    app.extensions["reelfolio_storage"] = client
    return client


def create_project(client, **overrides):
    """POST a JSON project and return the created record."""
    body = dict(SAMPLE_PROJECT)
    body.update(overrides)
    response = client.post("/api/projects", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def app_logs(app, level=None):
    """Entries written by LoggingService, optionally filtered by level."""
    query = {"level": level} if level else {}
    return list(app.extensions["reelfolio_db"].db["app_logs"].find(query))
