# tests/conftest.py
import pytest
from mongomock_motor import AsyncMongoMockClient

from justyou.api.v1.auth import get_current_user
from justyou.core.config import settings
from justyou.core.security import CurrentUser
from justyou.db import mongo
from justyou.main import app

OWNER = CurrentUser(id="user-owner", email="owner@example.com")
OTHER = CurrentUser(id="user-other", email="other@example.com")
ADMIN = CurrentUser(id="user-admin", email="admin@example.com")


@pytest.fixture(autouse=True)
def mongo_db():
    """Every test gets a fresh in-memory document store."""
    client = AsyncMongoMockClient()
    mongo.set_mongo_client(client)
    yield client[settings.MONGODB_DB]
    mongo.set_mongo_client(None)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch, tmp_path):
    # no analytics, no object storage, no remote relay
    monkeypatch.setattr(settings, "MIXPANEL_TOKEN", None)
    monkeypatch.setattr(settings, "S3_ENDPOINT", None)
    monkeypatch.setattr(settings, "MINIO_ENDPOINT", None)
    monkeypatch.setattr(settings, "RELAY_URL", None)
    monkeypatch.setattr(settings, "ADMIN_EMAIL", ADMIN.email)
    monkeypatch.setattr(settings, "LLM_ADAPTER", "mock")
    monkeypatch.setattr(settings, "LOCAL_UPLOAD_DIR", str(tmp_path / "uploads"))
    return settings


@pytest.fixture
def login():
    """
    Override the bearer-token dependency. Call ``login(user)`` to switch the
    signed-in user mid-test; starts signed in as OWNER.
    """
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user

    _login(OWNER)
    yield _login
    app.dependency_overrides.pop(get_current_user, None)

