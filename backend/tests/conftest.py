"""
MedDent - Test fixtures

The app runs in-process against an in-memory MongoDB (mongomock-motor)
injected through app.dependency_overrides[get_db]. TestClient is used
without a `with` block, so startup hooks (indexes, seed) do not run.
"""

import os
import tempfile
import uuid

import pytest

os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="meddent-uploads-"))
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

ADMIN_EMAIL = "admin@meddent.test"
ADMIN_PASSWORD = "AdminPass123!"
CRM_USERNAME = "operator"
CRM_PASSWORD = "CrmPass123"


@pytest.fixture
def db():
    return AsyncMongoMockClient()[f"meddent_test_{uuid.uuid4().hex[:8]}"]


@pytest.fixture
def app(db):
    from config import get_db
    from server import app as fastapi_app

    fastapi_app.dependency_overrides[get_db] = lambda: db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers(client, db):
    from services.seed import seed_admin
    from tests.helpers import _db_op

    _db_op(seed_admin(db, email=ADMIN_EMAIL, password=ADMIN_PASSWORD))
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def crm_headers(client, admin_headers):
    r = client.post(
        "/api/crm-users",
        json={"username": CRM_USERNAME, "password": CRM_PASSWORD},
        headers=admin_headers
    )
    assert r.status_code == 201
    r = client.post("/api/crm-login", json={"username": CRM_USERNAME, "password": CRM_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}
