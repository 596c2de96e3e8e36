"""Pytest configuration and fixtures for test suite."""

import os

import pytest

# Settings are read at import time, so set required env before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SMTP_HOST", "")

from fastapi.testclient import TestClient  # noqa: E402

from app.services.appointment_service import appointments_store  # noqa: E402
from app.services.auth_service import admin_sessions  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "123456"


@pytest.fixture
def clean_stores():
    """Reset in-memory stores before and after each test."""
    appointments_store.clear()
    admin_sessions.clear()
    yield
    appointments_store.clear()
    admin_sessions.clear()


@pytest.fixture
def client(clean_stores):
    """FastAPI test client; entering the context runs startup (sample seeding)."""
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
