# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory document store and an API test client
# - Mints HS256 bearer tokens for arbitrary user ids
# =============================================================================

import os
import time

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret-key-0123456789")
os.environ.setdefault("JWT_AUDIENCE", "authenticated")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from app.dependencies import get_store
from app.main import app as api
from lib.document_store import InMemoryDocumentStore


# Fixed caller ids used across the suite
USER_1 = "11111111-1111-4111-8111-111111111111"
USER_2 = "22222222-2222-4222-8222-222222222222"
USER_3 = "33333333-3333-4333-8333-333333333333"


def make_token(user_id: str | None, expires_in: int = 3600, **claims) -> str:
    """Sign a token the API will accept (unless the claims say otherwise)."""
    payload = {
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
        "iat": int(time.time()),
        **claims,
    }
    if user_id is not None:
        payload["sub"] = user_id
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Fresh in-memory store per test."""
    return InMemoryDocumentStore()


@pytest.fixture
def client(store):
    """API client wired to the per-test store."""
    api.dependency_overrides[get_store] = lambda: store
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user id."""
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return _headers


@pytest.fixture
def sample_organization():
    """Organization fields as a client would send them."""
    return {
        "name": "Food Bank of Springfield",
        "description": "Weekly grocery distribution",
        "location": "Springfield",
    }


@pytest.fixture
def sample_project():
    """Project fields without the organization reference."""
    return {
        "name": "Saturday pantry",
        "type": "recurring",
        "description": "Sort and hand out groceries",
        "desiredskills": "lifting, driving",
    }
