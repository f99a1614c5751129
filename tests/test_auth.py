# =============================================================================
# tests/test_auth.py - Bearer Token Authentication Tests
# =============================================================================
# Tests for decode_token() / get_current_user() and the /auth/verify route.
# Tokens are signed locally with the test JWT_SECRET.
# =============================================================================

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.auth import AuthUser, TokenPayload, decode_token, get_current_user
from app.auth import dependencies
from app.exceptions import AuthenticationError

from tests.conftest import USER_1, make_token


class TestDecodeToken:
    """Tests for token verification."""

    def test_valid_token(self):
        user = decode_token(make_token(USER_1, email="u1@example.org"))

        assert user == AuthUser(id=USER_1, email="u1@example.org")

    def test_expired_token(self):
        with pytest.raises(AuthenticationError, match="expired"):
            decode_token(make_token(USER_1, expires_in=-60))

    def test_wrong_secret(self):
        token = jwt.encode({"sub": USER_1, "aud": "authenticated"}, "another-secret-entirely", algorithm="HS256")

        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_audience(self):
        with pytest.raises(AuthenticationError):
            decode_token(make_token(USER_1, aud="someone-else"))

    def test_audience_check_can_be_disabled(self):
        with patch.object(dependencies.settings, "JWT_VERIFY_AUDIENCE", False):
            user = decode_token(make_token(USER_1, aud="someone-else"))

        assert user.id == USER_1

    def test_missing_sub(self):
        with pytest.raises(AuthenticationError, match="missing user ID"):
            decode_token(make_token(None))

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            decode_token("not.a.jwt")

    def test_asymmetric_token_without_jwks_rejected(self):
        header_only = MagicMock(return_value={"alg": "ES256", "kid": "k1"})
        with patch.object(dependencies.jwt, "get_unverified_header", header_only):
            with pytest.raises(AuthenticationError, match="unknown signing key"):
                decode_token("irrelevant")


class TestTokenPayload:
    """Tests for the claims model."""

    def test_only_identity_claims_kept(self):
        payload = TokenPayload(sub=USER_1, email="u1@example.org", aud="authenticated", role="authenticated", exp=1)

        assert payload.model_dump() == {"sub": USER_1, "email": "u1@example.org"}


class TestGetCurrentUser:
    """Tests for the FastAPI dependency."""

    def test_missing_credentials(self):
        with pytest.raises(AuthenticationError, match="Missing bearer token"):
            asyncio.run(get_current_user(None))

    def test_valid_credentials(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=make_token(USER_1))

        user = asyncio.run(get_current_user(credentials))

        assert user.id == USER_1


class TestVerifyRoute:
    """Tests for GET /api/v1/auth/verify."""

    def test_verify_with_token(self, client, auth_headers):
        response = client.get("/api/v1/auth/verify", headers=auth_headers(USER_1))

        assert response.status_code == 200
        assert response.json()["user_id"] == USER_1

    def test_verify_without_token(self, client):
        response = client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["code"] == "AUTHENTICATION_FAILED"

    def test_verify_with_bad_token(self, client):
        response = client.get("/api/v1/auth/verify", headers={"Authorization": "Bearer junk"})

        assert response.status_code == 401
