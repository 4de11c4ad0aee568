"""Tests for bearer token verification."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from seogen.api import config
from seogen.api.auth import (
    DEV_USER_ID,
    create_access_token,
    get_current_user,
    verify_token,
)
from seogen.api.core.errors import AuthenticationError


@pytest.fixture(autouse=True)
def enforce_auth(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "SKIP_AUTH", False)


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def fake_request() -> MagicMock:
    request = MagicMock()
    request.client.host = "127.0.0.1"
    request.headers = {"user-agent": "pytest"}
    return request


class TestVerifyToken:
    """Signature, audience and expiry."""

    def test_valid(self) -> None:
        token = create_access_token("user-1", email="a@example.com")
        payload = verify_token(token)
        assert payload.sub == "user-1"
        assert payload.email == "a@example.com"
        assert payload.aud == "authenticated"

    def test_expired(self) -> None:
        token = create_access_token("user-1", expires_delta=timedelta(minutes=-5))
        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token)
        assert exc_info.value.reason == "token_expired"
        assert exc_info.value.status_code == 401

    def test_wrong_secret(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "exp": 9_999_999_999, "aud": "authenticated"},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token)
        assert exc_info.value.reason == "invalid_token"

    def test_wrong_audience(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "exp": 9_999_999_999, "aud": "anon"},
            config.SUPABASE_JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_garbage(self) -> None:
        with pytest.raises(AuthenticationError):
            verify_token("not-a-jwt")


class TestGetCurrentUser:
    """FastAPI dependency."""

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        token = create_access_token("user-42")
        user = await get_current_user(fake_request(), bearer(token))
        assert user.user_id == "user-42"
        assert user.role == "authenticated"

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(fake_request(), None)
        assert exc_info.value.message == "Authentication required"

    @pytest.mark.asyncio
    async def test_invalid_token_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with pytest.raises(AuthenticationError):
            await get_current_user(fake_request(), bearer("abcdefghijklmnopqrstuvwxyz"))
        assert "Auth failure: invalid_token" in caplog.text
        assert "abcdefghijklmnop" not in str(
            [getattr(record, "auth_failure", None) for record in caplog.records]
        )

    @pytest.mark.asyncio
    async def test_dev_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "SKIP_AUTH", True)
        user = await get_current_user(fake_request(), None)
        assert user.user_id == DEV_USER_ID
