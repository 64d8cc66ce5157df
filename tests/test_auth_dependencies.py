"""
Tests for bearer-token verification.

Tokens are signed with a throwaway P-256 key; the JWKS lookup is patched to
hand back its public half.
"""

import time
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from fastapi import HTTPException
from jwt.exceptions import PyJWKClientError

from beeconta.auth.dependencies import decode_access_token, get_authenticated_user
from beeconta.config import settings

PRIVATE_KEY = ec.generate_private_key(ec.SECP256R1())


def _token(**overrides) -> str:
    claims = {
        "sub": "user-u",
        "aud": "authenticated",
        "iss": f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1",
        "exp": int(time.time()) + 3600,
    }
    claims.update(overrides)
    return jwt.encode({k: v for k, v in claims.items() if v is not None}, PRIVATE_KEY, algorithm="ES256")


@pytest.fixture
def mock_jwks():
    jwks_client = MagicMock()
    jwks_client.get_signing_key_from_jwt.return_value = SimpleNamespace(key=PRIVATE_KEY.public_key())
    with patch("beeconta.auth.dependencies.get_jwks_client", return_value=jwks_client):
        yield jwks_client


class TestDecodeAccessToken:

    def test_valid_token(self, mock_jwks):
        payload = decode_access_token(_token())

        assert payload["sub"] == "user-u"

    @pytest.mark.parametrize("overrides,error", [
        ({"exp": int(time.time()) - 60}, "token_expired"),
        ({"aud": "anon"}, "invalid_token"),
        ({"iss": "https://evil.example.com/auth/v1"}, "invalid_token"),
    ])
    def test_rejected_claims(self, overrides, error, mock_jwks):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(_token(**overrides))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == error

    def test_foreign_signature(self, mock_jwks):
        other_key = ec.generate_private_key(ec.SECP256R1())
        token = jwt.encode(
            {"sub": "user-u", "aud": "authenticated", "exp": int(time.time()) + 60},
            other_key,
            algorithm="ES256",
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)

        assert exc_info.value.detail["error"] == "invalid_token"

    def test_jwks_unavailable(self, mock_jwks):
        mock_jwks.get_signing_key_from_jwt.side_effect = PyJWKClientError("no keys")

        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(_token())

        assert exc_info.value.detail["error"] == "jwks_error"


class TestGetAuthenticatedUser:

    @pytest.mark.asyncio
    async def test_returns_user_and_token(self, mock_jwks):
        token = _token()

        user = await get_authenticated_user(f"Bearer {token}")

        assert user.user_id == "user-u"
        assert user.access_token == token

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer"])
    async def test_malformed_header(self, header):
        with pytest.raises(HTTPException) as exc_info:
            await get_authenticated_user(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_missing_subject(self, mock_jwks):
        with pytest.raises(HTTPException) as exc_info:
            await get_authenticated_user(f"Bearer {_token(sub=None)}")

        assert exc_info.value.detail["details"] == "Invalid token: missing user ID"
