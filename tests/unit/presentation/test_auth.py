"""Tests for bearer token handling."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from certtracker.presentation.middleware.auth import (
    DEV_USER_ID,
    AuthenticatedUser,
    CognitoTokenVerifier,
    JwksCache,
    get_current_user,
)

JWKS = {"keys": [{"kid": "key-1", "kty": "RSA", "alg": "RS256"}]}


def jwks_response(body=JWKS):
    response = MagicMock()
    response.json.return_value = body
    response.raise_for_status = MagicMock()
    return response


class TestAuthenticatedUser:
    def test_from_cognito_claims(self):
        user = AuthenticatedUser.from_claims(
            {
                "sub": "abc-123",
                "email": "alice@example.com",
                "cognito:username": "alice",
                "cognito:groups": ["admins", "engineers"],
            }
        )

        assert user.user_id == "abc-123"
        assert user.name == "alice"
        assert user.is_admin

    def test_without_groups_is_not_admin(self):
        assert not AuthenticatedUser.from_claims({"sub": "abc"}).is_admin


class TestJwksCache:
    @pytest.fixture
    def cache(self):
        return JwksCache("https://example.com/.well-known/jwks.json")

    @pytest.mark.asyncio
    async def test_fetches_keys_once(self, cache):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=jwks_response())
            mock_client.return_value.__aenter__.return_value.get = get

            assert (await cache.get("key-1"))["kty"] == "RSA"
            await cache.get("key-1")

        assert get.await_count == 1

    @pytest.mark.asyncio
    async def test_unknown_kid_refreshes_then_fails(self, cache):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=jwks_response())
            mock_client.return_value.__aenter__.return_value.get = get

            with pytest.raises(JWTError, match="Unknown signing key"):
                await cache.get("rotated")

        assert get.await_count == 2

    @pytest.mark.asyncio
    async def test_outage_keeps_cached_keys(self, cache):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=jwks_response()
            )
            await cache.refresh()

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("down")
            )
            await cache.refresh()

        assert (await cache.get("key-1"))["kid"] == "key-1"

    @pytest.mark.asyncio
    async def test_outage_without_cache_fails(self, cache):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("down")
            )

            with pytest.raises(JWTError):
                await cache.refresh()


class TestCognitoTokenVerifier:
    @pytest.fixture
    def verifier(self):
        return CognitoTokenVerifier("us-east-1", "us-east-1_pool", "client-id")

    def test_issuer_and_jwks_url(self, verifier):
        assert verifier.issuer == "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_pool"
        assert verifier.keys.url.endswith("/us-east-1_pool/.well-known/jwks.json")

    def test_requires_pool_and_client(self):
        with pytest.raises(ValueError):
            CognitoTokenVerifier("us-east-1", "", "client-id")

    @pytest.mark.asyncio
    async def test_rejects_symmetric_tokens(self, verifier):
        token = jwt.encode({"sub": "attacker"}, "shared-secret", algorithm="HS256")

        with pytest.raises(HTTPException) as exc:
            await verifier.verify(token)

        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_token_without_kid(self, verifier):
        with patch("jose.jwt.get_unverified_header", return_value={"alg": "RS256"}):
            with pytest.raises(HTTPException) as exc:
                await verifier.verify("header.payload.signature")

        assert exc.value.status_code == 401


class TestCurrentUser:
    @pytest.mark.asyncio
    async def test_no_token_means_anonymous(self):
        assert await get_current_user(None) is None

    @pytest.mark.asyncio
    async def test_development_identity_when_auth_disabled(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="anything")

        user = await get_current_user(credentials)

        assert user.user_id == DEV_USER_ID
        assert user.is_admin
