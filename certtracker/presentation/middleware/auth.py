"""Caller identity for the HTTP surface.

Engineers authenticate with Cognito-issued RS256 bearer tokens; members of
the admin group may assign certifications, decide approvals, trigger reminder
passes and publish bounties. With ``AUTH_ENABLED=false`` any bearer token
maps to a development admin so the API can be exercised locally.
"""

import time
from dataclasses import dataclass, field
from typing import Annotated, Any

import httpx
import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwk, jwt

from ...config import settings

logger = structlog.get_logger()

bearer = HTTPBearer(auto_error=False)

ALLOWED_ALGORITHMS = ["RS256"]
REQUIRED_CLAIMS = ("sub", "exp", "iat", "iss")
GROUPS_CLAIM = "cognito:groups"

DEV_USER_ID = "dev-user"


@dataclass
class AuthenticatedUser:
    sub: str
    email: str | None = None
    name: str | None = None
    groups: list[str] = field(default_factory=list)

    @property
    def user_id(self) -> str:
        return self.sub

    @property
    def is_admin(self) -> bool:
        return settings.admin_group in self.groups

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedUser":
        return cls(
            sub=claims["sub"],
            email=claims.get("email"),
            name=claims.get("name") or claims.get("cognito:username"),
            groups=list(claims.get(GROUPS_CLAIM, [])),
        )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class JwksCache:
    """Signing keys of one user pool, keyed by ``kid``."""

    def __init__(self, url: str, ttl_seconds: int = 3600) -> None:
        self.url = url
        self._ttl = ttl_seconds
        self._keys: dict[str, dict[str, Any]] = {}
        self._fetched_at = 0.0

    @property
    def stale(self) -> bool:
        return not self._keys or time.monotonic() - self._fetched_at > self._ttl

    async def refresh(self) -> None:
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            if self._keys:
                # Keep serving the last known keys through an outage.
                logger.warning("JWKS refresh failed, keeping cached keys", error=str(e))
                return
            raise JWTError("Unable to fetch signing keys") from e

        self._keys = {k["kid"]: k for k in response.json().get("keys", []) if "kid" in k}
        self._fetched_at = time.monotonic()
        logger.info("JWKS refreshed", keys=len(self._keys))

    async def get(self, kid: str) -> dict[str, Any]:
        if self.stale:
            await self.refresh()
        if kid not in self._keys:
            # Rotated pool key.
            await self.refresh()
        try:
            return self._keys[kid]
        except KeyError:
            raise JWTError(f"Unknown signing key: {kid}") from None


class CognitoTokenVerifier:
    def __init__(self, region: str, user_pool_id: str, client_id: str) -> None:
        if not user_pool_id or not client_id:
            raise ValueError("Cognito user pool id and client id are required")
        self.issuer = f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
        self.audience = client_id
        self.keys = JwksCache(f"{self.issuer}/.well-known/jwks.json")

    async def verify(self, token: str) -> AuthenticatedUser:
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") not in ALLOWED_ALGORITHMS:
                raise JWTError(f"Algorithm {header.get('alg')} not allowed")
            if not header.get("kid"):
                raise JWTError("Token missing kid header")

            key = jwk.construct(await self.keys.get(header["kid"]))
            claims = jwt.decode(
                token,
                key,
                algorithms=ALLOWED_ALGORITHMS,
                audience=self.audience,
                issuer=self.issuer,
                options={"require_exp": True, "require_iat": True},
            )
            missing = [c for c in REQUIRED_CLAIMS if not claims.get(c)]
            if missing:
                raise JWTError(f"Missing required claims: {missing}")
        except JWTError as e:
            logger.warning("Bearer token rejected", error=str(e))
            raise _unauthorized("Invalid or expired token") from e

        return AuthenticatedUser.from_claims(claims)


_verifier: CognitoTokenVerifier | None = None


def get_token_verifier() -> CognitoTokenVerifier:
    global _verifier
    if _verifier is None:
        if not settings.cognito_user_pool_id or not settings.cognito_client_id:
            raise RuntimeError("AUTH_ENABLED is set but Cognito settings are missing")
        _verifier = CognitoTokenVerifier(
            region=settings.cognito_region,
            user_pool_id=settings.cognito_user_pool_id,
            client_id=settings.cognito_client_id,
        )
    return _verifier


def development_user() -> AuthenticatedUser:
    return AuthenticatedUser(
        sub=DEV_USER_ID,
        email="dev@example.com",
        name="Development User",
        groups=[settings.admin_group],
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> AuthenticatedUser | None:
    """The caller's identity, or None when no bearer token was sent."""
    if credentials is None or not credentials.credentials:
        return None
    if not settings.auth_enabled:
        return development_user()
    return await get_token_verifier().verify(credentials.credentials)


async def require_auth(
    user: Annotated[AuthenticatedUser | None, Depends(get_current_user)],
) -> AuthenticatedUser:
    if user is None:
        raise _unauthorized("Authentication required")
    return user


def require_groups(*required_groups: str):
    """Restrict an endpoint to members of any of the given groups."""

    async def check_groups(
        user: Annotated[AuthenticatedUser, Depends(require_auth)],
    ) -> AuthenticatedUser:
        if not any(g in user.groups for g in required_groups):
            logger.warning(
                "Access denied: missing required group",
                user_id=user.user_id,
                required_groups=required_groups,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of groups: {', '.join(required_groups)}",
            )
        return user

    return check_groups


require_admin = require_groups(settings.admin_group)
