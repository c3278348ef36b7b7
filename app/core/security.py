"""Bearer-token authentication and role-based route authorization.

Routes depend on :func:`require_roles` and only ever see a :class:`Principal`.
Which identity provider issued the token, and which claim carries the role,
is the business of the :class:`TokenVerifier` in use.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, Protocol

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import Settings, settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.logging import get_logger

logger = get_logger("security")

bearer_scheme = HTTPBearer(auto_error=False)

JWKS_CACHE_TTL = 3600  # 1 hour


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    subject: str
    role: str | None
    claims: dict[str, Any] = field(default_factory=dict)


class TokenVerifier(Protocol):
    """Validates a bearer token and extracts the caller."""

    def verify(self, token: str) -> Principal: ...


def _principal_from_claims(claims: dict[str, Any], role_claim: str) -> Principal:
    subject = claims.get("sub")
    if not subject:
        logger.warning("JWT token missing 'sub' claim")
        raise AuthenticationError("Invalid token: missing subject")
    role = claims.get(role_claim)
    return Principal(
        subject=subject,
        role=role.lower() if isinstance(role, str) else None,
        claims=claims,
    )


class SharedSecretTokenVerifier:
    """HS256 tokens signed with the application secret (local development and tests)."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", role_claim: str = "custom:role") -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.role_claim = role_claim

    def verify(self, token: str) -> Principal:
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise AuthenticationError("Token has expired") from None
        except JWTError as exc:
            logger.warning("JWT validation failed: %s", exc)
            raise AuthenticationError("Invalid token") from None
        return _principal_from_claims(claims, self.role_claim)


class CognitoTokenVerifier:
    """RS256 tokens issued by a Cognito user pool, checked against its JWKS.

    The key set is cached for an hour and refetched early when a token names
    a key ID the cached set does not contain (the pool rotated its keys).
    """

    def __init__(
        self,
        issuer: str,
        audience: str | None = None,
        role_claim: str = "custom:role",
        fetch_jwks: Callable[[], dict[str, Any]] | None = None,
    ) -> None:
        self.issuer = issuer
        self.audience = audience
        self.role_claim = role_claim
        self.jwks_url = f"{issuer}/.well-known/jwks.json"
        self._fetch_jwks = fetch_jwks or self._download_jwks
        self._jwks: dict[str, Any] = {}
        self._jwks_time: float = 0

    def _download_jwks(self) -> dict[str, Any]:
        response = httpx.get(self.jwks_url, timeout=10)
        response.raise_for_status()
        logger.debug("Fetched JWKS from %s", self.jwks_url)
        return response.json()

    def _keys(self, refresh: bool = False) -> list[dict[str, Any]]:
        expired = time.time() - self._jwks_time >= JWKS_CACHE_TTL
        if refresh or expired or not self._jwks:
            try:
                self._jwks = self._fetch_jwks()
                self._jwks_time = time.time()
            except httpx.HTTPError as exc:
                # Keep serving the stale key set while the pool is unreachable
                logger.warning("Failed to fetch JWKS: %s", exc)
                if not self._jwks:
                    raise AuthenticationError("Signing keys unavailable") from None
        return self._jwks.get("keys", [])

    def _signing_key(self, token: str) -> dict[str, Any]:
        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except JWTError:
            raise AuthenticationError("Invalid token") from None
        for refresh in (False, True):
            for key in self._keys(refresh=refresh):
                if key.get("kid") == kid:
                    return key
        logger.warning("No signing key for kid=%s", kid)
        raise AuthenticationError("Invalid token")

    def verify(self, token: str) -> Principal:
        key = self._signing_key(token)
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except ExpiredSignatureError:
            logger.warning("Cognito token has expired")
            raise AuthenticationError("Token has expired") from None
        except JWTError as exc:
            logger.warning("Cognito token validation failed: %s", exc)
            raise AuthenticationError("Invalid token") from None
        return _principal_from_claims(claims, self.role_claim)


def build_token_verifier(config: Settings) -> TokenVerifier:
    """Cognito when a user pool is configured, the shared secret otherwise."""
    issuer = config.cognito_issuer
    if issuer:
        return CognitoTokenVerifier(
            issuer=issuer,
            audience=config.COGNITO_APP_CLIENT_ID,
            role_claim=config.ROLE_CLAIM,
        )
    return SharedSecretTokenVerifier(
        secret_key=config.SECRET_KEY,
        algorithm=config.ALGORITHM,
        role_claim=config.ROLE_CLAIM,
    )


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Dependency returning the process-wide token verifier."""
    return build_token_verifier(settings)


def create_access_token(
    subject: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Mint a shared-secret token, for local development and tests."""
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=30))
    payload = {"sub": subject, settings.ROLE_CLAIM: role, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def require_roles(*roles: str):
    """Dependency factory: the caller must hold one of ``roles``.

    Usage:
        @router.post("", dependencies=[Depends(require_roles("manager"))])
        def create(...): ...
    """
    allowed = {role.lower() for role in roles}

    def dependency(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        verifier: TokenVerifier = Depends(get_token_verifier),
    ) -> Principal:
        if credentials is None:
            raise AuthenticationError("Unauthorized")
        principal = verifier.verify(credentials.credentials)
        if principal.role not in allowed:
            raise AuthorizationError("Access Denied")
        return principal

    return dependency
