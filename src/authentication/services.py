"""JWT sessions: issuing token pairs, verifying bearer tokens, and revocation.

Tokens are HS256 JWTs signed with ``SECRET_KEY``. Each one carries the
user's ``token_version`` as ``ver``, so bumping the version (logout-all)
invalidates every token minted before it. Single access tokens are revoked
by remembering their ``jti`` in Redis until they would have expired anyway.
"""

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import AuthenticationFailed

from core.redis_client import get_redis_client

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class BlocklistUnavailable(Exception):
    """Redis could not be reached to read or write the revocation list."""


def bearer_token(request) -> Optional[str]:
    """Return the raw bearer token from the ``Authorization`` header, if any."""
    header = request.META.get("HTTP_AUTHORIZATION", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip() or None


class TokenService:
    """Issue, verify, refresh and revoke JWT access/refresh pairs."""

    ALGORITHM = "HS256"
    REVOKED_KEY_PREFIX = "nuggets:revoked-jti:"

    @staticmethod
    def access_ttl() -> timedelta:
        return timedelta(minutes=settings.JWT_ACCESS_TTL_MINUTES)

    @staticmethod
    def refresh_ttl() -> timedelta:
        return timedelta(days=settings.JWT_REFRESH_TTL_DAYS)

    @classmethod
    def generate_tokens(cls, user) -> Tuple[str, str]:
        """Return a freshly signed ``(access, refresh)`` pair for ``user``."""
        issued_at = datetime.now(timezone.utc)
        return (
            cls._sign(user, "access", issued_at, cls.access_ttl()),
            cls._sign(user, "refresh", issued_at, cls.refresh_ttl()),
        )

    @classmethod
    def _sign(cls, user, token_type: str, issued_at: datetime, ttl: timedelta) -> str:
        claims: dict[str, Any] = {
            "sub": str(user.pk),
            "jti": uuid.uuid4().hex,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
            "role": user.role,
            "type": token_type,
            "ver": user.token_version,
        }
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=cls.ALGORITHM)

    @classmethod
    def decode_token(cls, token: str, expected_type: Optional[str] = None) -> dict[str, Any]:
        """Verify signature and expiry; optionally require a token ``type``."""
        try:
            claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[cls.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        if expected_type and claims.get("type") != expected_type:
            raise AuthenticationFailed("Invalid token type")
        return claims

    @staticmethod
    def user_for(claims: dict[str, Any]):
        """Return the active user the claims belong to, or None.

        A user whose ``token_version`` moved past the token's ``ver`` counts
        as missing.
        """
        user_id = claims.get("sub")
        if not user_id:
            return None
        user_model = get_user_model()
        try:
            user = user_model.objects.filter(pk=user_id, is_active=True).first()
        except (ValueError, DjangoValidationError):
            return None
        if user is None or claims.get("ver") != user.token_version:
            return None
        return user

    @classmethod
    def authenticate(cls, token: str):
        """Resolve an access token to its user or raise ``AuthenticationFailed``.

        Raises ``BlocklistUnavailable`` when revocation cannot be checked.
        """
        claims = cls.decode_token(token, expected_type="access")
        jti = claims.get("jti")
        if not jti or cls.is_token_blocked(jti):
            raise AuthenticationFailed("Token has been revoked")
        user = cls.user_for(claims)
        if user is None:
            raise AuthenticationFailed("User not found or inactive")
        return user

    @classmethod
    def refresh(cls, refresh_token: str):
        """Exchange a refresh token for ``(user, access, refresh)``."""
        claims = cls.decode_token(refresh_token, expected_type="refresh")
        user = cls.user_for(claims)
        if user is None:
            raise AuthenticationFailed("Invalid or revoked refresh token")
        access, new_refresh = cls.generate_tokens(user)
        return user, access, new_refresh

    @classmethod
    def block_token(cls, jti: str, exp: int) -> None:
        """Remember ``jti`` as revoked until its expiry timestamp."""
        ttl_seconds = max(1, exp - int(time.time()))
        try:
            get_redis_client().setex(f"{cls.REVOKED_KEY_PREFIX}{jti}", ttl_seconds, "1")
        except Exception as exc:  # pragma: no cover - network failure
            logger.error("Could not revoke token %s: %s", jti, exc)
            raise BlocklistUnavailable("Redis unavailable while revoking a token") from exc

    @classmethod
    def is_token_blocked(cls, jti: str) -> bool:
        try:
            return get_redis_client().get(f"{cls.REVOKED_KEY_PREFIX}{jti}") is not None
        except Exception as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while checking revocation") from exc

    @classmethod
    def revoke(cls, token: Optional[str]) -> None:
        """Revoke a presented access token; a missing token is a no-op."""
        if not token:
            return
        claims = cls.decode_token(token, expected_type="access")
        cls.block_token(claims["jti"], claims["exp"])


__all__ = ["TokenService", "BlocklistUnavailable", "bearer_token"]
