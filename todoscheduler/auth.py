"""Password-derived JWT tokens."""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TOKEN_LIFETIME = timedelta(hours=8)
_ALGORITHMS = ["HS256", "HS384", "HS512"]


class AuthError(Exception):
    """Raised when a token does not authorise the request."""


def password_hash(password: str) -> str:
    """Hex SHA-256 digest of the password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def jwt_secret(password: str) -> bytes:
    """Signing key derived from the password."""
    return hashlib.sha256(password.encode("utf-8")).digest()


def _utc_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def issue_token(password: str, now: datetime | None = None) -> str:
    """Create a signed token valid for eight hours from ``now``."""
    issued = _utc_now(now)
    claims = {
        "hash": password_hash(password),
        "iat": int(issued.timestamp()),
        "exp": int((issued + TOKEN_LIFETIME).timestamp()),
    }
    return jwt.encode(claims, jwt_secret(password), algorithm="HS256")


def verify_token(token: str, password: str, now: datetime | None = None) -> dict[str, Any]:
    """Check a token against the password and return its claims."""
    try:
        claims = jwt.decode(
            token,
            jwt_secret(password),
            algorithms=_ALGORITHMS,
            options={"verify_exp": False, "verify_nbf": False, "verify_iat": False},
        )
    except jwt.PyJWTError as exc:
        raise AuthError("Auth required") from exc

    current = int(_utc_now(now).timestamp())
    nbf = claims.get("nbf")
    if isinstance(nbf, (int, float)) and not isinstance(nbf, bool) and current < nbf:
        raise AuthError("Auth required")

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        raise AuthError("Token expired")
    if current >= exp:
        raise AuthError("Auth required")

    if claims.get("hash") != password_hash(password):
        raise AuthError("Auth required")
    return claims