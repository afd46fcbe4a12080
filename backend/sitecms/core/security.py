"""
Security utilities for the site administration API.

Administrators authenticate with bearer JWTs signed with ``JWT_SECRET``.
The ``role`` claim decides what the holder may do.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from sitecms.config import settings


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        return None


PERMISSIONS = {
    "admin": ["site:create", "site:read", "site:update", "site:delete"],
    "viewer": ["site:read"],
}


def check_permission(role: str | None, permission: str) -> bool:
    """Check if a role has a specific permission."""
    return permission in PERMISSIONS.get(role or "", [])
