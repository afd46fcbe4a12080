"""
Core utilities for sitecms.
"""
from sitecms.core.security import (
    create_access_token,
    decode_token,
    check_permission,
    PERMISSIONS,
)
from sitecms.core.identity import normalize, validate

__all__ = [
    "create_access_token",
    "decode_token",
    "check_permission",
    "PERMISSIONS",
    "normalize",
    "validate",
]
