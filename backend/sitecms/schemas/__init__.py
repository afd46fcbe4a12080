"""
Pydantic schemas for the sitecms API.
"""
from sitecms.schemas.common import (
    BaseSchema,
    IDSchema,
    TimestampSchema,
    PaginatedResponse,
    MessageResponse,
)
from sitecms.schemas.site import (
    SiteCreate,
    SiteUpdate,
    SiteResponse,
    SiteErrorResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "IDSchema",
    "TimestampSchema",
    "PaginatedResponse",
    "MessageResponse",
    # Site
    "SiteCreate",
    "SiteUpdate",
    "SiteResponse",
    "SiteErrorResponse",
]
