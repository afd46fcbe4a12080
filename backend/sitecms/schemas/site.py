"""
Site schemas.
"""
from pydantic import Field

from sitecms.schemas.common import BaseSchema, IDSchema, TimestampSchema


class SiteCreate(BaseSchema):
    """Create site request. Blank identity fields are derived on save."""

    identifier: str | None = Field(default=None, max_length=255)
    hostname: str | None = Field(default=None, max_length=255)
    path: str | None = Field(default=None, max_length=255)
    label: str | None = Field(default=None, max_length=255)
    locale: str = Field(default="en", max_length=16)
    is_mirrored: bool = False


class SiteUpdate(BaseSchema):
    """Update site request."""

    identifier: str | None = Field(default=None, max_length=255)
    hostname: str | None = Field(default=None, max_length=255)
    path: str | None = Field(default=None, max_length=255)
    label: str | None = Field(default=None, max_length=255)
    locale: str | None = Field(default=None, max_length=16)
    is_mirrored: bool | None = None


class SiteResponse(IDSchema, TimestampSchema):
    """Site response."""

    identifier: str
    label: str
    hostname: str
    path: str
    locale: str
    is_mirrored: bool
    url: str | None = None


class SiteErrorResponse(BaseSchema):
    """Field-level validation errors of a rejected save."""

    errors: dict[str, list[str]]
