"""
FastAPI dependencies for authentication, database and site resolution.
"""
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from sitecms.core.security import check_permission, decode_token
from sitecms.database import get_db
from sitecms.models.site import Site
from sitecms.services.site_resolver import RoutingConfig, SiteResolver

security = HTTPBearer()


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> dict[str, Any]:
    """Get the claims of the bearer token."""
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise UnauthorizedError("Could not validate credentials")
    return payload


def require_permission(permission: str):
    """Dependency factory for permission checking."""

    async def permission_checker(
        principal: Annotated[dict[str, Any], Depends(get_current_principal)],
    ) -> dict[str, Any]:
        if not check_permission(principal.get("role"), permission):
            raise ForbiddenError(f"Permission denied: {permission}")
        return principal

    return permission_checker


def get_routing_config() -> RoutingConfig:
    """Routing options from settings."""
    return RoutingConfig.from_settings()


async def get_site_resolver(
    db: Annotated[AsyncSession, Depends(get_db)],
    config: Annotated[RoutingConfig, Depends(get_routing_config)],
) -> SiteResolver:
    return SiteResolver(db, config)


async def get_current_site(
    request: Request,
    resolver: Annotated[SiteResolver, Depends(get_site_resolver)],
    path: str | None = None,
) -> Site:
    """
    Resolve the site serving this request.

    The host comes from the ``Host`` header; the path defaults to the
    request path unless given as a query parameter.
    """
    host = request.headers.get("host", "")
    site = await resolver.find_site(host, path if path is not None else request.url.path)
    if site is None:
        raise NotFoundError("Site")
    request.state.site = site
    return site


# Common dependencies
CurrentSite = Annotated[Site, Depends(get_current_site)]
SiteReader = Annotated[dict[str, Any], Depends(require_permission("site:read"))]
