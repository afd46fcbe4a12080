"""
Site management and resolution endpoints.
"""
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.deps import (
    CurrentSite,
    SiteReader,
    get_db,
    get_routing_config,
    require_permission,
)
from sitecms.core.exceptions import NotFoundError, SiteValidationError
from sitecms.models.site import Site
from sitecms.schemas.common import MessageResponse, PaginatedResponse
from sitecms.schemas.site import SiteCreate, SiteErrorResponse, SiteResponse, SiteUpdate
from sitecms.services.site_resolver import RoutingConfig
from sitecms.services.site_service import SiteService

router = APIRouter(prefix="/sites", tags=["Sites"])

Config = Annotated[RoutingConfig, Depends(get_routing_config)]
ERROR_RESPONSES = {status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": SiteErrorResponse}}


def to_response(site: Site, config: RoutingConfig) -> SiteResponse:
    # Site.url is a method, so columns are passed explicitly
    return SiteResponse.model_validate(
        {**site.to_dict(), "url": site.url(config.public_cms_path)}
    )


@router.get("", response_model=PaginatedResponse[SiteResponse])
async def list_sites(
    _: SiteReader,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: Config,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100),
    search: str | None = None,
):
    """List all sites."""
    service = SiteService(db)
    sites, total = await service.list_sites(page, per_page, search)

    return PaginatedResponse.create(
        items=[to_response(s, config) for s in sites],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/current", response_model=SiteResponse)
async def get_current_site(site: CurrentSite, config: Config):
    """Resolve the site serving the request's host and path."""
    return to_response(site, config)


@router.post(
    "",
    response_model=SiteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_site(
    data: SiteCreate,
    _: Annotated[dict[str, Any], Depends(require_permission("site:create"))],
    db: Annotated[AsyncSession, Depends(get_db)],
    config: Config,
):
    """Create a new site. Blank identity fields are derived from one another."""
    service = SiteService(db)
    site, errors = await service.create(data)
    if errors:
        raise SiteValidationError(errors)

    return to_response(site, config)


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(
    site_id: UUID,
    _: SiteReader,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: Config,
):
    """Get a site by ID."""
    service = SiteService(db)
    site = await service.get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")

    return to_response(site, config)


@router.patch("/{site_id}", response_model=SiteResponse, responses=ERROR_RESPONSES)
async def update_site(
    site_id: UUID,
    data: SiteUpdate,
    _: Annotated[dict[str, Any], Depends(require_permission("site:update"))],
    db: Annotated[AsyncSession, Depends(get_db)],
    config: Config,
):
    """Update a site."""
    service = SiteService(db)
    site, errors = await service.update(site_id, data)
    if not site:
        raise NotFoundError("Site")
    if errors:
        raise SiteValidationError(errors)

    return to_response(site, config)


@router.delete("/{site_id}", response_model=MessageResponse)
async def delete_site(
    site_id: UUID,
    _: Annotated[dict[str, Any], Depends(require_permission("site:delete"))],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a site and all of its layouts, pages, snippets, files and categories."""
    service = SiteService(db)
    deleted = await service.delete(site_id)
    if not deleted:
        raise NotFoundError("Site")

    return MessageResponse(message="Site deleted successfully")
