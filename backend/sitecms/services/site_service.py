"""
Site service for business logic.
"""
import logging
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core import identity
from sitecms.models.site import Site
from sitecms.schemas.site import SiteCreate, SiteUpdate
from sitecms.services.mirror_service import MirrorService, walk_tree

logger = logging.getLogger(__name__)

SiteErrors = dict[str, list[str]]

# Update fields where null means "leave unchanged"; identity fields are re-derived instead
NOT_NULL_FIELDS = ("locale", "is_mirrored")


class SiteService:
    """Service for site operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID) -> Site | None:
        """Get site by ID."""
        result = await self.db.execute(select(Site).where(Site.id == site_id))
        return result.scalar_one_or_none()

    async def list_sites(
        self,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
    ) -> tuple[list[Site], int]:
        """List sites with pagination."""
        query = select(Site)
        count_query = select(func.count(Site.id))

        if search:
            search_filter = (
                Site.label.ilike(f"%{search}%")
                | Site.identifier.ilike(f"%{search}%")
                | Site.hostname.ilike(f"%{search}%")
            )
            query = query.where(search_filter)
            count_query = count_query.where(search_filter)

        total_result = await self.db.execute(count_query)
        total = total_result.scalar()

        query = query.order_by(Site.hostname, Site.path)
        query = query.offset((page - 1) * per_page).limit(per_page)
        result = await self.db.execute(query)
        sites = result.scalars().all()

        return list(sites), total

    async def validate(self, site: Site) -> SiteErrors:
        """Format and presence checks plus uniqueness against the store."""
        errors = identity.validate(site)

        if "identifier" not in errors:
            query = select(Site.id).where(Site.identifier == site.identifier)
            if site.id is not None:
                query = query.where(Site.id != site.id)
            if (await self.db.execute(query)).first() is not None:
                errors.setdefault("identifier", []).append(identity.TAKEN)

        if "hostname" not in errors:
            query = select(Site.id).where(Site.hostname == site.hostname, Site.path == site.path)
            if site.id is not None:
                query = query.where(Site.id != site.id)
            if (await self.db.execute(query)).first() is not None:
                errors.setdefault("hostname", []).append(identity.TAKEN)

        return errors

    async def save(self, site: Site) -> SiteErrors:
        """
        Normalize, validate and persist a site.

        Returns field-level errors; when any are returned nothing was
        written and pending changes to ``site`` are discarded.
        """
        identity.normalize(site)
        is_new = site.id is None or site not in self.db

        errors = await self.validate(site)
        if errors:
            logger.warning(f"Rejected site {site.identifier!r}: {errors}")
            await self._discard(site, is_new)
            return errors

        identifier = site.identifier
        if is_new:
            self.db.add(site)
        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError:
            # Lost a race against a concurrent write of the same values
            logger.warning(f"Uniqueness conflict while saving site {identifier!r}")
            await self._discard(site, is_new)
            return {
                "identifier": [identity.TAKEN],
                "hostname": [identity.TAKEN],
            }

        await self.db.refresh(site)
        logger.info(f"Saved site {site.identifier} ({site.hostname}/{site.path})")
        return {}

    async def _discard(self, site: Site, is_new: bool) -> None:
        if is_new:
            if site in self.db:
                self.db.expunge(site)
        else:
            await self.db.refresh(site)

    async def create(self, data: SiteCreate) -> tuple[Site, SiteErrors]:
        """Create a new site."""
        site = Site(
            identifier=data.identifier,
            hostname=data.hostname,
            path=data.path,
            label=data.label,
            locale=data.locale,
            is_mirrored=data.is_mirrored,
        )
        errors = await self.save(site)
        return site, errors

    async def update(self, site_id: UUID, data: SiteUpdate) -> tuple[Site | None, SiteErrors]:
        """Update a site, syncing mirrors when it has just become mirrored."""
        site = await self.get_by_id(site_id)
        if not site:
            return None, {}

        was_mirrored = bool(site.is_mirrored)

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field in NOT_NULL_FIELDS:
                continue
            setattr(site, field, value)

        errors = await self.save(site)
        if errors:
            return site, errors

        if not was_mirrored and site.is_mirrored:
            await self.sync_mirrors(site)
        return site, {}

    async def delete(self, site_id: UUID) -> bool:
        """Delete a site together with everything it owns."""
        site = await self.get_by_id(site_id)
        if not site:
            return False

        await self.db.delete(site)
        await self.db.flush()
        logger.info(f"Deleted site {site.identifier}")
        return True

    async def sync_mirrors(self, site: Site) -> list[Site]:
        """
        Replicate structure between ``site`` and its mirror partner.

        The partner is the first other site flagged as mirrored. Returns the
        sites whose trees were walked.
        """
        mirror_service = MirrorService(self.db)
        partners = await mirror_service.mirrored_sites(exclude_site_id=site.id)
        partner = partners[0] if partners else None
        synced = [s for s in (site, partner) if s is not None]

        for source in synced:
            targets = [s for s in synced if s is not source]

            layouts = await mirror_service.load_layouts(source)
            for layout in walk_tree(layouts):
                await mirror_service.sync_mirror(layout, targets)

            pages = await mirror_service.load_pages(source)
            for page in walk_tree(pages):
                await mirror_service.sync_mirror(page, targets)

            for snippet in await mirror_service.load_snippets(source):
                await mirror_service.sync_mirror(snippet, targets)

        partner_identifier = partner.identifier if partner else None
        logger.info(f"Synced mirrors of site {site.identifier} with partner {partner_identifier}")
        return synced
