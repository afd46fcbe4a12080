"""
Mirror Service

Keeps the structure of mirrored sites in step: every layout, page and
snippet of one mirrored site gets a counterpart on the other one. Only the
structure is replicated (identifiers, paths, tree position); content stays
per site.
"""
import logging
from typing import Iterable, Optional, Sequence, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.models.content import Layout, Page, Snippet
from sitecms.models.site import Site

logger = logging.getLogger(__name__)

T = TypeVar("T", Layout, Page)
MirroredItem = Union[Layout, Page, Snippet]


def roots(items: Iterable[T]) -> list[T]:
    """Items without a parent, by position."""
    return sorted((i for i in items if i.parent_id is None), key=lambda i: i.position or 0)


def descendants(item: T, items: Iterable[T]) -> list[T]:
    """All descendants of ``item``, each parent listed before its children."""
    children_of: dict = {}
    for i in items:
        children_of.setdefault(i.parent_id, []).append(i)

    result = []

    def collect(parent_id) -> None:
        for child in sorted(children_of.get(parent_id, []), key=lambda i: i.position or 0):
            result.append(child)
            collect(child.id)

    collect(item.id)
    return result


def walk_tree(items: Sequence[T]) -> list[T]:
    """Roots first, followed by the descendants of each root."""
    top = roots(items)
    result = list(top)
    for root in top:
        result.extend(descendants(root, items))
    return result


class MirrorService:
    """Replicates layouts, pages and snippets onto mirrored sites."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def mirrored_sites(self, exclude_site_id=None) -> list[Site]:
        query = select(Site).where(Site.is_mirrored.is_(True))
        if exclude_site_id is not None:
            query = query.where(Site.id != exclude_site_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def load_layouts(self, site: Site) -> list[Layout]:
        return await self._load(Layout, site)

    async def load_pages(self, site: Site) -> list[Page]:
        return await self._load(Page, site)

    async def load_snippets(self, site: Site) -> list[Snippet]:
        return await self._load(Snippet, site)

    async def _load(self, model, site: Site) -> list:
        result = await self.db.execute(
            select(model)
            .where(model.site_id == site.id)
            .order_by(model.position)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def sync_mirror(
        self,
        item: MirroredItem,
        targets: Optional[Sequence[Site]] = None,
    ) -> list[MirroredItem]:
        """
        Create or update the counterpart of ``item`` on each target site.

        Targets default to every other mirrored site. Returns the mirrored
        counterparts.
        """
        if isinstance(item, Layout):
            sync = self._sync_layout
        elif isinstance(item, Page):
            sync = self._sync_page
        elif isinstance(item, Snippet):
            sync = self._sync_snippet
        else:
            raise TypeError(f"Cannot mirror {type(item).__name__}")

        if targets is None:
            targets = await self.mirrored_sites(exclude_site_id=item.site_id)

        mirrors = []
        for site in targets:
            if site.id == item.site_id:
                continue
            mirror = await sync(item, site)
            logger.debug(f"Mirrored {item!r} onto site {site.identifier}")
            mirrors.append(mirror)
        return mirrors

    async def _find(self, model, site: Site, **criteria):
        query = select(model).where(model.site_id == site.id)
        for name, value in criteria.items():
            query = query.where(getattr(model, name) == value)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _sync_layout(self, layout: Layout, site: Site) -> Layout:
        mirror = await self._find(Layout, site, identifier=layout.identifier)
        if mirror is None:
            mirror = Layout(site_id=site.id, identifier=layout.identifier, label=layout.label)
            self.db.add(mirror)

        parent = None
        if layout.parent_id is not None:
            source_parent = await self.db.get(Layout, layout.parent_id)
            parent = await self._find(Layout, site, identifier=source_parent.identifier)
        mirror.parent_id = parent.id if parent else None
        mirror.position = layout.position

        await self.db.flush()
        return mirror

    async def _sync_page(self, page: Page, site: Site) -> Page:
        parent = None
        if page.parent_id is not None:
            source_parent = await self.db.get(Page, page.parent_id)
            parent = await self._find(Page, site, full_path=source_parent.full_path)

        layout = None
        if page.layout_id is not None:
            source_layout = await self.db.get(Layout, page.layout_id)
            layout = await self._find(Layout, site, identifier=source_layout.identifier)

        mirror = await self._find(Page, site, full_path=page.full_path)
        if mirror is None:
            mirror = Page(site_id=site.id, label=page.label)
            self.db.add(mirror)
        elif not page.slug:
            mirror.label = page.label

        mirror.slug = page.slug
        mirror.parent_id = parent.id if parent else None
        mirror.full_path = page.full_path
        mirror.layout_id = layout.id if layout else None
        mirror.position = page.position

        await self.db.flush()
        return mirror

    async def _sync_snippet(self, snippet: Snippet, site: Site) -> Snippet:
        mirror = await self._find(Snippet, site, identifier=snippet.identifier)
        if mirror is None:
            mirror = Snippet(site_id=site.id, identifier=snippet.identifier, label=snippet.label)
            self.db.add(mirror)
        mirror.position = snippet.position

        await self.db.flush()
        return mirror
