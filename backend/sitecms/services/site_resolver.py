"""
Site resolution: pick the site that serves a request's host and path.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.config import Settings, settings as default_settings
from sitecms.core.identity import is_blank
from sitecms.models.site import Site

logger = logging.getLogger(__name__)


@dataclass
class RoutingConfig:
    """Routing options that influence which site answers a request."""

    public_cms_path: str = "/"
    hostname_aliases: Mapping[str, Sequence[str]] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings = None) -> "RoutingConfig":
        settings = settings or default_settings
        return cls(
            public_cms_path=settings.PUBLIC_CMS_PATH or "/",
            hostname_aliases=dict(settings.HOSTNAME_ALIASES or {}),
        )


def real_host_from_aliases(host: str, aliases: Mapping[str, Sequence[str]] | None) -> str:
    """
    Map an alias hostname to its canonical hostname.

    Entries are checked in mapping order and the first one listing ``host``
    wins. Hosts that are not aliased come back unchanged.
    """
    for canonical, hosts in (aliases or {}).items():
        if host in hosts:
            return canonical
    return host


def strip_public_path(path: Optional[str], public_cms_path: Optional[str]) -> Optional[str]:
    """Make ``path`` relative to the mount point of the CMS."""
    if path is None or not public_cms_path or public_cms_path == "/":
        return path
    if path.startswith(public_cms_path):
        return path[len(public_cms_path):]
    return path


def select_site(candidates: Iterable[Site], path: Optional[str]) -> Optional[Site]:
    """
    Choose among sites sharing a hostname.

    A site without a path is kept as the fallback for the hostname while
    scanning continues. The first site whose path is a ``/``-anchored prefix
    of the request path wins immediately, even if a later candidate would
    match a longer prefix.
    """
    request_path = f"{(path or '').split('?')[0]}/"
    match = None
    for site in candidates:
        if is_blank(site.path):
            match = site
        elif request_path.startswith(f"/{site.path}/"):
            match = site
            break
    return match


class SiteResolver:
    """Resolves request host/path pairs to sites."""

    def __init__(self, db: AsyncSession, config: RoutingConfig | None = None):
        self.db = db
        self.config = config or RoutingConfig.from_settings()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Site.id)))
        return result.scalar()

    async def get_by_hostname(self, hostname: str) -> list[Site]:
        """All sites answering to ``hostname``, in storage order."""
        result = await self.db.execute(select(Site).where(Site.hostname == hostname))
        return list(result.scalars().all())

    async def find_site(self, host: str, path: str | None = None) -> Site | None:
        """Return the site that should handle ``host``/``path``, if any."""
        if await self.count() == 1:
            result = await self.db.execute(select(Site).limit(1))
            return result.scalar_one()

        path = strip_public_path(path, self.config.public_cms_path)
        hostname = real_host_from_aliases(host, self.config.hostname_aliases)
        if hostname != host:
            logger.debug(f"Host {host} is an alias of {hostname}")

        site = select_site(await self.get_by_hostname(hostname), path)
        if site is None:
            logger.debug(f"No site matches {host}{path or ''}")
        return site
