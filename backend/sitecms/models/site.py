"""
Site model: one tenant of the CMS, mounted at a hostname and path.
"""
import re

from sqlalchemy import Boolean, Column, String, UniqueConstraint
from sqlalchemy.orm import relationship

from sitecms.models.base import Base, BaseModel


class Site(Base, BaseModel):
    """Site model representing a hostname/path-scoped tenant."""

    __tablename__ = "sites"
    __table_args__ = (
        UniqueConstraint("hostname", "path", name="uq_sites_hostname_path"),
    )

    identifier = Column(String(255), unique=True, nullable=False, index=True)
    label = Column(String(255), nullable=False)
    hostname = Column(String(255), nullable=False, index=True)
    path = Column(String(255), nullable=False, default="")
    locale = Column(String(16), nullable=False, default="en")
    is_mirrored = Column(Boolean, nullable=False, default=False, index=True)

    # Relationships
    layouts = relationship("Layout", back_populates="site", cascade="all, delete-orphan")
    pages = relationship("Page", back_populates="site", cascade="all, delete-orphan")
    snippets = relationship("Snippet", back_populates="site", cascade="all, delete-orphan")
    files = relationship("File", back_populates="site", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="site", cascade="all, delete-orphan")

    def url(self, public_cms_path: str | None = "/", relative: bool = False) -> str | None:
        """
        Build the canonical base URL of the site.

        Returns a protocol-relative ``//hostname/path`` string, or only the
        path portion (``None`` when empty) if ``relative`` is set.
        """
        segments = ["/", public_cms_path or "/", self.path]
        path = "/".join(s for s in segments if s is not None)
        path = re.sub(r"/{2,}", "/", path)
        if path.endswith("/"):
            path = path[:-1]

        if relative:
            return path or None
        return f"//{self.hostname}{path}"

    def __repr__(self) -> str:
        return f"<Site {self.identifier} ({self.hostname}/{self.path})>"
