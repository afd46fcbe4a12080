"""
Content models owned by a site: layouts, pages, snippets, files and categories.
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from sitecms.models.base import Base, SiteBaseModel


class Layout(Base, SiteBaseModel):
    """Page layout, arranged in a tree per site."""

    __tablename__ = "layouts"
    __table_args__ = (
        UniqueConstraint("site_id", "identifier", name="uq_layouts_site_identifier"),
    )

    parent_id = Column(
        UUID(as_uuid=True),
        ForeignKey("layouts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    identifier = Column(String(255), nullable=False)
    label = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    site = relationship("Site", back_populates="layouts")
    parent = relationship("Layout", remote_side="Layout.id", back_populates="children")
    children = relationship("Layout", back_populates="parent")

    def __repr__(self) -> str:
        return f"<Layout {self.identifier}>"


class Page(Base, SiteBaseModel):
    """Content page, arranged in a tree per site."""

    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("site_id", "full_path", name="uq_pages_site_full_path"),
    )

    parent_id = Column(
        UUID(as_uuid=True),
        ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    layout_id = Column(
        UUID(as_uuid=True),
        ForeignKey("layouts.id", ondelete="SET NULL"),
        nullable=True,
    )
    label = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=True)
    full_path = Column(String(1024), nullable=False, default="/")
    content = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    site = relationship("Site", back_populates="pages")
    layout = relationship("Layout")
    parent = relationship("Page", remote_side="Page.id", back_populates="children")
    children = relationship("Page", back_populates="parent")

    def __repr__(self) -> str:
        return f"<Page {self.full_path}>"


class Snippet(Base, SiteBaseModel):
    """Reusable content fragment."""

    __tablename__ = "snippets"
    __table_args__ = (
        UniqueConstraint("site_id", "identifier", name="uq_snippets_site_identifier"),
    )

    identifier = Column(String(255), nullable=False)
    label = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    site = relationship("Site", back_populates="snippets")

    def __repr__(self) -> str:
        return f"<Snippet {self.identifier}>"


class File(Base, SiteBaseModel):
    """Uploaded file metadata."""

    __tablename__ = "files"

    label = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)

    site = relationship("Site", back_populates="files")

    def __repr__(self) -> str:
        return f"<File {self.file_name}>"


class Category(Base, SiteBaseModel):
    """Category used to group content of one type."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("site_id", "categorized_type", "label", name="uq_categories_site_type_label"),
    )

    label = Column(String(255), nullable=False)
    categorized_type = Column(String(100), nullable=False)

    site = relationship("Site", back_populates="categories")

    def __repr__(self) -> str:
        return f"<Category {self.label} ({self.categorized_type})>"
