"""
SQLAlchemy models for sitecms.
"""
from sitecms.models.base import Base, BaseModel, SiteBaseModel
from sitecms.models.site import Site
from sitecms.models.content import Category, File, Layout, Page, Snippet

__all__ = [
    "Base",
    "BaseModel",
    "SiteBaseModel",
    "Site",
    "Layout",
    "Page",
    "Snippet",
    "File",
    "Category",
]
