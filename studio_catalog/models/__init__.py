"""Database models for Studio Catalog."""

from studio_catalog.models.section import Section
from studio_catalog.models.category import Category
from studio_catalog.models.section_category import SectionCategory
from studio_catalog.models.item import Item

__all__ = ["Section", "Category", "SectionCategory", "Item"]
