"""Storage layer for Studio Catalog."""

from studio_catalog.storage.database import Database, get_db
from studio_catalog.storage.repositories import (
    CategoryRepository,
    ItemRepository,
    SectionCategoryRepository,
    SectionRepository,
)
from studio_catalog.storage.unit_of_work import UnitOfWork

__all__ = [
    "Database",
    "get_db",
    "SectionRepository",
    "CategoryRepository",
    "SectionCategoryRepository",
    "ItemRepository",
    "UnitOfWork",
]
