"""Shared pytest fixtures and test utilities for Studio Catalog tests."""

import os
import tempfile
from dataclasses import dataclass
from typing import Generator

import pytest

from studio_catalog.models.section_category import SectionCategory
from studio_catalog.services.catalog_service import CatalogService
from studio_catalog.storage.database import Database, reset_db
from studio_catalog.storage.unit_of_work import UnitOfWork


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()

    yield database

    # Cleanup
    database.drop_tables()
    database.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def catalog_service(db_session):
    """Create a catalog service instance."""
    return CatalogService(db_session)


@dataclass
class SeededCatalog:
    """IDs of the seeded catalog.

    Sections:    sec-a, sec-b, sec-c
    sec-a:       cat-x, cat-y
    sec-b:       cat-z
    cat-x:       item-1, item-2, item-3
    cat-z:       item-j
    """

    service: CatalogService
    uow: UnitOfWork


@pytest.fixture
def seeded(catalog_service) -> SeededCatalog:
    """Create a small catalog with known IDs."""
    service = catalog_service
    for section_id in ("sec-a", "sec-b", "sec-c"):
        service.create_section(name=f"Section {section_id[-1].upper()}", section_id=section_id)

    service.create_category(name="Category X", section_id="sec-a", category_id="cat-x")
    service.create_category(name="Category Y", section_id="sec-a", category_id="cat-y")
    service.create_category(name="Category Z", section_id="sec-b", category_id="cat-z")

    for item_id in ("item-1", "item-2", "item-3"):
        service.create_item(name=f"Item {item_id[-1]}", category_id="cat-x", item_id=item_id)
    service.create_item(name="Item J", category_id="cat-z", item_id="item-j")

    return SeededCatalog(service=service, uow=service.uow)


class CatalogAssertions:
    """Helper functions for catalog state assertions."""

    @staticmethod
    def section_order(uow: UnitOfWork) -> list[tuple[str, int]]:
        return [(s.id, s.position) for s in uow.sections.list_ordered()]

    @staticmethod
    def category_order(uow: UnitOfWork, section_id: str) -> list[tuple[str, int]]:
        return [(c.id, c.position) for c in uow.categories.list_by_section(section_id)]

    @staticmethod
    def item_order(uow: UnitOfWork, category_id: str) -> list[tuple[str, int]]:
        return [(i.id, i.position) for i in uow.items.list_by_category(category_id)]

    @staticmethod
    def assert_contiguous(pairs: list[tuple[str, int]]) -> None:
        positions = sorted(position for _, position in pairs)
        assert positions == list(range(len(pairs))), f"positions not contiguous: {pairs}"

    @classmethod
    def assert_catalog_consistent(cls, uow: UnitOfWork) -> None:
        """Every container is numbered 0..N-1 and every child has exactly one parent."""
        sections = uow.sections.list_ordered()
        cls.assert_contiguous([(s.id, s.position) for s in sections])

        seen_categories: set[str] = set()
        for section in sections:
            categories = uow.categories.list_by_section(section.id)
            cls.assert_contiguous([(c.id, c.position) for c in categories])
            for category in categories:
                assert category.id not in seen_categories
                seen_categories.add(category.id)
                items = uow.items.list_by_category(category.id)
                cls.assert_contiguous([(i.id, i.position) for i in items])

        links = uow.session.query(SectionCategory).all()
        assert len(links) == len({link.category_id for link in links})


@pytest.fixture
def assertions():
    """Provide CatalogAssertions helpers."""
    return CatalogAssertions
