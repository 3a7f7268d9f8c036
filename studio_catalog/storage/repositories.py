"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from studio_catalog.models.category import Category
from studio_catalog.models.item import Item
from studio_catalog.models.section import Section
from studio_catalog.models.section_category import SectionCategory


def _apply_fields(obj: Any, fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        if hasattr(obj, key):
            setattr(obj, key, value)


class SectionRepository:
    """Repository for root-level section operations."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, section: Section) -> Section:
        """Create a new section."""
        self.session.add(section)
        self.session.flush()
        return section

    def get_by_id(self, section_id: str) -> Optional[Section]:
        """Get section by ID."""
        return self.session.get(Section, section_id)

    def list_ordered(
        self, exclude_id: Optional[str] = None, for_update: bool = False
    ) -> list[Section]:
        """
        Get all sections ordered by position.

        Args:
            exclude_id: Optional section ID to leave out of the result
            for_update: Lock the selected rows until the transaction ends

        Returns:
            List of sections in position order
        """
        stmt = select(Section)
        if exclude_id is not None:
            stmt = stmt.where(Section.id != exclude_id)
        stmt = stmt.order_by(Section.position, Section.id)
        if for_update:
            stmt = stmt.with_for_update()
        # Overwrite positions held by this session with the committed values
        stmt = stmt.execution_options(populate_existing=True)
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Count all sections."""
        return self.session.scalar(select(func.count(Section.id))) or 0

    def update_by_id(self, section_id: str, **kwargs: Any) -> Optional[Section]:
        """Update a section by ID with field updates.

        Returns:
            Updated section if found, None otherwise
        """
        section = self.get_by_id(section_id)
        if section is None:
            return None
        _apply_fields(section, kwargs)
        self.session.flush()
        return section

    def delete(self, section_id: str) -> bool:
        """Delete a section by ID."""
        section = self.get_by_id(section_id)
        if section:
            self.session.delete(section)
            self.session.flush()
            return True
        return False


class CategoryRepository:
    """Repository for category operations. Categories reach sections via the join table."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, category: Category) -> Category:
        """Create a new category."""
        self.session.add(category)
        self.session.flush()
        return category

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        return self.session.get(Category, category_id)

    def _by_section(self, section_id: str) -> Select:
        return (
            select(Category)
            .join(SectionCategory, SectionCategory.category_id == Category.id)
            .where(SectionCategory.section_id == section_id)
        )

    def list_by_section(
        self,
        section_id: str,
        exclude_id: Optional[str] = None,
        for_update: bool = False,
    ) -> list[Category]:
        """
        Get the categories joined to a section, ordered by position.

        Args:
            section_id: Owning section ID
            exclude_id: Optional category ID to leave out of the result
            for_update: Lock the selected category rows until the transaction ends

        Returns:
            List of categories in position order
        """
        stmt = self._by_section(section_id)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        stmt = stmt.order_by(Category.position, Category.id)
        if for_update:
            stmt = stmt.with_for_update(of=Category)
        # Overwrite positions held by this session with the committed values
        stmt = stmt.execution_options(populate_existing=True)
        return list(self.session.scalars(stmt))

    def count_by_section(self, section_id: str) -> int:
        """Count the categories joined to a section."""
        stmt = select(func.count(SectionCategory.id)).where(
            SectionCategory.section_id == section_id
        )
        return self.session.scalar(stmt) or 0

    def update_by_id(self, category_id: str, **kwargs: Any) -> Optional[Category]:
        """Update a category by ID with field updates.

        Returns:
            Updated category if found, None otherwise
        """
        category = self.get_by_id(category_id)
        if category is None:
            return None
        _apply_fields(category, kwargs)
        self.session.flush()
        return category

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID (its join record goes with it)."""
        category = self.get_by_id(category_id)
        if category:
            self.session.delete(category)
            self.session.flush()
            return True
        return False


class SectionCategoryRepository:
    """Repository for the category -> section join records."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, link: SectionCategory) -> SectionCategory:
        """Create a new join record."""
        self.session.add(link)
        self.session.flush()
        return link

    def get_by_category_id(self, category_id: str) -> Optional[SectionCategory]:
        """Get the join record of a category (unique per category)."""
        stmt = select(SectionCategory).where(SectionCategory.category_id == category_id)
        return self.session.scalar(stmt)

    def update_section(self, category_id: str, section_id: str) -> Optional[SectionCategory]:
        """Point a category's join record at another section.

        Returns:
            Updated join record if found, None otherwise
        """
        link = self.get_by_category_id(category_id)
        if link is None:
            return None
        link.section_id = section_id
        self.session.flush()
        return link


class ItemRepository:
    """Repository for item operations."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, item: Item) -> Item:
        """Create a new item."""
        self.session.add(item)
        self.session.flush()
        return item

    def get_by_id(self, item_id: str) -> Optional[Item]:
        """Get item by ID."""
        return self.session.get(Item, item_id)

    def list_by_category(
        self,
        category_id: str,
        exclude_id: Optional[str] = None,
        for_update: bool = False,
    ) -> list[Item]:
        """
        Get the items of a category ordered by position.

        Args:
            category_id: Owning category ID
            exclude_id: Optional item ID to leave out of the result
            for_update: Lock the selected rows until the transaction ends

        Returns:
            List of items in position order
        """
        stmt = select(Item).where(Item.category_id == category_id)
        if exclude_id is not None:
            stmt = stmt.where(Item.id != exclude_id)
        stmt = stmt.order_by(Item.position, Item.id)
        if for_update:
            stmt = stmt.with_for_update()
        # Overwrite positions held by this session with the committed values
        stmt = stmt.execution_options(populate_existing=True)
        return list(self.session.scalars(stmt))

    def count_by_category(self, category_id: str) -> int:
        """Count the items of a category."""
        stmt = select(func.count(Item.id)).where(Item.category_id == category_id)
        return self.session.scalar(stmt) or 0

    def update_by_id(self, item_id: str, **kwargs: Any) -> Optional[Item]:
        """Update an item by ID with field updates.

        Returns:
            Updated item if found, None otherwise
        """
        item = self.get_by_id(item_id)
        if item is None:
            return None
        _apply_fields(item, kwargs)
        self.session.flush()
        return item

    def delete(self, item_id: str) -> bool:
        """Delete an item by ID."""
        item = self.get_by_id(item_id)
        if item:
            self.session.delete(item)
            self.session.flush()
            return True
        return False
