"""Catalog service layer for business logic and validation."""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy.orm import Session

from studio_catalog.exceptions import (
    CatalogServiceError,
    DatabaseError,
    DuplicateError,
    NonEmptyContainerError,
    NotFoundError,
    ValidationError,
)
from studio_catalog.models.category import Category
from studio_catalog.models.item import Item
from studio_catalog.models.section import Section
from studio_catalog.models.section_category import SectionCategory
from studio_catalog.services.catalog_tree import CatalogTreeBuilder
from studio_catalog.services.positioning import (
    ROOT,
    NodeKind,
    PositionReconciler,
    get_ops,
    normalize_parent,
    parse_kind,
    parse_move_request,
)
from studio_catalog.services.validation import CatalogValidator
from studio_catalog.storage.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the Section -> Category -> Item catalog.

    Every public write runs in exactly one transaction: it either commits
    completely or leaves the catalog untouched.
    """

    def __init__(self, session: Session, reconciler_logger: logging.Logger | None = None):
        """
        Initialize catalog service with database session.

        Args:
            session: SQLAlchemy database session
            reconciler_logger: Optional logger for position reconciliation trace events
        """
        self.session = session
        self.uow = UnitOfWork(session)
        self.validator = CatalogValidator()
        self.tree_builder = CatalogTreeBuilder(self.uow)
        self.reconciler = PositionReconciler(self.uow, logger=reconciler_logger)

    @contextmanager
    def _transaction(self, action: str) -> Generator[UnitOfWork, None, None]:
        """Run one atomic unit; storage failures surface as DatabaseError."""
        try:
            with self.uow.transaction() as uow:
                yield uow
        except CatalogServiceError:
            raise
        except Exception as e:
            logger.exception("Catalog transaction failed", extra={"action": action})
            raise DatabaseError(f"Failed to {action}: {str(e)}", e) from e

    def _new_id(self, explicit_id: str | None, field: str) -> str:
        if explicit_id is None:
            return str(uuid.uuid4())
        self.validator.validate_id(explicit_id, field)
        return explicit_id

    # Reads

    def get_catalog(self, name_pattern: str | None = None) -> list[dict[str, Any]]:
        """
        Get the full catalog tree ordered by position at every level.

        Args:
            name_pattern: Optional case-insensitive item name filter

        Returns:
            Nested list of section dicts

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return self.tree_builder.build(name_pattern=name_pattern)
        except Exception as e:
            raise DatabaseError(f"Failed to get catalog: {str(e)}", e) from e

    def get_section(self, section_id: str) -> Section:
        """
        Get section by ID.

        Raises:
            ValidationError: If section_id is invalid
            NotFoundError: If section is not found
        """
        self.validator.validate_id(section_id, "section_id")
        section = self.uow.sections.get_by_id(section_id)
        if section is None:
            raise NotFoundError("Section", section_id)
        return section

    def get_category(self, category_id: str) -> Category:
        """
        Get category by ID.

        Raises:
            ValidationError: If category_id is invalid
            NotFoundError: If category is not found
        """
        self.validator.validate_id(category_id, "category_id")
        category = self.uow.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def get_item(self, item_id: str) -> Item:
        """
        Get item by ID.

        Raises:
            ValidationError: If item_id is invalid
            NotFoundError: If item is not found
        """
        self.validator.validate_id(item_id, "item_id")
        item = self.uow.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    # Creation (always appended to the end of the container)

    def create_section(
        self,
        name: str,
        description: str | None = None,
        section_id: str | None = None,
    ) -> Section:
        """
        Create a new section at the end of the root list.

        Args:
            name: Section name (required, non-empty)
            description: Optional description
            section_id: Optional section ID. If not provided, generates a UUID.

        Returns:
            Created section

        Raises:
            ValidationError: If name, description or ID is invalid
            DuplicateError: If a section with the same ID already exists
            DatabaseError: If database operation fails
        """
        self.validator.validate_name(name)
        self.validator.validate_description(description)
        section_id = self._new_id(section_id, "section_id")

        with self._transaction("create section") as uow:
            if uow.sections.get_by_id(section_id) is not None:
                raise DuplicateError("Section", "id", section_id)
            section = Section(
                id=section_id,
                name=name,
                description=description,
                position=uow.sections.count(),
            )
            uow.sections.create(section)
        return section

    def create_category(
        self,
        name: str,
        section_id: str,
        category_id: str | None = None,
    ) -> Category:
        """
        Create a new category at the end of a section.

        Args:
            name: Category name (required, non-empty)
            section_id: Owning section ID (required)
            category_id: Optional category ID. If not provided, generates a UUID.

        Returns:
            Created category

        Raises:
            ValidationError: If name or IDs are invalid
            NotFoundError: If the section is not found
            DuplicateError: If a category with the same ID already exists
            DatabaseError: If database operation fails
        """
        self.validator.validate_name(name)
        self.validator.validate_id(section_id, "section_id")
        category_id = self._new_id(category_id, "category_id")

        with self._transaction("create category") as uow:
            if uow.sections.get_by_id(section_id) is None:
                raise NotFoundError("Section", section_id)
            if uow.categories.get_by_id(category_id) is not None:
                raise DuplicateError("Category", "id", category_id)

            category = Category(
                id=category_id,
                name=name,
                position=uow.categories.count_by_section(section_id),
            )
            uow.categories.create(category)
            uow.section_categories.create(
                SectionCategory(
                    id=str(uuid.uuid4()),
                    section_id=section_id,
                    category_id=category_id,
                )
            )
        return category

    def create_item(
        self,
        name: str,
        category_id: str,
        description: str | None = None,
        item_id: str | None = None,
    ) -> Item:
        """
        Create a new item at the end of a category.

        Args:
            name: Item name (required, non-empty)
            category_id: Owning category ID (required)
            description: Optional description
            item_id: Optional item ID. If not provided, generates a UUID.

        Returns:
            Created item

        Raises:
            ValidationError: If name, description or IDs are invalid
            NotFoundError: If the category is not found
            DuplicateError: If an item with the same ID already exists
            DatabaseError: If database operation fails
        """
        self.validator.validate_name(name)
        self.validator.validate_description(description)
        self.validator.validate_id(category_id, "category_id")
        item_id = self._new_id(item_id, "item_id")

        with self._transaction("create item") as uow:
            if uow.categories.get_by_id(category_id) is None:
                raise NotFoundError("Category", category_id)
            if uow.items.get_by_id(item_id) is not None:
                raise DuplicateError("Item", "id", item_id)

            item = Item(
                id=item_id,
                category_id=category_id,
                name=name,
                description=description,
                position=uow.items.count_by_category(category_id),
            )
            uow.items.create(item)
        return item

    # Renames

    def rename_section(
        self, section_id: str, name: str | None = None, description: str | None = None
    ) -> Section:
        """
        Update section name and/or description.

        Raises:
            ValidationError: If section_id, name or description is invalid
            NotFoundError: If section is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(section_id, "section_id")
        if name is not None:
            self.validator.validate_name(name)
        self.validator.validate_description(description)

        fields = {"name": name, "description": description}
        with self._transaction("rename section") as uow:
            section = uow.sections.update_by_id(
                section_id, **{k: v for k, v in fields.items() if v is not None}
            )
            if section is None:
                raise NotFoundError("Section", section_id)
        return section

    def rename_category(self, category_id: str, name: str) -> Category:
        """
        Rename a category.

        Raises:
            ValidationError: If category_id or name is invalid
            NotFoundError: If category is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(category_id, "category_id")
        self.validator.validate_name(name)

        with self._transaction("rename category") as uow:
            category = uow.categories.update_by_id(category_id, name=name)
            if category is None:
                raise NotFoundError("Category", category_id)
        return category

    def rename_item(
        self, item_id: str, name: str | None = None, description: str | None = None
    ) -> Item:
        """
        Update item name and/or description.

        Raises:
            ValidationError: If item_id, name or description is invalid
            NotFoundError: If item is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(item_id, "item_id")
        if name is not None:
            self.validator.validate_name(name)
        self.validator.validate_description(description)

        fields = {"name": name, "description": description}
        with self._transaction("rename item") as uow:
            item = uow.items.update_by_id(
                item_id, **{k: v for k, v in fields.items() if v is not None}
            )
            if item is None:
                raise NotFoundError("Item", item_id)
        return item

    # Deletion (non-empty containers are rejected, survivors renumbered)

    def delete_section(self, section_id: str) -> bool:
        """
        Delete an empty section and renumber the remaining sections.

        Raises:
            ValidationError: If section_id is invalid
            NotFoundError: If section is not found
            NonEmptyContainerError: If the section still owns categories
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(section_id, "section_id")

        with self._transaction("delete section") as uow:
            if uow.sections.get_by_id(section_id) is None:
                raise NotFoundError("Section", section_id)
            child_count = uow.categories.count_by_section(section_id)
            if child_count > 0:
                raise NonEmptyContainerError("Section", section_id, child_count)

            uow.sections.delete(section_id)
            self.reconciler.close_gap(NodeKind.SECTION, ROOT, section_id)
        return True

    def delete_category(self, category_id: str) -> bool:
        """
        Delete an empty category and renumber its former section's categories.

        Raises:
            ValidationError: If category_id is invalid
            NotFoundError: If category is not found
            NonEmptyContainerError: If the category still owns items
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(category_id, "category_id")

        with self._transaction("delete category") as uow:
            if uow.categories.get_by_id(category_id) is None:
                raise NotFoundError("Category", category_id)
            child_count = uow.items.count_by_category(category_id)
            if child_count > 0:
                raise NonEmptyContainerError("Category", category_id, child_count)

            # Read the owning section before the join record goes away
            link = uow.section_categories.get_by_category_id(category_id)
            former_section_id = link.section_id if link else None

            uow.categories.delete(category_id)
            if former_section_id is not None:
                self.reconciler.close_gap(NodeKind.CATEGORY, former_section_id, category_id)
        return True

    def delete_item(self, item_id: str) -> bool:
        """
        Delete an item and renumber its former category's items.

        Raises:
            ValidationError: If item_id is invalid
            NotFoundError: If item is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(item_id, "item_id")

        with self._transaction("delete item") as uow:
            item = uow.items.get_by_id(item_id)
            if item is None:
                raise NotFoundError("Item", item_id)
            former_category_id = item.category_id

            uow.items.delete(item_id)
            self.reconciler.close_gap(NodeKind.ITEM, former_category_id, item_id)
        return True

    # Reordering

    def reorder_container(
        self,
        item_type: NodeKind | str,
        parent_id: str | None,
        ordered_ids: list[str],
    ) -> list[str]:
        """
        Rewrite the order of a whole container in one step.

        Args:
            item_type: Kind of the container members
            parent_id: Container parent ("root" or None for sections)
            ordered_ids: Every member of the container, in the desired order

        Returns:
            The container's IDs in their new order

        Raises:
            ValidationError: If the list is not exactly the container's members
            NotFoundError: If the parent is not found
            DatabaseError: If database operation fails
        """
        kind = parse_kind(item_type)
        parent = normalize_parent(kind, parent_id)
        self.validator.validate_id_list(ordered_ids)

        with self._transaction("reorder container"):
            ops = get_ops(kind)
            if not ops.parent_exists(self.uow, parent):
                raise NotFoundError(ops.parent_label or ops.label, str(parent))

            current = {s.id for s in self.reconciler.fetch_siblings(kind, parent)}
            if set(ordered_ids) != current:
                raise ValidationError(
                    "ordered_ids must list exactly the members of the container",
                    "ordered_ids",
                )
            self.reconciler.renumber(kind, ordered_ids)
        return list(ordered_ids)

    def move_node(self, payload: Any) -> dict[str, bool]:
        """
        Apply one drag-and-drop move atomically.

        Args:
            payload: Untyped move payload with item_id, item_type, new_parent_id
                     and new_index (camelCase keys are accepted too)

        Returns:
            ``{"success": True}`` once the move is committed

        Raises:
            ValidationError: If the payload is malformed (names the field)
            NotFoundError: If the node, its join record or the destination is missing
            InvalidMoveError: If the destination parent reference is unusable
            DatabaseError: If the transaction fails; nothing is persisted
        """
        request = parse_move_request(payload)

        with self._transaction("move catalog node"):
            outcome = self.reconciler.move(request)

        logger.info(
            "Catalog node moved",
            extra={
                "node_type": outcome.node_type.value,
                "node_id": outcome.node_id,
                "cross_container": outcome.cross_container,
                "position": outcome.order.index(outcome.node_id),
            },
        )
        return {"success": True}
