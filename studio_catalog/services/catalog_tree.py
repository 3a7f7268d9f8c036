"""Catalog tree read model."""

from typing import Any

from studio_catalog.models.category import Category
from studio_catalog.models.item import Item
from studio_catalog.models.section import Section
from studio_catalog.storage.unit_of_work import UnitOfWork


class CatalogTreeBuilder:
    """Builds the nested Section -> Category -> Item view of the catalog."""

    def __init__(self, uow: UnitOfWork):
        """
        Initialize tree builder with a unit of work.

        Args:
            uow: Unit of work for data access
        """
        self.uow = uow

    def build(self, name_pattern: str | None = None) -> list[dict[str, Any]]:
        """
        Build the full catalog, every level in position order.

        Args:
            name_pattern: Optional case-insensitive substring; keeps only items
                          whose name matches (and the containers holding them)

        Returns:
            List of section dicts with nested ``categories`` and ``items``
        """
        tree = []
        for section in self.uow.sections.list_ordered():
            categories = []
            for category in self.uow.categories.list_by_section(section.id):
                items = self.uow.items.list_by_category(category.id)
                if name_pattern:
                    items = [i for i in items if name_pattern.lower() in i.name.lower()]
                    if not items:
                        continue
                node = self.category_node(category, section.id)
                node["items"] = [self.item_node(item) for item in items]
                categories.append(node)
            if name_pattern and not categories:
                continue
            node = self.section_node(section)
            node["categories"] = categories
            tree.append(node)
        return tree

    @staticmethod
    def section_node(section: Section) -> dict[str, Any]:
        return {
            "id": section.id,
            "name": section.name,
            "description": section.description,
            "position": section.position,
        }

    @staticmethod
    def category_node(category: Category, section_id: str | None) -> dict[str, Any]:
        return {
            "id": category.id,
            "name": category.name,
            "position": category.position,
            "section_id": section_id,
        }

    @staticmethod
    def item_node(item: Item) -> dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "position": item.position,
            "category_id": item.category_id,
        }
