"""Node kinds of the catalog hierarchy and their storage operations.

Every kind-specific detail of the reconciliation engine lives in
``KIND_OPS``; the engine itself never branches on the kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from studio_catalog.exceptions import NotFoundError, ValidationError
from studio_catalog.storage.unit_of_work import UnitOfWork

# Payload token callers use for "no parent" when moving sections.
ROOT_TOKEN = "root"

# Parent of every section. Kept distinct from any string so that a section
# whose ID happens to be "root" can never be mistaken for the root container.
ROOT = None


class NodeKind(str, Enum):
    """The three levels of the catalog tree."""

    SECTION = "section"
    CATEGORY = "category"
    ITEM = "item"


class Positioned(Protocol):
    id: str
    position: int


@dataclass(frozen=True)
class NodeKindOps:
    """Storage operations for one node kind."""

    label: str
    parent_label: Optional[str]
    fetch_siblings: Callable[[UnitOfWork, Optional[str], Optional[str], bool], Sequence[Positioned]]
    apply_position: Callable[[UnitOfWork, str, int], None]
    apply_parent: Callable[[UnitOfWork, str, str], None]
    current_parent: Callable[[UnitOfWork, str], Optional[str]]
    parent_exists: Callable[[UnitOfWork, Optional[str]], bool]


# Sections

def _fetch_sections(uow, parent_id, exclude_id, for_update):
    return uow.sections.list_ordered(exclude_id=exclude_id, for_update=for_update)


def _position_section(uow, node_id, position):
    section = uow.sections.get_by_id(node_id)
    if section is None:
        raise NotFoundError("Section", node_id)
    section.position = position


def _reparent_section(uow, node_id, new_parent_id):
    pass


def _section_parent(uow, node_id):
    if uow.sections.get_by_id(node_id) is None:
        raise NotFoundError("Section", node_id)
    return ROOT


def _section_parent_exists(uow, parent_id):
    return parent_id is ROOT


# Categories

def _fetch_categories(uow, parent_id, exclude_id, for_update):
    return uow.categories.list_by_section(parent_id, exclude_id=exclude_id, for_update=for_update)


def _position_category(uow, node_id, position):
    category = uow.categories.get_by_id(node_id)
    if category is None:
        raise NotFoundError("Category", node_id)
    category.position = position


def _reparent_category(uow, node_id, new_parent_id):
    if uow.section_categories.update_section(node_id, new_parent_id) is None:
        raise NotFoundError("SectionCategory", node_id)


def _category_parent(uow, node_id):
    if uow.categories.get_by_id(node_id) is None:
        raise NotFoundError("Category", node_id)
    link = uow.section_categories.get_by_category_id(node_id)
    if link is None:
        raise NotFoundError("SectionCategory", node_id)
    return link.section_id


def _category_parent_exists(uow, parent_id):
    return parent_id is not None and uow.sections.get_by_id(parent_id) is not None


# Items

def _fetch_items(uow, parent_id, exclude_id, for_update):
    return uow.items.list_by_category(parent_id, exclude_id=exclude_id, for_update=for_update)


def _position_item(uow, node_id, position):
    item = uow.items.get_by_id(node_id)
    if item is None:
        raise NotFoundError("Item", node_id)
    item.position = position


def _reparent_item(uow, node_id, new_parent_id):
    if uow.items.update_by_id(node_id, category_id=new_parent_id) is None:
        raise NotFoundError("Item", node_id)


def _item_parent(uow, node_id):
    item = uow.items.get_by_id(node_id)
    if item is None:
        raise NotFoundError("Item", node_id)
    return item.category_id


def _item_parent_exists(uow, parent_id):
    return parent_id is not None and uow.categories.get_by_id(parent_id) is not None


KIND_OPS: dict[NodeKind, NodeKindOps] = {
    NodeKind.SECTION: NodeKindOps(
        label="Section",
        parent_label=None,
        fetch_siblings=_fetch_sections,
        apply_position=_position_section,
        apply_parent=_reparent_section,
        current_parent=_section_parent,
        parent_exists=_section_parent_exists,
    ),
    NodeKind.CATEGORY: NodeKindOps(
        label="Category",
        parent_label="Section",
        fetch_siblings=_fetch_categories,
        apply_position=_position_category,
        apply_parent=_reparent_category,
        current_parent=_category_parent,
        parent_exists=_category_parent_exists,
    ),
    NodeKind.ITEM: NodeKindOps(
        label="Item",
        parent_label="Category",
        fetch_siblings=_fetch_items,
        apply_position=_position_item,
        apply_parent=_reparent_item,
        current_parent=_item_parent,
        parent_exists=_item_parent_exists,
    ),
}


def parse_kind(value: "NodeKind | str", field: str = "item_type") -> NodeKind:
    """Coerce a raw kind name into a NodeKind.

    Raises:
        ValidationError: If the value is not one of the known kinds
    """
    try:
        return NodeKind(value)
    except ValueError:
        allowed = ", ".join(kind.value for kind in NodeKind)
        raise ValidationError(f"Unknown node type {value!r} (expected one of: {allowed})", field) from None


def get_ops(kind: "NodeKind | str") -> NodeKindOps:
    """Get the storage operations for a node kind."""
    return KIND_OPS[parse_kind(kind)]


def normalize_parent(kind: NodeKind, parent_id: Optional[str], field: str = "parent_id") -> Optional[str]:
    """
    Turn a caller-supplied parent reference into the internal one.

    Sections accept only the root token (or nothing) and map to ``ROOT``.
    Categories and items need a concrete, non-blank parent ID.

    Raises:
        ValidationError: If the reference does not fit the node kind
    """
    if kind is NodeKind.SECTION:
        if parent_id is None or parent_id == ROOT_TOKEN:
            return ROOT
        raise ValidationError(
            f"Sections live at the root; parent must be '{ROOT_TOKEN}' or omitted", field
        )
    if not isinstance(parent_id, str) or not parent_id.strip():
        raise ValidationError(f"A parent ID is required for {kind.value} nodes", field)
    return parent_id
