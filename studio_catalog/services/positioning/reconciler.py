"""Position reconciliation for drag-and-drop moves in the catalog tree."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from studio_catalog.exceptions import InvalidMoveError, NotFoundError
from studio_catalog.services.positioning.node_kinds import (
    NodeKind,
    Positioned,
    get_ops,
    parse_kind,
)
from studio_catalog.services.positioning.requests import MoveRequest
from studio_catalog.storage.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class MoveOutcome:
    """What a committed move did."""

    node_id: str
    node_type: NodeKind
    source_parent_id: Optional[str]
    destination_parent_id: Optional[str]
    cross_container: bool
    order: tuple[str, ...]


class PositionReconciler:
    """Keeps sibling positions contiguous (0..N-1) while nodes move around.

    The reconciler never commits. Callers run it inside one
    ``UnitOfWork.transaction()`` so that a whole move applies or rolls back
    as a unit.
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        """
        Initialize reconciler.

        Args:
            uow: Unit of work holding the session and repositories
            logger: Logger for trace events (defaults to this module's logger)
        """
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    def fetch_siblings(
        self,
        kind: NodeKind | str,
        parent_id: Optional[str],
        exclude_id: Optional[str] = None,
        for_update: bool = True,
    ) -> list[Positioned]:
        """
        Get the members of a container ordered by position.

        Args:
            kind: Node kind of the container members
            parent_id: Container parent (ignored for sections)
            exclude_id: Optional ID to leave out
            for_update: Lock the rows for the rest of the transaction

        Returns:
            Siblings in ascending position order
        """
        ops = get_ops(kind)
        return list(ops.fetch_siblings(self.uow, parent_id, exclude_id, for_update))

    def renumber(self, kind: NodeKind | str, ordered_ids: Sequence[str]) -> None:
        """Assign position = index to every ID, in list order."""
        ops = get_ops(kind)
        for index, node_id in enumerate(ordered_ids):
            ops.apply_position(self.uow, node_id, index)
        self.uow.flush()

    def close_gap(self, kind: NodeKind | str, parent_id: Optional[str], removed_id: str) -> list[str]:
        """
        Renumber a container after one of its members left it.

        Survivors keep their relative order.

        Returns:
            The survivors' IDs in their new order
        """
        kind = parse_kind(kind)
        siblings = self.fetch_siblings(kind, parent_id, exclude_id=removed_id)
        order = [sibling.id for sibling in siblings]

        self.logger.debug(
            "detach computed",
            extra={
                "node_type": kind.value,
                "parent_id": parent_id,
                "removed_id": removed_id,
                "sibling_count": len(order),
            },
        )

        self.renumber(kind, order)
        return order

    def insert_at(
        self,
        kind: NodeKind | str,
        parent_id: Optional[str],
        moving_id: str,
        target_index: int,
        is_cross_container: bool,
    ) -> list[str]:
        """
        Place a node into a container at an index and renumber the container.

        ``target_index`` must already be a validated non-negative integer.
        Indices past the end are clamped, so the node lands last.

        Returns:
            The container's IDs in their new order
        """
        kind = parse_kind(kind)
        if is_cross_container:
            # The moving node has no position in this container yet
            siblings = self.fetch_siblings(kind, parent_id)
        else:
            siblings = self.fetch_siblings(kind, parent_id, exclude_id=moving_id)

        order = [sibling.id for sibling in siblings]
        if not is_cross_container and moving_id in order:
            order.remove(moving_id)

        safe_index = min(target_index, len(order))
        order.insert(safe_index, moving_id)

        self.logger.debug(
            "insertion computed",
            extra={
                "node_type": kind.value,
                "parent_id": parent_id,
                "moving_id": moving_id,
                "requested_index": target_index,
                "inserted_at": safe_index,
                "cross_container": is_cross_container,
                "order": order,
            },
        )

        self.renumber(kind, order)
        return order

    def update_parent(self, kind: NodeKind | str, node_id: str, new_parent_id: Optional[str]) -> None:
        """
        Repoint a node's parent reference after a cross-container move.

        Sections have no parent, so this is a no-op for them.

        Raises:
            InvalidMoveError: If a category or item gets no usable parent ID
            NotFoundError: If the node (or its join record) is missing
        """
        kind = parse_kind(kind)
        if kind is not NodeKind.SECTION and (
            not isinstance(new_parent_id, str) or not new_parent_id.strip()
        ):
            raise InvalidMoveError(
                f"New parent ID for {kind.value} '{node_id}' cannot be null or blank",
                kind.value,
            )
        get_ops(kind).apply_parent(self.uow, node_id, new_parent_id)

    def move(self, request: MoveRequest) -> MoveOutcome:
        """
        Move a node to ``request.new_index`` inside its destination container.

        Steps: resolve current parent, classify the move, close the gap in the
        source container (cross-container only), insert into the destination,
        then relink the parent (cross-container only).

        Raises:
            NotFoundError: If the node, its join record or the destination parent is missing
            InvalidMoveError: If the destination parent reference is unusable
        """
        kind = request.item_type
        ops = get_ops(kind)

        current_parent = ops.current_parent(self.uow, request.item_id)
        new_parent = request.parent_ref
        if not ops.parent_exists(self.uow, new_parent):
            raise NotFoundError(ops.parent_label or ops.label, str(new_parent))

        is_cross_container = current_parent != new_parent

        self.logger.debug(
            "move classified",
            extra={
                "node_type": kind.value,
                "node_id": request.item_id,
                "source_parent_id": current_parent,
                "destination_parent_id": new_parent,
                "cross_container": is_cross_container,
            },
        )

        if is_cross_container and current_parent is not None:
            self.close_gap(kind, current_parent, request.item_id)

        order = self.insert_at(
            kind, new_parent, request.item_id, request.new_index, is_cross_container
        )

        if is_cross_container:
            self.update_parent(kind, request.item_id, new_parent)

        return MoveOutcome(
            node_id=request.item_id,
            node_type=kind,
            source_parent_id=current_parent,
            destination_parent_id=new_parent,
            cross_container=is_cross_container,
            order=tuple(order),
        )
