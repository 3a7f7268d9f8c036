"""Position reconciliation engine: node kinds, move requests and the reconciler."""

from studio_catalog.services.positioning.node_kinds import (
    KIND_OPS,
    ROOT,
    ROOT_TOKEN,
    NodeKind,
    get_ops,
    normalize_parent,
    parse_kind,
)
from studio_catalog.services.positioning.reconciler import MoveOutcome, PositionReconciler
from studio_catalog.services.positioning.requests import MoveRequest, parse_move_request

__all__ = [
    "KIND_OPS",
    "ROOT",
    "ROOT_TOKEN",
    "NodeKind",
    "get_ops",
    "normalize_parent",
    "parse_kind",
    "MoveOutcome",
    "PositionReconciler",
    "MoveRequest",
    "parse_move_request",
]
