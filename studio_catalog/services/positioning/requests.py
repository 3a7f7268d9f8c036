"""Move request model and payload parsing."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from studio_catalog.exceptions import ValidationError
from studio_catalog.services.positioning.node_kinds import ROOT, ROOT_TOKEN, NodeKind


class MoveRequest(BaseModel):
    """A validated drag-and-drop move.

    Attributes:
        item_id: ID of the node being moved.
        item_type: Kind of the node being moved.
        new_parent_id: Destination parent ID; ``"root"`` or omitted for sections.
        new_index: Requested zero-based index inside the destination container.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    item_id: str = Field(alias="itemId", min_length=1, max_length=255)
    item_type: NodeKind = Field(alias="itemType")
    new_parent_id: Optional[str] = Field(default=None, alias="newParentId", validate_default=True)
    new_index: int = Field(alias="newIndex", ge=0, strict=True)

    @field_validator("item_id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("item_id cannot be blank")
        return value

    @field_validator("new_parent_id")
    @classmethod
    def _parent_fits_kind(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        kind = info.data.get("item_type")
        if kind is None:
            # item_type already failed; its error is reported instead
            return value
        if kind is NodeKind.SECTION:
            if value not in (None, ROOT_TOKEN):
                raise ValueError(f"sections live at the root; use '{ROOT_TOKEN}' or omit it")
            return value
        if value is None or not value.strip():
            raise ValueError(f"a destination parent ID is required for {kind.value} moves")
        return value

    @property
    def parent_ref(self) -> Optional[str]:
        """Destination parent as the engine sees it (``ROOT`` for sections)."""
        if self.item_type is NodeKind.SECTION:
            return ROOT
        return self.new_parent_id


_FIELD_BY_ALIAS = {
    (info.alias or name): name for name, info in MoveRequest.model_fields.items()
}


def parse_move_request(payload: Any) -> MoveRequest:
    """
    Validate an untyped payload into a MoveRequest.

    Accepts snake_case or camelCase keys.

    Raises:
        ValidationError: Naming the first offending field
    """
    if isinstance(payload, MoveRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError("Move payload must be an object", "payload")

    try:
        return MoveRequest.model_validate(dict(payload))
    except PydanticValidationError as e:
        error = e.errors()[0]
        loc = error.get("loc") or ("payload",)
        field = _FIELD_BY_ALIAS.get(str(loc[0]), str(loc[0]))
        raise ValidationError(f"Invalid move request: {field}: {error['msg']}", field) from e
