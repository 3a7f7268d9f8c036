"""Catalog input validation logic."""

from typing import Any

from studio_catalog.exceptions import ValidationError


class CatalogValidator:
    """Validates catalog node data according to business rules."""

    # Validation constants
    NAME_MAX_LENGTH = 255
    ID_MAX_LENGTH = 255
    DESCRIPTION_MAX_LENGTH = 5000

    @staticmethod
    def validate_name(name: Any, field: str = "name") -> None:
        """
        Validate a node name.

        Raises:
            ValidationError: If name is invalid
        """
        if not isinstance(name, str):
            raise ValidationError("Name must be a string", field)
        if not name.strip():
            raise ValidationError("Name is required and cannot be empty", field)
        if len(name) > CatalogValidator.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Name must be at most {CatalogValidator.NAME_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_id(node_id: Any, field: str = "id") -> None:
        """
        Validate a node ID.

        Raises:
            ValidationError: If the ID is invalid
        """
        if not isinstance(node_id, str):
            raise ValidationError("ID must be a string", field)
        if not node_id or not node_id.strip():
            raise ValidationError("ID cannot be empty", field)
        if len(node_id) > CatalogValidator.ID_MAX_LENGTH:
            raise ValidationError(
                f"ID must be at most {CatalogValidator.ID_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_description(description: Any) -> None:
        """Validate an optional description."""
        if description is None:
            return
        if not isinstance(description, str):
            raise ValidationError("Description must be a string", "description")
        if len(description) > CatalogValidator.DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must be at most {CatalogValidator.DESCRIPTION_MAX_LENGTH} characters",
                "description",
            )

    @staticmethod
    def validate_id_list(ids: Any, field: str = "ordered_ids") -> None:
        """
        Validate a list of node IDs with no repeats.

        Raises:
            ValidationError: If the value is not a list of unique valid IDs
        """
        if not isinstance(ids, list):
            raise ValidationError("Expected a list of IDs", field)
        for node_id in ids:
            CatalogValidator.validate_id(node_id, field)
        if len(set(ids)) != len(ids):
            raise ValidationError("IDs must not repeat", field)
