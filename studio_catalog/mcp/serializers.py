"""Model serialization for MCP responses."""

from typing import Any

from sqlalchemy import inspect

from studio_catalog.models.category import Category


def serialize_model(obj: Any) -> dict[str, Any]:
    """
    Serialize a SQLAlchemy model's column attributes to a dictionary.

    Args:
        obj: SQLAlchemy model instance

    Returns:
        Dictionary representation of the model
    """
    result: dict[str, Any] = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        if hasattr(value, "isoformat"):  # datetime
            result[attr.key] = value.isoformat()
        else:
            result[attr.key] = value
    if isinstance(obj, Category):
        result["section_id"] = obj.section_id
    return result
