"""MCP tool schema definitions."""

from typing import Any

_NODE_TYPES = ["section", "category", "item"]


def get_tool_schemas() -> dict[str, dict[str, Any]]:
    """Get all MCP tool schemas."""
    return {
        "get_catalog": {
            "name": "get_catalog",
            "description": "Retrieve the full catalog tree (sections, categories, items) in position order",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name_pattern": {
                        "type": "string",
                        "description": "Optional case-insensitive filter on item names",
                    },
                },
            },
        },
        "create_section": {
            "name": "create_section",
            "description": "Create a section at the end of the catalog",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Section name"},
                    "description": {"type": "string", "description": "Optional description"},
                    "section_id": {
                        "type": "string",
                        "description": "Optional section ID (generates UUID if not provided)",
                    },
                },
                "required": ["name"],
            },
        },
        "create_category": {
            "name": "create_category",
            "description": "Create a category at the end of a section",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Category name"},
                    "section_id": {"type": "string", "description": "Owning section ID"},
                    "category_id": {
                        "type": "string",
                        "description": "Optional category ID (generates UUID if not provided)",
                    },
                },
                "required": ["name", "section_id"],
            },
        },
        "create_item": {
            "name": "create_item",
            "description": "Create an item at the end of a category",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Item name"},
                    "category_id": {"type": "string", "description": "Owning category ID"},
                    "description": {"type": "string", "description": "Optional description"},
                    "item_id": {
                        "type": "string",
                        "description": "Optional item ID (generates UUID if not provided)",
                    },
                },
                "required": ["name", "category_id"],
            },
        },
        "rename_section": {
            "name": "rename_section",
            "description": "Update a section's name and/or description",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "section_id": {"type": "string", "description": "Section ID"},
                    "name": {"type": "string", "description": "New name"},
                    "description": {"type": "string", "description": "New description"},
                },
                "required": ["section_id"],
            },
        },
        "rename_category": {
            "name": "rename_category",
            "description": "Rename a category",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": {"type": "string", "description": "Category ID"},
                    "name": {"type": "string", "description": "New name"},
                },
                "required": ["category_id", "name"],
            },
        },
        "rename_item": {
            "name": "rename_item",
            "description": "Update an item's name and/or description",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "item_id": {"type": "string", "description": "Item ID"},
                    "name": {"type": "string", "description": "New name"},
                    "description": {"type": "string", "description": "New description"},
                },
                "required": ["item_id"],
            },
        },
        "delete_section": {
            "name": "delete_section",
            "description": "Delete an empty section and renumber the remaining sections",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "section_id": {"type": "string", "description": "Section ID"},
                },
                "required": ["section_id"],
            },
        },
        "delete_category": {
            "name": "delete_category",
            "description": "Delete an empty category and renumber its section's categories",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": {"type": "string", "description": "Category ID"},
                },
                "required": ["category_id"],
            },
        },
        "delete_item": {
            "name": "delete_item",
            "description": "Delete an item and renumber its category's items",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "item_id": {"type": "string", "description": "Item ID"},
                },
                "required": ["item_id"],
            },
        },
        "reorder_container": {
            "name": "reorder_container",
            "description": "Set the full order of one container (all its members, in order)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "item_type": {"type": "string", "enum": _NODE_TYPES},
                    "parent_id": {
                        "type": "string",
                        "description": "Container parent ID ('root' or omitted for sections)",
                    },
                    "ordered_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Every member ID of the container in the desired order",
                    },
                },
                "required": ["item_type", "ordered_ids"],
            },
        },
        "move_catalog_node": {
            "name": "move_catalog_node",
            "description": (
                "Move a section, category or item to an index inside a (possibly different) "
                "container; positions on both sides are renumbered atomically"
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "item_id": {"type": "string", "description": "ID of the node being moved"},
                    "item_type": {"type": "string", "enum": _NODE_TYPES},
                    "new_parent_id": {
                        "type": "string",
                        "description": "Destination parent ID ('root' or omitted for sections)",
                    },
                    "new_index": {
                        "type": "integer",
                        "minimum": 0,
                        "description": "Zero-based index in the destination (clamped to the end)",
                    },
                },
                "required": ["item_id", "item_type", "new_index"],
            },
        },
    }
