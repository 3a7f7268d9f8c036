"""MCP tool handlers for executing tool operations."""

import json
from typing import Any, Awaitable, Callable

from mcp import McpError
from mcp.types import ErrorData, TextContent

from studio_catalog.exceptions import (
    DatabaseError,
    DuplicateError,
    InvalidMoveError,
    NonEmptyContainerError,
    NotFoundError,
    ValidationError,
)
from studio_catalog.mcp.serializers import serialize_model
from studio_catalog.services.catalog_service import CatalogService


def _text(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


# Read handlers
async def handle_get_catalog(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_catalog tool."""
    with db.session() as session:
        service = CatalogService(session)
        catalog = service.get_catalog(name_pattern=arguments.get("name_pattern"))
        return _text({"sections": catalog})


# Create handlers
async def handle_create_section(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_section tool."""
    with db.session() as session:
        service = CatalogService(session)
        section = service.create_section(
            name=arguments["name"],
            description=arguments.get("description"),
            section_id=arguments.get("section_id"),
        )
        return _text(serialize_model(section))


async def handle_create_category(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_category tool."""
    with db.session() as session:
        service = CatalogService(session)
        category = service.create_category(
            name=arguments["name"],
            section_id=arguments["section_id"],
            category_id=arguments.get("category_id"),
        )
        return _text(serialize_model(category))


async def handle_create_item(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_item tool."""
    with db.session() as session:
        service = CatalogService(session)
        item = service.create_item(
            name=arguments["name"],
            category_id=arguments["category_id"],
            description=arguments.get("description"),
            item_id=arguments.get("item_id"),
        )
        return _text(serialize_model(item))


# Rename handlers
async def handle_rename_section(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle rename_section tool."""
    with db.session() as session:
        service = CatalogService(session)
        section = service.rename_section(
            section_id=arguments["section_id"],
            name=arguments.get("name"),
            description=arguments.get("description"),
        )
        return _text(serialize_model(section))


async def handle_rename_category(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle rename_category tool."""
    with db.session() as session:
        service = CatalogService(session)
        category = service.rename_category(
            category_id=arguments["category_id"],
            name=arguments["name"],
        )
        return _text(serialize_model(category))


async def handle_rename_item(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle rename_item tool."""
    with db.session() as session:
        service = CatalogService(session)
        item = service.rename_item(
            item_id=arguments["item_id"],
            name=arguments.get("name"),
            description=arguments.get("description"),
        )
        return _text(serialize_model(item))


# Delete handlers
async def handle_delete_section(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_section tool."""
    with db.session() as session:
        service = CatalogService(session)
        deleted = service.delete_section(section_id=arguments["section_id"])
        return _text({"deleted": deleted})


async def handle_delete_category(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_category tool."""
    with db.session() as session:
        service = CatalogService(session)
        deleted = service.delete_category(category_id=arguments["category_id"])
        return _text({"deleted": deleted})


async def handle_delete_item(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_item tool."""
    with db.session() as session:
        service = CatalogService(session)
        deleted = service.delete_item(item_id=arguments["item_id"])
        return _text({"deleted": deleted})


# Ordering handlers
async def handle_reorder_container(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle reorder_container tool."""
    with db.session() as session:
        service = CatalogService(session)
        order = service.reorder_container(
            item_type=arguments["item_type"],
            parent_id=arguments.get("parent_id"),
            ordered_ids=arguments["ordered_ids"],
        )
        return _text({"order": order})


async def handle_move_catalog_node(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle move_catalog_node tool. Arguments are passed through as the move payload."""
    with db.session() as session:
        service = CatalogService(session)
        return _text(service.move_node(arguments))


# Tool handler registry
TOOL_HANDLERS: dict[str, Callable[[dict[str, Any], Any], Awaitable[list[TextContent]]]] = {
    "get_catalog": handle_get_catalog,
    "create_section": handle_create_section,
    "create_category": handle_create_category,
    "create_item": handle_create_item,
    "rename_section": handle_rename_section,
    "rename_category": handle_rename_category,
    "rename_item": handle_rename_item,
    "delete_section": handle_delete_section,
    "delete_category": handle_delete_category,
    "delete_item": handle_delete_item,
    "reorder_container": handle_reorder_container,
    "move_catalog_node": handle_move_catalog_node,
}


async def call_tool_handler(tool_name: str, arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """
    Call the appropriate tool handler.

    Args:
        tool_name: Name of the tool to call
        arguments: Tool arguments
        db: Database instance

    Returns:
        List of TextContent with tool execution result

    Raises:
        McpError: If tool name is unknown or handler raises an error
    """
    if tool_name not in TOOL_HANDLERS:
        raise McpError(
            ErrorData(
                code=-32601,  # Method not found
                message=f"Unknown tool: {tool_name}",
            )
        )

    handler = TOOL_HANDLERS[tool_name]

    try:
        return await handler(arguments, db)
    except McpError:
        # Re-raise MCP errors as-is
        raise
    except KeyError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Missing required argument: {e.args[0]}",
            )
        )
    except (ValidationError, InvalidMoveError) as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Validation error: {str(e)}",
            )
        )
    except NotFoundError as e:
        raise McpError(
            ErrorData(
                code=-32001,  # Custom error: not found
                message=str(e),
            )
        )
    except DuplicateError as e:
        raise McpError(
            ErrorData(
                code=-32002,  # Custom error: duplicate
                message=str(e),
            )
        )
    except NonEmptyContainerError as e:
        raise McpError(
            ErrorData(
                code=-32003,  # Custom error: container not empty
                message=str(e),
            )
        )
    except DatabaseError as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Database error: {str(e)}",
            )
        )
    except Exception as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )
