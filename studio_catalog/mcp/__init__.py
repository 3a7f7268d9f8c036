"""MCP module with tool schemas, handlers, and serializers."""

from studio_catalog.mcp.tool_handlers import call_tool_handler, TOOL_HANDLERS
from studio_catalog.mcp.tool_schemas import get_tool_schemas
from studio_catalog.mcp.serializers import serialize_model

__all__ = [
    "call_tool_handler",
    "TOOL_HANDLERS",
    "get_tool_schemas",
    "serialize_model",
]
