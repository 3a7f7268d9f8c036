"""MCP (Model Context Protocol) server for Studio Catalog.

Exposes catalog management and drag-and-drop reordering to MCP clients
over stdio (JSON-RPC 2.0).
"""

import asyncio
import logging

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp import McpError
from mcp.types import ErrorData, TextContent, Tool

from studio_catalog.logging_config import setup_logging
from studio_catalog.storage.database import get_db
from studio_catalog.mcp.tool_handlers import call_tool_handler
from studio_catalog.mcp.tool_schemas import get_tool_schemas

logger = logging.getLogger(__name__)

SERVER_NAME = "studio-catalog"
SERVER_VERSION = "0.1.0"

# Initialize MCP server
app = Server(SERVER_NAME)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    return [Tool(**schema) for schema in get_tool_schemas().values()]


@app.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
    """Handle tool calls."""
    if arguments is None:
        arguments = {}

    db = get_db()

    try:
        # Handlers manage their own database sessions
        return await call_tool_handler(name, arguments, db)
    except McpError:
        # Handlers already convert exceptions to McpError
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling tool {name}")
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )


async def main():
    """Main entry point for MCP server."""
    get_db().create_tables()
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=SERVER_VERSION,
                capabilities=app.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def run() -> None:
    """Console script entry point."""
    setup_logging()
    asyncio.run(main())


if __name__ == "__main__":
    run()
