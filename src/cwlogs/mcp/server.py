"""MCP server for cwlogs - lets AI assistants browse CloudWatch Logs."""

import asyncio
import logging
import sys
from typing import Any, Optional

import anyio
import mcp.server.stdio
import mcp.types as types
from mcp.server import Server
from mcp.shared.exceptions import McpError

from ..cloudwatch.client import get_cloudwatch_client
from ..config import ConfigError, require_config
from ..dispatch import Dispatcher
from ..errors import DispatchError, ErrorKind
from ..logging_setup import configure_logging
from ..operations import list_operations

SERVER_NAME = "cloudwatch-server"
SERVER_VERSION = "0.1.0"

logger = logging.getLogger(__name__)

_ERROR_CODES = {
    ErrorKind.UNKNOWN_OPERATION: types.METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: types.INVALID_PARAMS,
    ErrorKind.BACKEND_ERROR: types.INTERNAL_ERROR,
}


def tool_definitions() -> list[types.Tool]:
    """Describe every catalog operation as an MCP tool."""
    return [
        types.Tool(
            name=op.name,
            description=op.description,
            inputSchema=op.input_schema(),
        )
        for op in list_operations()
    ]


def to_mcp_error(error: DispatchError) -> McpError:
    return McpError(
        types.ErrorData(
            code=_ERROR_CODES[error.kind],
            message=error.message,
            data=error.to_envelope(),
        )
    )


async def call_tool(
    dispatcher: Dispatcher, name: str, arguments: Optional[dict[str, Any]]
) -> types.CallToolResult:
    """Run one tool call through the dispatcher.

    Failures surface as JSON-RPC errors rather than tool results.
    """
    try:
        envelope = await anyio.to_thread.run_sync(dispatcher.dispatch, name, arguments or {})
    except DispatchError as e:
        logger.debug("Tool %s failed: %s", name, e.to_envelope())
        raise to_mcp_error(e) from e

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item["text"]) for item in envelope.content],
    )


def create_server(dispatcher: Dispatcher) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available MCP tools."""
        return tool_definitions()

    # Registered directly so argument checking and error codes stay with the
    # dispatcher instead of the SDK's generic tool-error wrapping.
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await call_tool(dispatcher, req.params.name, req.params.arguments)
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(dispatcher: Dispatcher):
    """Run the MCP server over stdio until the client disconnects."""
    server = create_server(dispatcher)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info("CloudWatch MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def build_dispatcher(cfg=None) -> Dispatcher:
    cfg = cfg or require_config()
    return Dispatcher(get_cloudwatch_client(cfg))


def main():
    """Entry point for the cwlogs-mcp command."""
    try:
        cfg = require_config()
    except ConfigError as e:
        configure_logging()
        logger.error("%s", e)
        sys.exit(1)
    configure_logging(cfg.log_level)
    asyncio.run(serve(build_dispatcher(cfg)))


if __name__ == "__main__":
    main()
