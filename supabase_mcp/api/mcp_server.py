"""MCP Server: wires ToolDispatch and the tool catalog to the MCP protocol.

Invariants:
    - tools/list returns ALL_TOOLS verbatim (name, description, input schema)
    - tools/call always answers with a CallToolResult; isError mirrors CallResult.is_error
    - Protocol framing and stdio transport belong to the mcp library, not this module

Design Decisions:
    - Library-side jsonschema validation disabled: core/tool_arguments.py is the
      single validator, so every rejection has the same "Error: ..." shape
    - Handlers registered explicitly on a low-level Server (no decorators at import time)
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from supabase_mcp.config import Settings
from supabase_mcp.core.call_result import CallResult
from supabase_mcp.services.tool_dispatch import ToolDispatch
from supabase_mcp.services.tools_registry import ALL_TOOLS

logger = logging.getLogger(__name__)


def _server_version() -> str:
    try:
        return version("supabase-mcp-server")
    except PackageNotFoundError:
        return "0.0.0"


def to_mcp_tools() -> list[types.Tool]:
    return [
        types.Tool(
            name=t["name"],
            description=t["description"],
            inputSchema=t["input_schema"],
        )
        for t in ALL_TOOLS
    ]


def to_mcp_result(result: CallResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[
            types.TextContent(type="text", text=block.text)
            for block in result.content
        ],
        isError=result.is_error,
    )


def build_server(dispatch: ToolDispatch, settings: Settings) -> Server:
    """Create the MCP server with list_tools/call_tool bound to dispatch."""
    server = Server(settings.server_name, version=_server_version())

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        logger.debug("list_tools called")
        return to_mcp_tools()

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> types.CallToolResult:
        result = await dispatch.execute(name, arguments)
        return to_mcp_result(result)

    return server


async def run_stdio(server: Server) -> None:
    """Serve until stdin closes."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Supabase MCP server running on stdio")
        await server.run(
            read_stream, write_stream, server.create_initialization_options(),
        )
