"""Supabase MCP Server: process entry point.

Invariants:
    - Startup order: settings -> logging -> backend -> dispatch -> server -> stdio
    - Missing Supabase settings never stop startup (reported on first tool call)
    - Only a failure to start or run the transport ends the process (exit code 1)

Design Decisions:
    - Backend constructed eagerly and injected: no global client, no lazy init race
"""

import asyncio
import logging
import sys

from supabase_mcp.api.mcp_server import build_server, run_stdio
from supabase_mcp.config import get_settings
from supabase_mcp.infrastructure.observability import setup_logging
from supabase_mcp.infrastructure.supabase_client import SupabaseBackend
from supabase_mcp.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)


async def serve() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    backend = await SupabaseBackend.connect(settings)
    dispatch = ToolDispatch(backend)
    server = build_server(dispatch, settings)
    await run_stdio(server)


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Supabase MCP server interrupted")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
