"""Tool Dispatch: explicit routing from tool_name to handler, one error boundary.

Invariants:
    - Every tool->handler mapping is visible: no getattr magic, no auto-discovery
    - Arguments validated (core/tool_arguments.py) before any handler runs
    - execute() never raises: unknown tools, bad input, backend failures and
      unexpected exceptions all become an error-flagged CallResult
    - Every call logged with tool_name, outcome and duration_ms
    - No retries, timeouts or locks: concurrent calls are independent

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Handlers split by concern (schema, rows, storage): max 4 methods per class
    - Backend injected once at construction; handlers share it read-only
"""

import logging
import time

from supabase_mcp.core.call_result import CallResult
from supabase_mcp.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, SupabaseMcpError,
    UnknownToolError,
)
from supabase_mcp.core.format_results import format_payload
from supabase_mcp.core.repository_protocols import BackendLike
from supabase_mcp.core.tool_arguments import validate_arguments
from supabase_mcp.services.handle_rows import RowHandlers
from supabase_mcp.services.handle_schema import SchemaHandlers
from supabase_mcp.services.handle_storage import StorageHandlers

logger = logging.getLogger(__name__)


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, backend: BackendLike):
        schema = SchemaHandlers(backend)
        rows = RowHandlers(backend)
        storage = StorageHandlers(backend)

        # Adding a tool requires editing this dict and tools_registry.ALL_TOOLS
        self._handlers = {
            # Schema / raw SQL (3 tools)
            "list_tables": schema.list_tables,
            "describe_table": schema.describe_table,
            "execute_sql": schema.execute_sql,

            # Rows (4 tools)
            "query_table": rows.query_table,
            "insert_row": rows.insert_row,
            "update_rows": rows.update_rows,
            "delete_rows": rows.delete_rows,

            # Storage (2 tools)
            "list_buckets": storage.list_buckets,
            "list_files": storage.list_files,
        }

    async def execute(self, tool_name: str, arguments: dict | None) -> CallResult:
        """Route tool_name to handler. Returns a CallResult. Logs every call."""
        start = time.perf_counter()
        try:
            handler = self._handlers.get(tool_name)
            if handler is None:
                raise UnknownToolError(
                    tool_name, ErrorContext(tool_name=tool_name),
                )
            args = validate_arguments(tool_name, arguments)
            payload = await handler(args)
            result = CallResult.ok(format_payload(payload))
        except SupabaseMcpError as e:
            e.context.tool_name = e.context.tool_name or tool_name
            logger.warning(
                f"Tool '{tool_name}' failed: {e.message}",
                extra={
                    **e.to_log_extra(),
                    "outcome": "error",
                    "duration_ms": _elapsed_ms(start),
                },
            )
            return CallResult.error(e.message)
        except Exception as e:
            logger.error(
                f"Unhandled exception in tool '{tool_name}': {e}",
                exc_info=True,
                extra={
                    "tool_name": tool_name,
                    "error_code": "INTERNAL_ERROR",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.ERROR.value,
                    "outcome": "error",
                    "duration_ms": _elapsed_ms(start),
                },
            )
            return CallResult.error(str(e) or type(e).__name__)
        logger.info(
            f"Tool '{tool_name}' completed",
            extra={
                "tool_name": tool_name,
                "outcome": "ok",
                "duration_ms": _elapsed_ms(start),
            },
        )
        return result


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
