"""Schema Handlers: list_tables, describe_table, execute_sql (exec_sql RPC path).

Invariants:
    - All three tools go through BackendLike.run_sql (the exec_sql procedure)
    - A missing exec_sql procedure is a returned payload with the remedial SQL, never raised
    - execute_sql never raises for bad input or SQL errors: both come back as payloads
    - list_tables/describe_table raise ToolExecutionError for any other backend failure

Design Decisions:
    - Soft degradation on missing exec_sql: the agent can relay the fix to a human
    - Metadata SQL comes from core/sql_text.py with quoted literals
"""

import logging

from supabase_mcp.core.errors import (
    BackendError, RawCommandUnavailableError, ToolExecutionError,
)
from supabase_mcp.core.format_results import (
    empty_query_payload, exec_sql_missing_payload, sql_failed_payload,
)
from supabase_mcp.core.repository_protocols import BackendLike
from supabase_mcp.core.sql_text import describe_table_sql, list_tables_sql
from supabase_mcp.core.tool_arguments import (
    DescribeTableArgs, ExecuteSqlArgs, ListTablesArgs,
)

logger = logging.getLogger(__name__)


class SchemaHandlers:
    """Introspection and raw SQL through the exec_sql procedure."""

    def __init__(self, backend: BackendLike):
        self.backend = backend

    async def list_tables(self, args: ListTablesArgs):
        try:
            return await self.backend.run_sql(list_tables_sql(args.schema_name))
        except RawCommandUnavailableError:
            logger.warning("exec_sql missing, returning setup instructions")
            return exec_sql_missing_payload()
        except BackendError as e:
            raise ToolExecutionError("List tables failed", e) from e

    async def describe_table(self, args: DescribeTableArgs):
        try:
            return await self.backend.run_sql(
                describe_table_sql(args.table, args.schema_name),
            )
        except RawCommandUnavailableError:
            logger.warning("exec_sql missing, returning setup instructions")
            return exec_sql_missing_payload()
        except BackendError as e:
            raise ToolExecutionError("Describe table failed", e) from e

    async def execute_sql(self, args: ExecuteSqlArgs):
        """Run caller SQL verbatim; input and SQL errors come back as payloads."""
        if not args.query.strip():
            return empty_query_payload()
        try:
            return await self.backend.run_sql(args.query)
        except RawCommandUnavailableError:
            return exec_sql_missing_payload()
        except BackendError as e:
            return sql_failed_payload(e.detail)
