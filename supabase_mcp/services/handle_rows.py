"""Row Handlers: query_table, insert_row, update_rows, delete_rows.

Invariants:
    - Filters are equality-only and AND-combined (applied by the backend adapter)
    - query_table returns rows in [offset, offset + limit) plus their count
    - Write tools echo the affected rows back (PostgREST return=representation)
    - Every backend failure re-raised as ToolExecutionError with a per-tool prefix

Design Decisions:
    - Empty filter bags never reach this layer: rejected by UpdateRowsArgs/DeleteRowsArgs
"""

from supabase_mcp.core.errors import BackendError, ToolExecutionError
from supabase_mcp.core.repository_protocols import BackendLike
from supabase_mcp.core.tool_arguments import (
    DeleteRowsArgs, InsertRowArgs, QueryTableArgs, UpdateRowsArgs,
)


class RowHandlers:
    """PostgREST table operations."""

    def __init__(self, backend: BackendLike):
        self.backend = backend

    async def query_table(self, args: QueryTableArgs) -> dict:
        try:
            rows = await self.backend.select_rows(
                args.table,
                args.columns,
                dict(args.filters),
                args.order_by,
                args.ascending,
                args.offset,
                args.limit,
            )
        except BackendError as e:
            raise ToolExecutionError("Query failed", e) from e
        return {"count": len(rows), "data": rows}

    async def insert_row(self, args: InsertRowArgs) -> dict:
        try:
            rows = await self.backend.insert_rows(args.table, dict(args.data))
        except BackendError as e:
            raise ToolExecutionError("Insert failed", e) from e
        return {"success": True, "inserted": rows}

    async def update_rows(self, args: UpdateRowsArgs) -> dict:
        try:
            rows = await self.backend.update_rows(
                args.table, dict(args.data), dict(args.filters),
            )
        except BackendError as e:
            raise ToolExecutionError("Update failed", e) from e
        return {"success": True, "updated": rows}

    async def delete_rows(self, args: DeleteRowsArgs) -> dict:
        try:
            rows = await self.backend.delete_rows(args.table, dict(args.filters))
        except BackendError as e:
            raise ToolExecutionError("Delete failed", e) from e
        return {"success": True, "deleted": rows}
