"""Boundary Protocols: the backend contract handlers are written against.

Invariants:
    - Handlers NEVER import the supabase client; they see only BackendLike
    - Every method either returns JSON-ready data or raises a core/errors.py type
      (BackendError, RawCommandUnavailableError, BackendConfigError)

Design Decisions:
    - Protocol over ABC: structural subtyping, so SupabaseBackend and the
      in-memory test backend share no inheritance
"""

from typing import Any, Protocol


class BackendLike(Protocol):
    """Narrow view of the managed backend: tables, raw SQL, storage."""

    async def select_rows(
        self,
        table: str,
        columns: str,
        filters: dict[str, Any],
        order_by: str | None,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> list[dict]: ...

    async def insert_rows(self, table: str, data: dict[str, Any]) -> list[dict]: ...

    async def update_rows(
        self, table: str, data: dict[str, Any], filters: dict[str, Any],
    ) -> list[dict]: ...

    async def delete_rows(
        self, table: str, filters: dict[str, Any],
    ) -> list[dict]: ...

    async def run_sql(self, sql: str) -> Any: ...

    async def list_buckets(self) -> list[dict]: ...

    async def list_files(
        self, bucket: str, path: str, limit: int,
    ) -> list[dict]: ...
