"""Supabase Backend: the one process-wide client handle, behind BackendLike.

Invariants:
    - Built once at startup by connect() and injected; never re-created or mutated
    - Missing/invalid credentials never crash startup: every call raises
      BackendConfigError naming the missing settings instead
    - PostgREST, Storage and transport failures all surface as BackendError;
      a missing exec_sql procedure surfaces as RawCommandUnavailableError
    - No retries and no timeouts added here (httpx defaults apply)

Design Decisions:
    - Explicit construction over a lazy module global: no first-caller race,
      tests inject their own backend
    - Equality filters only; None maps to IS NULL because `eq.None` never matches
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from httpx import HTTPError
from postgrest.exceptions import APIError
from storage3.exceptions import StorageApiError
from supabase import AsyncClient, acreate_client

from supabase_mcp.config import Settings
from supabase_mcp.core.errors import (
    BackendConfigError, BackendError, RawCommandUnavailableError,
)
from supabase_mcp.core.sql_text import EXEC_SQL_FUNCTION_NAME, EXEC_SQL_PARAMETER

logger = logging.getLogger(__name__)

# PostgREST "function not found in schema cache" / Postgres undefined_function
_MISSING_FUNCTION_CODES = frozenset({"PGRST202", "42883"})

_BUCKET_FIELDS = (
    "id", "name", "owner", "public", "created_at", "updated_at",
    "file_size_limit", "allowed_mime_types",
)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Map client-library exceptions to BackendError."""
    try:
        yield
    except APIError as e:
        detail = e.message or str(e)
        code = str(e.code) if e.code else None
        if operation == "rpc" and code in _MISSING_FUNCTION_CODES:
            raise RawCommandUnavailableError(detail, code) from e
        raise BackendError(detail, operation, code) from e
    except StorageApiError as e:
        raise BackendError(
            e.message or str(e), operation, str(e.code) if e.code else None,
        ) from e
    except HTTPError as e:
        logger.warning(f"Supabase transport error during {operation}: {e}")
        raise BackendError(f"{type(e).__name__}: {e}", operation) from e


def _apply_filters(builder: Any, filters: dict[str, Any]) -> Any:
    """AND-combine equality filters onto a PostgREST filter builder."""
    for column, value in filters.items():
        if value is None:
            builder = builder.is_(column, "null")
        else:
            builder = builder.eq(column, value)
    return builder


def _bucket_record(bucket: Any) -> dict:
    if isinstance(bucket, dict):
        return {k: bucket.get(k) for k in _BUCKET_FIELDS}
    return {k: getattr(bucket, k, None) for k in _BUCKET_FIELDS}


class SupabaseBackend:
    """PostgREST tables, exec_sql RPC and Storage listing over one AsyncClient."""

    def __init__(
        self,
        client: AsyncClient | None,
        missing: list[str] | None = None,
        reason: str | None = None,
    ):
        self._client = client
        self._missing = list(missing or [])
        self._reason = reason

    @classmethod
    async def connect(cls, settings: Settings) -> "SupabaseBackend":
        """Create the client from settings; degrade to unconfigured on bad config."""
        missing = settings.missing_backend_settings()
        if missing:
            logger.warning(
                f"Supabase not configured, missing: {', '.join(missing)}",
                extra={"error_code": "BACKEND_NOT_CONFIGURED"},
            )
            return cls(None, missing=missing)
        try:
            client = await acreate_client(
                settings.supabase_url,
                settings.supabase_service_key.get_secret_value(),
            )
        except Exception as e:
            reason = getattr(e, "message", None) or str(e)
            logger.warning(
                f"Supabase client rejected configuration: {reason}",
                extra={"error_code": "BACKEND_NOT_CONFIGURED"},
            )
            return cls(None, reason=reason)
        logger.info(f"Supabase client created for {settings.supabase_url}")
        return cls(client)

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> AsyncClient:
        if self._client is None:
            raise BackendConfigError(self._missing, self._reason)
        return self._client

    # ─── Tables ──────────────────────────────────────────────────

    async def select_rows(
        self,
        table: str,
        columns: str,
        filters: dict[str, Any],
        order_by: str | None,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> list[dict]:
        client = self._require_client()
        query = _apply_filters(client.table(table).select(columns), filters)
        if order_by:
            query = query.order(order_by, desc=not ascending)
        # PostgREST range is inclusive on both ends
        query = query.range(offset, offset + limit - 1)
        with _translate_errors("select"):
            response = await query.execute()
        return response.data or []

    async def insert_rows(self, table: str, data: dict[str, Any]) -> list[dict]:
        client = self._require_client()
        with _translate_errors("insert"):
            response = await client.table(table).insert(data).execute()
        return response.data or []

    async def update_rows(
        self, table: str, data: dict[str, Any], filters: dict[str, Any],
    ) -> list[dict]:
        client = self._require_client()
        query = _apply_filters(client.table(table).update(data), filters)
        with _translate_errors("update"):
            response = await query.execute()
        return response.data or []

    async def delete_rows(
        self, table: str, filters: dict[str, Any],
    ) -> list[dict]:
        client = self._require_client()
        query = _apply_filters(client.table(table).delete(), filters)
        with _translate_errors("delete"):
            response = await query.execute()
        return response.data or []

    # ─── Raw SQL ─────────────────────────────────────────────────

    async def run_sql(self, sql: str) -> Any:
        client = self._require_client()
        with _translate_errors("rpc"):
            response = await client.rpc(
                EXEC_SQL_FUNCTION_NAME, {EXEC_SQL_PARAMETER: sql},
            ).execute()
        return response.data

    # ─── Storage ─────────────────────────────────────────────────

    async def list_buckets(self) -> list[dict]:
        client = self._require_client()
        with _translate_errors("list_buckets"):
            buckets = await client.storage.list_buckets()
        return [_bucket_record(b) for b in buckets]

    async def list_files(
        self, bucket: str, path: str, limit: int,
    ) -> list[dict]:
        client = self._require_client()
        with _translate_errors("list_files"):
            files = await client.storage.from_(bucket).list(
                path, {"limit": limit},
            )
        return list(files or [])
