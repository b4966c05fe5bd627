"""Root conftest: shared fixtures and an in-memory backend.

Invariants:
    - Tests never touch a real Supabase project: SUPABASE_* env vars removed
    - FakeBackend satisfies BackendLike with list-of-dict tables

Design Decisions:
    - Fake over mocks for handler/dispatch tests: filters, ordering and the
      [offset, offset + limit) window are checked against real row data
"""

import copy
from typing import Any

import pytest

from supabase_mcp.config import get_settings
from supabase_mcp.core.errors import BackendError, RawCommandUnavailableError
from supabase_mcp.services.tool_dispatch import ToolDispatch


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _matches(row: dict, filters: dict) -> bool:
    return all(row.get(k) == v for k, v in filters.items())


class FakeBackend:
    """In-memory stand-in for SupabaseBackend."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.buckets: list[dict] = []
        self.files: dict[str, list[dict]] = {}
        self.sql_result: Any = []
        self.sql_log: list[str] = []
        self.exec_sql_installed = True
        self.failures: dict[str, BackendError] = {}

    def _check(self, operation: str, table: str | None = None):
        if operation in self.failures:
            raise self.failures[operation]
        if table is not None and table not in self.tables:
            raise BackendError(
                f'relation "public.{table}" does not exist', operation, "42P01",
            )

    async def select_rows(self, table, columns, filters, order_by,
                          ascending, offset, limit):
        self._check("select", table)
        rows = [r for r in self.tables[table] if _matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=not ascending)
        rows = rows[offset:offset + limit]
        if columns != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return copy.deepcopy(rows)

    async def insert_rows(self, table, data):
        self._check("insert", table)
        if "id" in data and any(r["id"] == data["id"] for r in self.tables[table]):
            raise BackendError(
                'duplicate key value violates unique constraint '
                f'"{table}_pkey"', "insert", "23505",
            )
        row = copy.deepcopy(data)
        self.tables[table].append(row)
        return [copy.deepcopy(row)]

    async def update_rows(self, table, data, filters):
        self._check("update", table)
        updated = []
        for row in self.tables[table]:
            if _matches(row, filters):
                row.update(copy.deepcopy(data))
                updated.append(copy.deepcopy(row))
        return updated

    async def delete_rows(self, table, filters):
        self._check("delete", table)
        kept, deleted = [], []
        for row in self.tables[table]:
            (deleted if _matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return deleted

    async def run_sql(self, sql):
        self.sql_log.append(sql)
        if not self.exec_sql_installed:
            raise RawCommandUnavailableError(
                "Could not find the function public.exec_sql(sql_query) "
                "in the schema cache",
                "PGRST202",
            )
        self._check("rpc")
        return copy.deepcopy(self.sql_result)

    async def list_buckets(self):
        self._check("list_buckets")
        return copy.deepcopy(self.buckets)

    async def list_files(self, bucket, path, limit):
        # limit deliberately ignored: truncation is the handler's job
        self._check("list_files")
        if bucket not in self.files:
            raise BackendError("Bucket not found", "list_files", "404")
        return [
            dict(f) for f in self.files[bucket]
            if f["name"].startswith(path)
        ]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def dispatch(backend) -> ToolDispatch:
    return ToolDispatch(backend)


@pytest.fixture
def users(backend) -> list[dict]:
    """Five users with ids 1..5 in the `users` table."""
    rows = [
        {"id": i, "name": name, "active": i % 2 == 1}
        for i, name in enumerate(["ana", "bruno", "carla", "davi", "eva"], 1)
    ]
    backend.tables["users"] = rows
    return rows
