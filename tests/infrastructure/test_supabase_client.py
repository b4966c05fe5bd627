"""Supabase Backend: query building and error mapping against recording fakes.

Tests cover:
    - connect(): unconfigured when settings missing or rejected, never raises
    - select builds select/eq/order/range in that order; None filter -> IS NULL
    - insert/update/delete/rpc/storage calls reach the right client methods
    - APIError / StorageApiError / httpx errors -> BackendError;
      missing exec_sql (PGRST202, 42883) -> RawCommandUnavailableError
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError
from storage3.exceptions import StorageApiError

from supabase_mcp.config import Settings
from supabase_mcp.core.errors import (
    BackendConfigError, BackendError, RawCommandUnavailableError,
)
from supabase_mcp.infrastructure import supabase_client
from supabase_mcp.infrastructure.supabase_client import SupabaseBackend


class _Builder:
    """Records every chained call; execute() returns or raises `response`."""

    def __init__(self, log: list, response):
        self.log = log
        self.response = response

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.log.append((name, args, kwargs))
            return self
        return record

    async def execute(self):
        if isinstance(self.response, Exception):
            raise self.response
        return SimpleNamespace(data=self.response)


class _FakeClient:
    def __init__(self, response=None):
        self.calls: list = []
        self.response = response
        self.storage = MagicMock()

    def table(self, name):
        self.calls.append(("table", (name,), {}))
        return _Builder(self.calls, self.response)

    def rpc(self, fn, params):
        self.calls.append(("rpc", (fn, params), {}))
        return _Builder(self.calls, self.response)


def _api_error(message, code):
    return APIError({"message": message, "code": code, "details": None, "hint": None})


# ─── connect ─────────────────────────────────────────────────────

async def test_connect_without_settings_is_unconfigured():
    backend = await SupabaseBackend.connect(Settings(_env_file=None))
    assert backend.is_configured is False
    with pytest.raises(BackendConfigError) as exc:
        await backend.list_buckets()
    assert "SUPABASE_URL and SUPABASE_SERVICE_KEY" in exc.value.message


async def test_connect_creates_client(monkeypatch):
    client = _FakeClient()
    create = AsyncMock(return_value=client)
    monkeypatch.setattr(supabase_client, "acreate_client", create)
    settings = Settings(
        _env_file=None,
        supabase_url="https://abc.supabase.co",
        supabase_service_key="service-key",
    )
    backend = await SupabaseBackend.connect(settings)
    assert backend.is_configured is True
    create.assert_awaited_once_with("https://abc.supabase.co", "service-key")


async def test_connect_rejected_config_is_deferred(monkeypatch):
    monkeypatch.setattr(
        supabase_client, "acreate_client",
        AsyncMock(side_effect=ValueError("Invalid URL")),
    )
    settings = Settings(
        _env_file=None, supabase_url="not-a-url", supabase_service_key="k",
    )
    backend = await SupabaseBackend.connect(settings)
    assert backend.is_configured is False
    with pytest.raises(BackendConfigError) as exc:
        await backend.run_sql("select 1")
    assert "Invalid URL" in exc.value.message


# ─── tables ──────────────────────────────────────────────────────

async def test_select_builds_filters_order_and_range():
    client = _FakeClient(response=[{"id": 2}])
    backend = SupabaseBackend(client)
    rows = await backend.select_rows(
        "users", "id,name", {"id": 2, "deleted_at": None},
        "name", False, 10, 5,
    )
    assert rows == [{"id": 2}]
    assert client.calls == [
        ("table", ("users",), {}),
        ("select", ("id,name",), {}),
        ("eq", ("id", 2), {}),
        ("is_", ("deleted_at", "null"), {}),
        ("order", ("name",), {"desc": True}),
        ("range", (10, 14), {}),
    ]


async def test_select_without_order_skips_order():
    client = _FakeClient(response=None)
    rows = await SupabaseBackend(client).select_rows(
        "users", "*", {}, None, True, 0, 100,
    )
    assert rows == []
    assert [c[0] for c in client.calls] == ["table", "select", "range"]
    assert client.calls[-1] == ("range", (0, 99), {})


async def test_insert_update_delete_calls():
    client = _FakeClient(response=[{"id": 1}])
    backend = SupabaseBackend(client)

    assert await backend.insert_rows("t", {"a": 1}) == [{"id": 1}]
    assert ("insert", ({"a": 1},), {}) in client.calls

    client.calls.clear()
    await backend.update_rows("t", {"a": 2}, {"id": 1})
    assert client.calls[1:] == [("update", ({"a": 2},), {}), ("eq", ("id", 1), {})]

    client.calls.clear()
    await backend.delete_rows("t", {"id": 1})
    assert client.calls[1:] == [("delete", (), {}), ("eq", ("id", 1), {})]


async def test_postgrest_error_becomes_backend_error():
    client = _FakeClient(response=_api_error("duplicate key value", "23505"))
    with pytest.raises(BackendError) as exc:
        await SupabaseBackend(client).insert_rows("t", {"id": 1})
    assert exc.value.detail == "duplicate key value"
    assert exc.value.backend_code == "23505"
    assert exc.value.operation == "insert"
    assert not isinstance(exc.value, RawCommandUnavailableError)


async def test_transport_error_becomes_backend_error():
    client = _FakeClient(response=httpx.ConnectError("connection refused"))
    with pytest.raises(BackendError) as exc:
        await SupabaseBackend(client).select_rows("t", "*", {}, None, True, 0, 1)
    assert "ConnectError" in exc.value.detail


# ─── rpc ─────────────────────────────────────────────────────────

async def test_run_sql_calls_exec_sql_rpc():
    client = _FakeClient(response=[{"n": 1}])
    assert await SupabaseBackend(client).run_sql("select 1 as n") == [{"n": 1}]
    assert client.calls[0] == ("rpc", ("exec_sql", {"sql_query": "select 1 as n"}), {})


@pytest.mark.parametrize("code", ["PGRST202", "42883"])
async def test_missing_exec_sql_detected(code):
    client = _FakeClient(response=_api_error("Could not find the function", code))
    with pytest.raises(RawCommandUnavailableError):
        await SupabaseBackend(client).run_sql("select 1")


async def test_other_rpc_error_is_plain_backend_error():
    client = _FakeClient(response=_api_error("syntax error", "42601"))
    with pytest.raises(BackendError) as exc:
        await SupabaseBackend(client).run_sql("selec 1")
    assert not isinstance(exc.value, RawCommandUnavailableError)


# ─── storage ─────────────────────────────────────────────────────

async def test_list_buckets_flattens_bucket_objects():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    bucket = SimpleNamespace(
        id="avatars", name="avatars", owner="", public=True,
        created_at=created, updated_at=created,
        file_size_limit=None, allowed_mime_types=["image/png"],
        _client=object(),
    )
    client = _FakeClient()
    client.storage.list_buckets = AsyncMock(return_value=[bucket])
    buckets = await SupabaseBackend(client).list_buckets()
    assert buckets == [{
        "id": "avatars", "name": "avatars", "owner": "", "public": True,
        "created_at": created, "updated_at": created,
        "file_size_limit": None, "allowed_mime_types": ["image/png"],
    }]


async def test_list_files_passes_path_and_limit():
    client = _FakeClient()
    proxy = MagicMock()
    proxy.list = AsyncMock(return_value=[{"name": "a.png"}])
    client.storage.from_.return_value = proxy
    files = await SupabaseBackend(client).list_files("avatars", "users", 10)
    assert files == [{"name": "a.png"}]
    client.storage.from_.assert_called_once_with("avatars")
    proxy.list.assert_awaited_once_with("users", {"limit": 10})


async def test_storage_error_becomes_backend_error():
    client = _FakeClient()
    client.storage.list_buckets = AsyncMock(
        side_effect=StorageApiError("Unauthorized", "InvalidJWT", 401),
    )
    with pytest.raises(BackendError) as exc:
        await SupabaseBackend(client).list_buckets()
    assert exc.value.detail == "Unauthorized"
    assert exc.value.operation == "list_buckets"
