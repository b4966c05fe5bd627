"""Storage Handlers: list_buckets, list_files.

Invariants:
    - list_files never returns more than `limit` entries, whatever the backend sends
"""

from supabase_mcp.core.errors import BackendError, ToolExecutionError
from supabase_mcp.core.repository_protocols import BackendLike
from supabase_mcp.core.tool_arguments import ListBucketsArgs, ListFilesArgs


class StorageHandlers:
    """Supabase Storage listing."""

    def __init__(self, backend: BackendLike):
        self.backend = backend

    async def list_buckets(self, args: ListBucketsArgs) -> list[dict]:
        try:
            return await self.backend.list_buckets()
        except BackendError as e:
            raise ToolExecutionError("Failed to list buckets", e) from e

    async def list_files(self, args: ListFilesArgs) -> list[dict]:
        try:
            files = await self.backend.list_files(
                args.bucket, args.path, args.limit,
            )
        except BackendError as e:
            raise ToolExecutionError("Failed to list files", e) from e
        return files[:args.limit]
