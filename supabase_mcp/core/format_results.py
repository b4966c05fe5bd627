"""Result Formatting: pretty-printed JSON text and the soft-error payloads.

Invariants:
    - format_payload is total: datetimes, UUIDs, Decimals render via str()
    - Non-ASCII text kept readable (ensure_ascii=False)
    - Soft-error payloads are plain dicts; is_error stays False for them

Design Decisions:
    - Payload builders live in core (pure) so handlers stay thin and tests
      can assert exact shapes without a backend
"""

import json
from typing import Any

from supabase_mcp.core.sql_text import EXEC_SQL_FUNCTION_SQL


def format_payload(payload: Any) -> str:
    """Indented JSON text for a Call Result."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def exec_sql_missing_payload() -> dict:
    """Remedial instructions when the exec_sql procedure is not provisioned."""
    return {
        "error": "exec_sql function not found",
        "instructions": (
            "Please create the exec_sql function in your Supabase database "
            "by running the following SQL in the SQL Editor:"
        ),
        "sql": EXEC_SQL_FUNCTION_SQL,
    }


def empty_query_payload() -> dict:
    return {
        "error": "Empty query",
        "message": "The query parameter was empty or not provided",
    }


def sql_failed_payload(message: str) -> dict:
    return {"error": "SQL execution failed", "message": message}
