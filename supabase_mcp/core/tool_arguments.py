"""Tool Arguments: strict pydantic models validated before every handler call.

Invariants:
    - One model per tool; TOOL_ARGUMENTS keys match the registry names exactly
    - Missing required fields and wrong types rejected; unknown keys are ignored
      (the tool still runs) and logged with the tool name
    - Filter values are scalars only (equality filters: str | int | float | bool | None)
    - update_rows/delete_rows reject an empty filter bag: no unfiltered table-wide writes
    - execute_sql accepts an empty query string; the handler answers it with a payload

Design Decisions:
    - Pydantic lax mode is the coercion policy: "25" -> 25 for limit/offset, booleans
      refused there, and filter strings are never reinterpreted as numbers (smart union keeps str)
    - Defaults live here AND in the advertised input_schema; test_tool_arguments
      checks both agree so the advertised contract can't drift
"""

import logging
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, JsonValue, StringConstraints,
    ValidationError, field_validator,
)

from supabase_mcp.core.errors import ErrorContext, ToolValidationError

logger = logging.getLogger(__name__)

# ─── Value Types ─────────────────────────────────────────────────

FilterValue = Union[str, int, float, bool, None]
Identifier = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Filters = dict[Identifier, FilterValue]
RowData = dict[Identifier, JsonValue]


def _refuse_bool(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError("must be an integer, not a boolean")
    return v


Count = Annotated[int, BeforeValidator(_refuse_bool)]


class ToolArguments(BaseModel):
    """Base for all tool argument models."""
    model_config = ConfigDict(extra="ignore", frozen=True)


# ─── Schema / raw SQL ────────────────────────────────────────────

class ListTablesArgs(ToolArguments):
    schema_name: Identifier = Field("public", alias="schema")


class DescribeTableArgs(ToolArguments):
    table: Identifier
    schema_name: Identifier = Field("public", alias="schema")


class ExecuteSqlArgs(ToolArguments):
    query: str


# ─── Rows ────────────────────────────────────────────────────────

class QueryTableArgs(ToolArguments):
    table: Identifier
    columns: Identifier = "*"
    filters: Filters = Field(default_factory=dict)
    order_by: Identifier | None = None
    ascending: bool = True
    limit: Count = Field(100, ge=1)
    offset: Count = Field(0, ge=0)


class InsertRowArgs(ToolArguments):
    table: Identifier
    data: RowData


class UpdateRowsArgs(ToolArguments):
    table: Identifier
    data: RowData
    filters: Filters

    @field_validator("data")
    @classmethod
    def reject_empty_data(cls, v: dict) -> dict:
        if not v:
            raise ValueError("data must contain at least one column to update")
        return v

    @field_validator("filters")
    @classmethod
    def reject_empty_filters(cls, v: dict) -> dict:
        if not v:
            raise ValueError(
                "filters must not be empty (refusing to update every row)"
            )
        return v


class DeleteRowsArgs(ToolArguments):
    table: Identifier
    filters: Filters

    @field_validator("filters")
    @classmethod
    def reject_empty_filters(cls, v: dict) -> dict:
        if not v:
            raise ValueError(
                "filters must not be empty (refusing to delete every row)"
            )
        return v


# ─── Storage ─────────────────────────────────────────────────────

class ListBucketsArgs(ToolArguments):
    pass


class ListFilesArgs(ToolArguments):
    bucket: Identifier
    path: str = ""
    limit: Count = Field(100, ge=1)


TOOL_ARGUMENTS: dict[str, type[ToolArguments]] = {
    "list_tables": ListTablesArgs,
    "describe_table": DescribeTableArgs,
    "query_table": QueryTableArgs,
    "insert_row": InsertRowArgs,
    "update_rows": UpdateRowsArgs,
    "delete_rows": DeleteRowsArgs,
    "execute_sql": ExecuteSqlArgs,
    "list_buckets": ListBucketsArgs,
    "list_files": ListFilesArgs,
}


def _describe(errors: list[dict]) -> tuple[str, str]:
    """First offending field + a one-line summary of every error."""
    parts = []
    for e in errors:
        loc = ".".join(str(p) for p in e["loc"]) or "arguments"
        parts.append(f"{loc}: {e['msg']}")
    first = ".".join(str(p) for p in errors[0]["loc"]) if errors else ""
    return first or "arguments", "; ".join(parts)


def validate_arguments(tool_name: str, arguments: dict | None) -> ToolArguments:
    """Validate a raw argument bag against the tool's model.

    Raises ToolValidationError (never pydantic's ValidationError) so the
    dispatcher only deals with the project's own hierarchy.
    """
    model = TOOL_ARGUMENTS[tool_name]
    arguments = arguments or {}
    try:
        args = model.model_validate(arguments)
    except ValidationError as e:
        field, summary = _describe(e.errors())
        raise ToolValidationError(
            f"Invalid arguments for {tool_name}: {summary}",
            field=field,
            context=ErrorContext(tool_name=tool_name),
        ) from e

    ignored = _unknown_keys(model, arguments)
    if ignored:
        logger.warning(
            f"Ignoring unknown arguments for {tool_name}: {', '.join(ignored)}",
            extra={"tool_name": tool_name},
        )
    return args


def _unknown_keys(model: type[ToolArguments], arguments: dict) -> list[str]:
    known = {f.alias or name for name, f in model.model_fields.items()}
    return sorted(str(k) for k in arguments if k not in known)
