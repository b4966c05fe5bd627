"""Database Tool Schemas: MCP tool descriptors for tables and raw SQL.

Invariants:
    - Defaults advertised here match core/tool_arguments.py (tested)
    - update_rows/delete_rows list filters as required: unfiltered writes are refused
    - execute_sql depends on the exec_sql procedure; absence is reported, not raised

Design Decisions:
    - Plain dicts over generated schemas: the advertised contract is readable
      in one place and identical across pydantic versions
"""

TOOLS_DATABASE = [
    {
        "name": "list_tables",
        "description": (
            "List all tables in the Supabase database. "
            "Returns table names and schemas."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "schema": {
                    "type": "string",
                    "description": "Schema to list tables from (default: public)",
                    "default": "public",
                },
            },
            "required": [],
        },
    },
    {
        "name": "describe_table",
        "description": (
            "Get the structure of a specific table: column names, data types, "
            "nullability, defaults and maximum lengths."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Name of the table to describe",
                },
                "schema": {
                    "type": "string",
                    "description": "Schema the table belongs to (default: public)",
                    "default": "public",
                },
            },
            "required": ["table"],
        },
    },
    {
        "name": "query_table",
        "description": (
            "Query data from a table with optional equality filters, "
            "ordering, and limits."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Name of the table to query",
                },
                "columns": {
                    "type": "string",
                    "description": "Comma-separated list of columns to select (default: *)",
                    "default": "*",
                },
                "filters": {
                    "type": "object",
                    "description": "Key-value pairs for WHERE clause filters (equality only)",
                    "additionalProperties": True,
                    "default": {},
                },
                "order_by": {
                    "type": "string",
                    "description": "Column to order by",
                },
                "ascending": {
                    "type": "boolean",
                    "description": "Sort ascending (default: true)",
                    "default": True,
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of rows to return (default: 100)",
                    "default": 100,
                    "minimum": 1,
                },
                "offset": {
                    "type": "integer",
                    "description": "Number of rows to skip (default: 0)",
                    "default": 0,
                    "minimum": 0,
                },
            },
            "required": ["table"],
        },
    },
    {
        "name": "insert_row",
        "description": "Insert a new row into a table.",
        "input_schema": {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Name of the table to insert into",
                },
                "data": {
                    "type": "object",
                    "description": "Object containing column-value pairs to insert",
                    "additionalProperties": True,
                },
            },
            "required": ["table", "data"],
        },
    },
    {
        "name": "update_rows",
        "description": "Update rows in a table that match the specified filters.",
        "input_schema": {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Name of the table to update",
                },
                "data": {
                    "type": "object",
                    "description": "Object containing column-value pairs to update",
                    "additionalProperties": True,
                },
                "filters": {
                    "type": "object",
                    "description": (
                        "Key-value pairs for WHERE clause (required and non-empty "
                        "to prevent accidental full-table updates)"
                    ),
                    "additionalProperties": True,
                    "minProperties": 1,
                },
            },
            "required": ["table", "data", "filters"],
        },
    },
    {
        "name": "delete_rows",
        "description": "Delete rows from a table that match the specified filters.",
        "input_schema": {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Name of the table to delete from",
                },
                "filters": {
                    "type": "object",
                    "description": (
                        "Key-value pairs for WHERE clause (required and non-empty "
                        "to prevent accidental full-table deletes)"
                    ),
                    "additionalProperties": True,
                    "minProperties": 1,
                },
            },
            "required": ["table", "filters"],
        },
    },
    {
        "name": "execute_sql",
        "description": (
            "Execute a raw SQL query through the exec_sql database function. "
            "Use with caution. Supports SELECT, INSERT, UPDATE, DELETE."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "SQL query to execute",
                },
            },
            "required": ["query"],
        },
    },
]
