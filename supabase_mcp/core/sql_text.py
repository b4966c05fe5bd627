"""SQL Text: metadata queries sent through the exec_sql procedure, plus its definition.

Invariants:
    - Every caller-supplied value reaches SQL only through quote_literal()
    - describe_table columns come back ordered by ordinal_position
    - EXEC_SQL_FUNCTION_SQL is the exact procedure the raw-command tools expect:
      one text parameter (sql_query), JSON array result, never NULL

Design Decisions:
    - Literal quoting over identifier interpolation: exec_sql accepts only text,
      so bind parameters are not available on this path
"""

EXEC_SQL_FUNCTION_NAME = "exec_sql"
EXEC_SQL_PARAMETER = "sql_query"

EXEC_SQL_FUNCTION_SQL = """\
CREATE OR REPLACE FUNCTION exec_sql(sql_query text)
RETURNS json
LANGUAGE plpgsql
SECURITY DEFINER
AS $$
DECLARE
  result json;
BEGIN
  EXECUTE 'SELECT json_agg(row_to_json(t)) FROM (' || sql_query || ') t' INTO result;
  RETURN COALESCE(result, '[]'::json);
END;
$$;"""


def quote_literal(value: str) -> str:
    """Render a Postgres string literal ('O''Brien')."""
    return "'" + value.replace("'", "''") + "'"


def list_tables_sql(schema: str) -> str:
    return (
        "SELECT tablename AS table_name, schemaname AS table_schema "
        "FROM pg_tables "
        f"WHERE schemaname = {quote_literal(schema)} "
        "ORDER BY tablename"
    )


def describe_table_sql(table: str, schema: str) -> str:
    return (
        "SELECT column_name, data_type, is_nullable, column_default, "
        "character_maximum_length "
        "FROM information_schema.columns "
        f"WHERE table_schema = {quote_literal(schema)} "
        f"AND table_name = {quote_literal(table)} "
        "ORDER BY ordinal_position"
    )
