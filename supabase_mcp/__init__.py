"""Supabase MCP Server: Supabase tables, raw SQL and Storage exposed as MCP tools."""
