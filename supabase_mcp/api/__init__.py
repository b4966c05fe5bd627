"""API Layer: MCP protocol surface over stdio."""
