"""Storage Tool Schemas: MCP tool descriptors for Supabase Storage listing."""

TOOLS_STORAGE = [
    {
        "name": "list_buckets",
        "description": "List all storage buckets in Supabase.",
        "input_schema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    {
        "name": "list_files",
        "description": "List files in a storage bucket.",
        "input_schema": {
            "type": "object",
            "properties": {
                "bucket": {
                    "type": "string",
                    "description": "Name of the storage bucket",
                },
                "path": {
                    "type": "string",
                    "description": "Path within the bucket (default: root)",
                    "default": "",
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of files to return (default: 100)",
                    "default": 100,
                    "minimum": 1,
                },
            },
            "required": ["bucket"],
        },
    },
]
