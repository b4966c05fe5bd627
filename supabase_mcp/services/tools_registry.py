"""Tools Registry: the flat, static catalog returned for "list tools".

Invariants:
    - ALL_TOOLS is fixed at import time and never mutated
    - Tool names are unique; each maps to exactly one ToolDispatch handler
    - Order is stable: database tools first, then storage

Design Decisions:
    - Explicit imports from each define_*_tools.py: no auto-discovery
"""

from supabase_mcp.services.define_database_tools import TOOLS_DATABASE
from supabase_mcp.services.define_storage_tools import TOOLS_STORAGE

ALL_TOOLS: list[dict] = [
    *TOOLS_DATABASE,   # 7 tools
    *TOOLS_STORAGE,    # 2 tools
]
# Total: 9
