"""Services Layer: tool schemas, handlers, and tool dispatch.

Invariants:
    - Handlers split by concern (schema, rows, storage)
    - Tool dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One define_*_tools.py per handler group for locality
"""
