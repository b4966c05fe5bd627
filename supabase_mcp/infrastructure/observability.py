"""Tool-call logging for a stdio MCP server.

Invariants:
    - stdout belongs to MCP protocol frames; every log line goes to stderr
    - Each tool call produces one record carrying tool_name, outcome and
      duration_ms (plus error_code/category/severity on failure)
    - setup_logging is idempotent: a second call replaces the server's handler
      instead of stacking another one
    - httpx/httpcore request chatter is held at WARNING so the per-call record
      stays the only INFO line for a tool call

Design Decisions:
    - One JSON object per line so a client capturing stderr can parse it as-is
"""

import json
import logging
import sys
from datetime import datetime, timezone

_TOOL_CALL_FIELDS = (
    "tool_name", "outcome", "duration_ms",
    "error_code", "category", "severity",
)
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


class JSONFormatter(logging.Formatter):
    """One JSON line per record; tool-call fields only when the record has them."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in _TOOL_CALL_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _StderrHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""

    def __init__(self):
        super().__init__(sys.stderr)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the server's stderr handler on the root logger."""
    handler = _StderrHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(tool_name)s] - %(message)s",
            defaults={"tool_name": "-"},
        ))

    root = logging.getLogger()
    for old in [h for h in root.handlers if isinstance(h, _StderrHandler)]:
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
