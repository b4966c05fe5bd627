"""Call Result: the uniform success/error envelope returned for every tool call.

Invariants:
    - Exactly one text block per result
    - is_error is the only machine-readable outcome signal; no error codes leak to callers
    - Error text is a single line prefixed with "Error: "

Design Decisions:
    - Frozen dataclasses, not MCP types: core stays free of transport imports
      (api/mcp_server.py converts at the boundary)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextBlock:
    """One content item of a call result."""
    text: str
    type: str = "text"


@dataclass(frozen=True)
class CallResult:
    """Outcome of one tool invocation."""
    content: tuple[TextBlock, ...]
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "CallResult":
        return cls(content=(TextBlock(text),))

    @classmethod
    def error(cls, message: str) -> "CallResult":
        line = " ".join(message.split())
        return cls(content=(TextBlock(f"Error: {line}"),), is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text
