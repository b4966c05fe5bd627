"""Error Hierarchy: typed, categorized exceptions for every tool failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (validation, unknown tool) are recoverable; backend errors are not retried
    - The caller only ever sees `message`; code/category/severity stay in the logs
    - Soft failures (missing exec_sql, empty query) are payloads, never exceptions here

Design Decisions:
    - Single hierarchy with SupabaseMcpError base: ToolDispatch catches all in one place
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tool_name: str | None = None


class SupabaseMcpError(Exception):
    """Base exception for all tool server errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_log_extra(self) -> dict:
        """Structured fields for logger.* extra=."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "tool_name": self.context.tool_name,
        }


# ─── Input Errors ───────────────────────────────────────────────

class ToolValidationError(SupabaseMcpError):
    """Tool arguments failed schema validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field


class UnknownToolError(SupabaseMcpError):
    """Tool name is not in the registry."""
    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown tool: {tool_name}",
            "UNKNOWN_TOOL", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context,
        )
        self.tool_name = tool_name


# ─── Backend Errors ─────────────────────────────────────────────

class BackendConfigError(SupabaseMcpError):
    """Supabase connection settings absent or rejected by the client."""
    def __init__(self, missing: list[str], reason: str | None = None,
                 context: ErrorContext | None = None):
        if missing:
            message = (
                f"{' and '.join(missing)} environment "
                f"{'variable is' if len(missing) == 1 else 'variables are'} required"
            )
        else:
            message = f"Supabase client could not be created: {reason}"
        super().__init__(
            message, "BACKEND_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context,
        )
        self.missing = missing


class BackendError(SupabaseMcpError):
    """A PostgREST, RPC or Storage call returned an error."""
    def __init__(
        self,
        detail: str,
        operation: str,
        backend_code: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            detail, "BACKEND_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context,
        )
        self.detail = detail
        self.operation = operation
        self.backend_code = backend_code


class RawCommandUnavailableError(BackendError):
    """The exec_sql stored procedure is not provisioned on the backend."""
    def __init__(self, detail: str, backend_code: str | None = None,
                 context: ErrorContext | None = None):
        super().__init__(detail, "rpc", backend_code, context)
        self.code = "EXEC_SQL_MISSING"


class ToolExecutionError(SupabaseMcpError):
    """Handler-level failure with a tool-specific prefix ("Query failed: ...")."""
    def __init__(self, prefix: str, cause: BackendError):
        super().__init__(
            f"{prefix}: {cause.detail}", "TOOL_EXECUTION_FAILED",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, cause.context,
        )
        self.backend_code = cause.backend_code
