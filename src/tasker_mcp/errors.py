"""Error taxonomy for the Tasker MCP server."""

from typing import Any, Dict, Optional


class TaskerMCPError(Exception):
    """Base exception class for Tasker MCP errors."""
    def __init__(self, message: str, error_code: str = "TASKER_MCP_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TaskerMCPError):
    """Tool definitions missing, unreadable, malformed or inconsistent.

    Raised at startup only; the process must not begin serving.
    ``details["kind"]`` is one of ``NotFound``, ``MalformedFormat``,
    ``Duplicate`` or ``Empty``.
    """

    NOT_FOUND = "NotFound"
    MALFORMED_FORMAT = "MalformedFormat"
    DUPLICATE = "Duplicate"
    EMPTY = "Empty"

    def __init__(self, message: str, kind: str = MALFORMED_FORMAT, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details["kind"] = kind
        super().__init__(message, "CONFIG_ERROR", details)

    @property
    def kind(self) -> str:
        return self.details["kind"]


class DuplicateToolError(ConfigurationError):
    """Two definitions share the same external tool name."""
    def __init__(self, tool_name: str):
        super().__init__(
            f"Duplicate tool name: {tool_name}",
            kind=ConfigurationError.DUPLICATE,
            details={"tool_name": tool_name},
        )
        self.tool_name = tool_name


class ArgumentError(TaskerMCPError):
    """Call arrived without usable arguments."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ARGUMENT_ERROR", details)


class BackendError(TaskerMCPError):
    """Tasker could not be reached or answered with a non-200 status."""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "BACKEND_ERROR", details)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "BackendError":
        return cls(f"HTTP error: {status_code}, body: {body}", status_code=status_code, body=body)


class ToolNotFoundError(TaskerMCPError):
    """No registered tool carries the requested name."""
    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", "TOOL_NOT_FOUND", {"tool_name": tool_name})
        self.tool_name = tool_name


class TransportError(TaskerMCPError):
    """Unsupported transport mode requested at startup."""
    def __init__(self, mode: str):
        super().__init__(f"Unknown transport mode: {mode}", "TRANSPORT_ERROR", {"mode": mode})
        self.mode = mode
