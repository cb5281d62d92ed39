from .tool import (
    UNKNOWN_FALLBACK,
    CallRequest,
    CallResult,
    InputSchema,
    PropertyDescriptor,
    PropertyKind,
    PropertySchema,
    ToolDefinition,
    ToolDescriptor,
)

__all__ = [
    "UNKNOWN_FALLBACK",
    "CallRequest",
    "CallResult",
    "InputSchema",
    "PropertyDescriptor",
    "PropertyKind",
    "PropertySchema",
    "ToolDefinition",
    "ToolDescriptor",
]
