"""Services for Tasker MCP"""

from .definition_loader import load_tool_definitions, parse_tool_definitions
from .dispatcher import ToolHandler, build_handler
from .schema_translator import build_descriptor, to_json_schema, translate
from .tasker_client import TaskerClient
from .tool_registry import ToolRegistry

__all__ = [
    "TaskerClient",
    "ToolHandler",
    "ToolRegistry",
    "build_descriptor",
    "build_handler",
    "load_tool_definitions",
    "parse_tool_definitions",
    "to_json_schema",
    "translate",
]
