"""Conversion of a Tasker XML project export into tool definitions.

Only tasks carrying a comment (``pc``) are exported. A task's arguments are
its profile variables that are not configured on import (``pvci`` false),
are immutable, and have no preset value (``pvv`` empty).
"""

import json
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..errors import ConfigurationError
from ..models.tool import InputSchema, PropertySchema, ToolDefinition

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Strip a ``{namespace}`` or ``prefix:`` qualifier from a tag."""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.rsplit(":", 1)[-1]


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in _children(element, name):
        return child.text or ""
    return None


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def _is_false(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "false"


def task_name_to_tool_name(task_name: str) -> str:
    """``"MCP Toggle Wifi"`` -> ``"tasker_toggle_wifi"``."""
    name = task_name.lower().replace(" ", "_")
    if name.startswith("mcp_"):
        return "tasker_" + name[len("mcp_"):]
    return re.sub(r"^mcp", "tasker", name)


def extract_input_schema(task: ET.Element) -> InputSchema:
    properties: Dict[str, PropertySchema] = {}
    required: List[str] = []

    for variable in _children(task, "ProfileVariable"):
        preset = _child_text(variable, "pvv")
        if not (
            _is_false(_child_text(variable, "pvci"))
            and _is_true(_child_text(variable, "immutable"))
            and (preset is None or not preset.strip())
        ):
            continue

        key = _child_text(variable, "pvn") or ""
        if key.startswith("%"):
            key = key[1:]

        var_type = _child_text(variable, "pvt")
        enum = None
        if var_type == "n":
            type_name = "number"
        elif var_type == "onoff":
            type_name = "string"
            enum = ("on", "off")
        else:
            type_name = "string"

        properties[key] = PropertySchema(
            type=type_name,
            description=_child_text(variable, "pvd") or "",
            enum=enum,
        )
        # clearout marks the variable as mandatory
        if _is_true(_child_text(variable, "clearout")) and key not in required:
            required.append(key)

    return InputSchema(properties=properties, required=tuple(required))


def convert_tasker_xml(path: Union[str, Path]) -> List[ToolDefinition]:
    """Convert the Tasker XML export stored at ``path`` into tool definitions.

    Raises:
        ConfigurationError: If the file is missing, unreadable or is not a
            Tasker export
    """
    file_path = Path(path)
    try:
        if not file_path.is_file():
            raise ConfigurationError(
                f"Tasker export not found: {file_path}",
                kind=ConfigurationError.NOT_FOUND,
                details={"source": str(file_path)},
            )
        root = ET.parse(file_path).getroot()
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read Tasker export {file_path}: {e}",
            kind=ConfigurationError.MALFORMED_FORMAT,
            details={"source": str(file_path)},
        ) from e
    except ET.ParseError as e:
        raise ConfigurationError(
            f"Invalid Tasker XML in {file_path}: {e}",
            kind=ConfigurationError.MALFORMED_FORMAT,
            details={"source": str(file_path)},
        ) from e
    return _definitions_from_root(root)


def convert_tasker_xml_text(document: Union[str, bytes]) -> List[ToolDefinition]:
    """Convert a Tasker XML export given as the document itself."""
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise ConfigurationError(f"Invalid Tasker XML: {e}", kind=ConfigurationError.MALFORMED_FORMAT) from e
    return _definitions_from_root(root)


def _definitions_from_root(root: ET.Element) -> List[ToolDefinition]:
    if _local_name(root.tag) != "TaskerData":
        raise ConfigurationError(
            f"Expected a TaskerData document, got <{_local_name(root.tag)}>",
            kind=ConfigurationError.MALFORMED_FORMAT,
        )

    definitions = []
    for task in _children(root, "Task"):
        task_name = _child_text(task, "nme")
        comment = _child_text(task, "pc")
        if not task_name or not comment:
            continue
        definitions.append(
            ToolDefinition(
                tasker_name=task_name,
                name=task_name_to_tool_name(task_name),
                description=comment,
                input_schema=extract_input_schema(task),
            )
        )

    logger.info(f"Converted {len(definitions)} Tasker tasks into tool definitions")
    return definitions


def dump_definitions(definitions: Sequence[ToolDefinition]) -> str:
    """Serialise definitions in the tool definitions file format."""
    return json.dumps([definition.to_raw() for definition in definitions], indent=2)
