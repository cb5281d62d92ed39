"""Loading of Tasker tool definitions from JSON or YAML files."""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..models.tool import ToolDefinition

logger = logging.getLogger(__name__)


def parse_tool_definitions(data: Any, source: str = "<memory>") -> List[ToolDefinition]:
    """Validate already-decoded data as a list of tool definitions.

    Either every entry validates or a ``ConfigurationError`` is raised;
    there is no partial result.
    """
    if not isinstance(data, list):
        raise ConfigurationError(
            f"Tool definitions in {source} must be a list, got {type(data).__name__}",
            kind=ConfigurationError.MALFORMED_FORMAT,
            details={"source": source},
        )

    definitions: List[ToolDefinition] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Tool definition #{index} in {source} is not an object",
                kind=ConfigurationError.MALFORMED_FORMAT,
                details={"source": source, "index": index},
            )
        try:
            definitions.append(ToolDefinition.model_validate(entry))
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid tool definition #{index} in {source}: {e}",
                kind=ConfigurationError.MALFORMED_FORMAT,
                details={"source": source, "index": index},
            ) from e
    return definitions


def load_tool_definitions(path: Union[str, Path]) -> List[ToolDefinition]:
    """Read the tool definitions file at ``path``.

    Files ending in ``.yaml``/``.yml`` are parsed as YAML, everything else
    as JSON.

    Raises:
        ConfigurationError: kind ``NotFound`` if the file does not exist,
            ``MalformedFormat`` if it cannot be read, decoded or validated.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(
            f"Tool definitions file not found: {file_path}",
            kind=ConfigurationError.NOT_FOUND,
            details={"source": str(file_path)},
        )

    try:
        content = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read tool definitions from {file_path}: {e}",
            kind=ConfigurationError.MALFORMED_FORMAT,
            details={"source": str(file_path)},
        ) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Invalid tool definitions format in {file_path}: {e}",
            kind=ConfigurationError.MALFORMED_FORMAT,
            details={"source": str(file_path)},
        ) from e

    definitions = parse_tool_definitions(data, source=str(file_path))
    logger.info(f"Loaded {len(definitions)} tool definitions from {file_path}")
    return definitions
