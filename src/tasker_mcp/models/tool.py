# Tool domain models
# Typed representation of Tasker tool definitions and MCP-facing descriptors

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertyKind(str, Enum):
    """Primitive kind advertised for a tool argument."""

    STRING = "string"
    NUMBER = "number"

    @classmethod
    def resolve(cls, type_name: Any) -> "PropertyKind":
        """Map a free-form schema ``type`` onto a kind.

        ``"string"`` and ``"number"`` map to themselves. Anything else,
        including a missing type, maps to ``UNKNOWN_FALLBACK``.
        """
        if type_name == "string":
            return cls.STRING
        if type_name == "number":
            return cls.NUMBER
        return UNKNOWN_FALLBACK


# Unrecognised property types are advertised as strings.
UNKNOWN_FALLBACK = PropertyKind.STRING


class PropertySchema(BaseModel):
    """A single entry of an input schema's ``properties`` mapping."""

    model_config = ConfigDict(frozen=True)

    type: str = ""
    description: str = ""
    enum: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "PropertySchema":
        if not isinstance(raw, Mapping):
            return cls()
        type_name = raw.get("type")
        description = raw.get("description")
        enum = raw.get("enum")
        if isinstance(enum, (list, tuple)):
            enum = tuple(str(value) for value in enum)
        else:
            enum = None
        return cls(
            type=type_name if isinstance(type_name, str) else "",
            description=description if isinstance(description, str) else "",
            enum=enum,
        )

    def to_raw(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.type:
            data["type"] = self.type
        if self.description:
            data["description"] = self.description
        if self.enum is not None:
            data["enum"] = list(self.enum)
        return data


class InputSchema(BaseModel):
    """Top-level object schema of a tool definition.

    Produced by a single total parse of the loosely typed JSON; nested
    objects and arrays are kept as opaque property entries.
    """

    model_config = ConfigDict(frozen=True)

    type: str = "object"
    properties: Dict[str, PropertySchema] = Field(default_factory=dict)
    required: Tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, raw: Any) -> "InputSchema":
        if isinstance(raw, InputSchema):
            return raw
        if not isinstance(raw, Mapping):
            return cls()

        required: List[str] = []
        raw_required = raw.get("required")
        if isinstance(raw_required, (list, tuple)):
            for item in raw_required:
                if isinstance(item, str) and item not in required:
                    required.append(item)

        properties: Dict[str, PropertySchema] = {}
        raw_properties = raw.get("properties")
        if isinstance(raw_properties, Mapping):
            for key, value in raw_properties.items():
                properties[str(key)] = PropertySchema.from_raw(value)

        schema_type = raw.get("type")
        return cls(
            type=schema_type if isinstance(schema_type, str) else "object",
            properties=properties,
            required=tuple(required),
        )

    def to_raw(self) -> Dict[str, Any]:
        """Render back into the tool definition file format."""
        data: Dict[str, Any] = {
            "type": self.type,
            "properties": {name: prop.to_raw() for name, prop in self.properties.items()},
        }
        if self.required:
            data["required"] = list(self.required)
        return data


class ToolDefinition(BaseModel):
    """One entry of the tool definitions file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tasker_name: str = Field(..., min_length=1, description="Task name inside Tasker")
    name: str = Field(..., min_length=1, description="Externally advertised tool name")
    description: str = Field(default="", description="Tool description for LLM consumption")
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the tool name is not blank."""
        if not v.strip():
            raise ValueError("Tool name cannot be empty")
        return v

    @field_validator("input_schema", mode="before")
    @classmethod
    def parse_input_schema(cls, v: Any) -> InputSchema:
        """Reject a non-object inputSchema; sub-shapes inside it stay lenient."""
        if v is not None and not isinstance(v, (Mapping, InputSchema)):
            raise ValueError(f"inputSchema must be an object, got {type(v).__name__}")
        return InputSchema.from_raw(v)

    def to_raw(self) -> Dict[str, Any]:
        return {
            "tasker_name": self.tasker_name,
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.to_raw(),
        }


class PropertyDescriptor(BaseModel):
    """Typed argument of a translated tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: PropertyKind
    required: bool = False
    description: str = ""
    enum: Optional[Tuple[str, ...]] = None


class ToolDescriptor(BaseModel):
    """Protocol-facing description of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    properties: Tuple[PropertyDescriptor, ...] = ()

    @property
    def required(self) -> List[str]:
        return [prop.name for prop in self.properties if prop.required]


class CallRequest(BaseModel):
    """Inbound invocation of a tool."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    arguments: Optional[Dict[str, Any]] = None


class CallResult(BaseModel):
    """Outcome of a tool call: result text or a structured failure message."""

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "CallResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "CallResult":
        return cls(text=message, is_error=True)
