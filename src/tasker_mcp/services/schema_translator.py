"""Translation of tool input schemas into typed property descriptors."""

from typing import Any, Dict, Iterable, List

from ..models.tool import (
    InputSchema,
    PropertyDescriptor,
    PropertyKind,
    ToolDefinition,
    ToolDescriptor,
)


def translate(input_schema: Any) -> List[PropertyDescriptor]:
    """Translate an input schema into descriptors sorted by property name.

    Accepts either a parsed ``InputSchema`` or the raw JSON value. Never
    raises: a missing or malformed schema yields no properties, and a
    malformed property degrades to an undocumented string argument.
    """
    schema = InputSchema.from_raw(input_schema)
    required = set(schema.required)

    descriptors = []
    for name in sorted(schema.properties):
        prop = schema.properties[name]
        descriptors.append(
            PropertyDescriptor(
                name=name,
                kind=PropertyKind.resolve(prop.type),
                required=name in required,
                description=prop.description,
                enum=prop.enum,
            )
        )
    return descriptors


def build_descriptor(definition: ToolDefinition) -> ToolDescriptor:
    """Build the protocol-facing descriptor for a tool definition."""
    return ToolDescriptor(
        name=definition.name,
        description=definition.description,
        properties=tuple(translate(definition.input_schema)),
    )


def to_json_schema(properties: Iterable[PropertyDescriptor]) -> Dict[str, Any]:
    """Render descriptors as the JSON schema advertised over MCP."""
    schema_properties: Dict[str, Any] = {}
    required: List[str] = []
    for prop in properties:
        entry: Dict[str, Any] = {"type": prop.kind.value}
        if prop.description:
            entry["description"] = prop.description
        if prop.enum is not None:
            entry["enum"] = list(prop.enum)
        schema_properties[prop.name] = entry
        if prop.required:
            required.append(prop.name)

    schema: Dict[str, Any] = {"type": "object", "properties": schema_properties}
    if required:
        schema["required"] = required
    return schema
