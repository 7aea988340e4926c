"""Lower a :class:`SchemaNode` tree into the Gemini ``response_schema`` dialect.

The dialect differs from plain JSON Schema in a few ways:

* ``additionalProperties`` is never sent.
* ``nullable: true`` replaces ``["type", "null"]`` unions and is omitted
  entirely for non-nullable nodes.
* Kinds without a dedicated type tag (enums) are sent as ``string``.

Empty values are filtered rather than rendered, so an object schema without
properties carries no ``properties`` key and leaf nodes never carry ``items``.
The mapping is total: every node produces a wire schema.
"""
from __future__ import annotations

from typing import Any, Dict

from ..models.schema import SchemaKind, SchemaNode

WireSchema = Dict[str, Any]

_TYPE_TAGS: Dict[SchemaKind, str] = {
    SchemaKind.OBJECT: "object",
    SchemaKind.ARRAY: "array",
    SchemaKind.STRING: "string",
    SchemaKind.NUMBER: "number",
    SchemaKind.BOOLEAN: "boolean",
}


def map_type(kind: SchemaKind) -> str:
    return _TYPE_TAGS.get(kind, "string")


def translate_schema(node: SchemaNode) -> WireSchema:
    wire: WireSchema = {"type": map_type(node.kind)}
    if node.description:
        wire["description"] = node.description
    if node.options:
        wire["enum"] = list(node.options)

    if node.kind is SchemaKind.ARRAY and node.items is not None:
        wire["items"] = translate_schema(node.items)

    if node.kind is SchemaKind.OBJECT:
        properties = {
            child.name: translate_schema(child) for child in node.properties or []
        }
        if properties:
            wire["properties"] = properties
        if node.required:
            wire["required"] = list(node.required)

    if node.nullable:
        wire["nullable"] = True
    return wire
