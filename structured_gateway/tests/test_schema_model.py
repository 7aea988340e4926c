from __future__ import annotations

import pytest
from pydantic import ValidationError

from structured_gateway.models import SchemaKind, SchemaNode


def test_object_without_properties_gets_an_empty_list() -> None:
    node = SchemaNode(name="root", kind=SchemaKind.OBJECT)
    assert node.properties == []


def test_required_is_deduplicated_in_order() -> None:
    node = SchemaNode.object(
        "root", [SchemaNode.string("a"), SchemaNode.string("b")], required=["a", "b", "a"]
    )
    assert node.required == ["a", "b"]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "x", "kind": "string", "properties": []},
        {"name": "x", "kind": "number", "required": ["a"]},
        {"name": "x", "kind": "array"},
        {"name": "x", "kind": "object", "items": {"name": "i", "kind": "string"}},
        {"name": "x", "kind": "enum"},
        {"name": "x", "kind": "boolean", "options": [True]},
    ],
)
def test_payload_must_match_kind(payload) -> None:
    with pytest.raises(ValidationError):
        SchemaNode.model_validate(payload)


def test_nested_payload_is_parsed_from_json() -> None:
    node = SchemaNode.model_validate(
        {
            "name": "root",
            "kind": "object",
            "properties": [
                {"name": "items", "kind": "array", "items": {"name": "item", "kind": "number"}}
            ],
        }
    )
    assert node.properties[0].items.kind is SchemaKind.NUMBER


def test_required_names_must_be_properties() -> None:
    with pytest.raises(ValidationError, match="required names are not properties: nmae"):
        SchemaNode.object("person", [SchemaNode.string("name")], required=["nmae"])


def test_required_on_empty_object_is_rejected() -> None:
    with pytest.raises(ValidationError):
        SchemaNode.model_validate({"name": "root", "kind": "object", "required": ["a"]})
