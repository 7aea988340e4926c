from __future__ import annotations

from typing import Any, Dict, Iterator

from structured_gateway.models import SchemaKind, SchemaNode
from structured_gateway.structured.schema_map import map_type, translate_schema

TYPE_TAGS = {"object", "array", "string", "number", "boolean"}


def _walk(wire: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    yield wire
    if "items" in wire:
        yield from _walk(wire["items"])
    for child in wire.get("properties", {}).values():
        yield from _walk(child)


def _catalog() -> SchemaNode:
    return SchemaNode.object(
        "catalog",
        [
            SchemaNode.string("title", description="Catalog title"),
            SchemaNode.array(
                "products",
                SchemaNode.object(
                    "product",
                    [
                        SchemaNode.string("sku"),
                        SchemaNode.number("price", nullable=True),
                        SchemaNode.boolean("in_stock"),
                        SchemaNode.array(
                            "tags",
                            SchemaNode.object(
                                "tag",
                                [SchemaNode.enum("color", ["red", "green"])],
                            ),
                        ),
                    ],
                    required=["sku"],
                ),
            ),
        ],
        required=["title", "products"],
    )


def test_leaf_kinds_map_to_their_type_tags() -> None:
    assert translate_schema(SchemaNode.string("s")) == {"type": "string"}
    assert translate_schema(SchemaNode.number("n")) == {"type": "number"}
    assert translate_schema(SchemaNode.boolean("b")) == {"type": "boolean"}


def test_kinds_without_a_type_tag_fall_back_to_string() -> None:
    assert map_type(SchemaKind.ENUM) == "string"
    wire = translate_schema(SchemaNode.enum("status", ["open", "closed"]))
    assert wire == {"type": "string", "enum": ["open", "closed"]}


def test_nested_tree_keeps_property_order_and_shapes() -> None:
    wire = translate_schema(_catalog())

    assert wire["type"] == "object"
    assert list(wire["properties"]) == ["title", "products"]
    assert wire["required"] == ["title", "products"]
    assert wire["properties"]["title"] == {"type": "string", "description": "Catalog title"}

    product = wire["properties"]["products"]["items"]
    assert list(product["properties"]) == ["sku", "price", "in_stock", "tags"]
    assert product["required"] == ["sku"]
    assert product["properties"]["price"] == {"type": "number", "nullable": True}

    tag = product["properties"]["tags"]["items"]
    assert tag["properties"]["color"] == {"type": "string", "enum": ["red", "green"]}


def test_every_node_has_a_canonical_type_and_no_additional_properties() -> None:
    for node in _walk(translate_schema(_catalog())):
        assert node["type"] in TYPE_TAGS
        assert "additionalProperties" not in node


def test_nullable_is_omitted_unless_declared() -> None:
    for node in _walk(translate_schema(_catalog())):
        assert node.get("nullable", True) is True

    assert "nullable" not in translate_schema(SchemaNode.string("plain"))
    assert translate_schema(SchemaNode.string("maybe", nullable=True))["nullable"] is True


def test_leaf_nodes_carry_no_container_keys() -> None:
    wire = translate_schema(SchemaNode.boolean("flag"))
    assert set(wire) == {"type"}


def test_empty_object_omits_properties() -> None:
    wire = translate_schema(SchemaNode.object("empty", []))
    assert wire == {"type": "object"}


def test_nullable_array_and_object() -> None:
    wire = translate_schema(
        SchemaNode.array("list", SchemaNode.string("item"), nullable=True)
    )
    assert wire == {"type": "array", "items": {"type": "string"}, "nullable": True}

    wire = translate_schema(
        SchemaNode.object("thing", [SchemaNode.string("a")], nullable=True)
    )
    assert wire == {
        "type": "object",
        "properties": {"a": {"type": "string"}},
        "nullable": True,
    }


def test_translation_does_not_mutate_the_tree() -> None:
    schema = _catalog()
    before = schema.model_dump()
    translate_schema(schema)
    assert schema.model_dump() == before
    assert translate_schema(schema) == translate_schema(schema)
