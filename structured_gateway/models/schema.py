"""Provider-agnostic description of the structured output shape."""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class SchemaKind(str, Enum):
    """Discriminant of a :class:`SchemaNode`."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


class SchemaNode(BaseModel):
    """One node of a JSON-Schema-like tree.

    ``properties`` belongs to object nodes, ``items`` to array nodes and
    ``options`` to enum nodes. The tree is finite: children are plain values,
    never references back to an ancestor.
    """

    name: str = Field(..., description="Property name of the node within its parent")
    kind: SchemaKind = Field(..., description="Type discriminant of the node")
    description: str = Field(default="", description="Human readable description")
    nullable: bool = Field(default=False, description="Whether null is an accepted value")
    required: List[str] = Field(
        default_factory=list,
        description="Names of required properties (object nodes only)",
    )
    properties: Optional[List[SchemaNode]] = Field(
        default=None, description="Ordered child properties (object nodes only)"
    )
    items: Optional[SchemaNode] = Field(
        default=None, description="Element schema (array nodes only)"
    )
    options: Optional[List[Any]] = Field(
        default=None, description="Allowed values (enum nodes only)"
    )

    @field_validator("required")
    @classmethod
    def dedupe_required(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def check_kind_payload(self) -> "SchemaNode":
        if self.kind is SchemaKind.OBJECT:
            if self.properties is None:
                self.properties = []
            names = {child.name for child in self.properties}
            unknown = [name for name in self.required if name not in names]
            if unknown:
                raise ValueError(
                    f"'{self.name}': required names are not properties: {', '.join(unknown)}"
                )
        elif self.properties is not None:
            raise ValueError(f"'{self.name}': properties are only allowed on object schemas")
        elif self.required:
            raise ValueError(f"'{self.name}': required is only allowed on object schemas")

        if self.kind is SchemaKind.ARRAY:
            if self.items is None:
                raise ValueError(f"'{self.name}': array schemas need an items schema")
        elif self.items is not None:
            raise ValueError(f"'{self.name}': items are only allowed on array schemas")

        if self.kind is SchemaKind.ENUM:
            if not self.options:
                raise ValueError(f"'{self.name}': enum schemas need at least one option")
        elif self.options is not None:
            raise ValueError(f"'{self.name}': options are only allowed on enum schemas")
        return self

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def string(cls, name: str, description: str = "", nullable: bool = False) -> "SchemaNode":
        return cls(name=name, kind=SchemaKind.STRING, description=description, nullable=nullable)

    @classmethod
    def number(cls, name: str, description: str = "", nullable: bool = False) -> "SchemaNode":
        return cls(name=name, kind=SchemaKind.NUMBER, description=description, nullable=nullable)

    @classmethod
    def boolean(cls, name: str, description: str = "", nullable: bool = False) -> "SchemaNode":
        return cls(name=name, kind=SchemaKind.BOOLEAN, description=description, nullable=nullable)

    @classmethod
    def enum(
        cls,
        name: str,
        options: List[Any],
        description: str = "",
        nullable: bool = False,
    ) -> "SchemaNode":
        return cls(
            name=name,
            kind=SchemaKind.ENUM,
            options=list(options),
            description=description,
            nullable=nullable,
        )

    @classmethod
    def array(
        cls,
        name: str,
        items: "SchemaNode",
        description: str = "",
        nullable: bool = False,
    ) -> "SchemaNode":
        return cls(
            name=name,
            kind=SchemaKind.ARRAY,
            items=items,
            description=description,
            nullable=nullable,
        )

    @classmethod
    def object(
        cls,
        name: str,
        properties: List["SchemaNode"],
        required: Optional[List[str]] = None,
        description: str = "",
        nullable: bool = False,
    ) -> "SchemaNode":
        return cls(
            name=name,
            kind=SchemaKind.OBJECT,
            properties=list(properties),
            required=list(required or []),
            description=description,
            nullable=nullable,
        )


SchemaNode.model_rebuild()
