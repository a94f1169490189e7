"""
Response-schema description shared by every assist task.

A schema is a small tree of SchemaNodes.  Each node is one of five kinds
(string, number, boolean, array, object) and may carry a description, a
nullable flag and, for strings, a closed set of allowed values.  Objects
list their properties and which of them are required.

The tree is rendered to JSON Schema for the endpoint's structured-output
mode.  It is declarative only: decoding and validation of the response
happen in the response contracts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence


class SchemaType(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class SchemaNode:
    type: SchemaType
    description: str | None = None
    nullable: bool = False
    enum: tuple[str, ...] | None = None
    items: SchemaNode | None = None
    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.enum is not None and self.type is not SchemaType.STRING:
            raise ValueError("enum is only supported on string nodes")
        if self.type is SchemaType.ARRAY and self.items is None:
            raise ValueError("array nodes need an items schema")
        if self.type is not SchemaType.ARRAY and self.items is not None:
            raise ValueError("items is only valid on array nodes")
        if self.type is not SchemaType.OBJECT and (self.properties or self.required):
            raise ValueError("properties/required are only valid on object nodes")
        unknown = set(self.required) - set(self.properties)
        if unknown:
            raise ValueError(f"required names unknown properties: {sorted(unknown)}")

    def to_json_schema(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        out["type"] = [self.type.value, "null"] if self.nullable else self.type.value
        if self.description:
            out["description"] = self.description
        if self.enum is not None:
            values: list[Any] = list(self.enum)
            if self.nullable:
                values.append(None)
            out["enum"] = values
        if self.items is not None:
            out["items"] = self.items.to_json_schema()
        if self.type is SchemaType.OBJECT:
            out["properties"] = {
                name: node.to_json_schema() for name, node in self.properties.items()
            }
            out["required"] = list(self.required)
        return out


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def string(
    description: str | None = None,
    *,
    nullable: bool = False,
    enum: Sequence[str] | None = None,
) -> SchemaNode:
    return SchemaNode(
        SchemaType.STRING,
        description=description,
        nullable=nullable,
        enum=tuple(enum) if enum is not None else None,
    )


def number(description: str | None = None, *, nullable: bool = False) -> SchemaNode:
    return SchemaNode(SchemaType.NUMBER, description=description, nullable=nullable)


def boolean(description: str | None = None, *, nullable: bool = False) -> SchemaNode:
    return SchemaNode(SchemaType.BOOLEAN, description=description, nullable=nullable)


def array(
    items: SchemaNode,
    description: str | None = None,
    *,
    nullable: bool = False,
) -> SchemaNode:
    return SchemaNode(
        SchemaType.ARRAY, description=description, nullable=nullable, items=items
    )


def obj(
    properties: Mapping[str, SchemaNode],
    description: str | None = None,
    *,
    required: Sequence[str] | None = None,
    nullable: bool = False,
) -> SchemaNode:
    """Object node.  ``required`` defaults to every property."""
    return SchemaNode(
        SchemaType.OBJECT,
        description=description,
        nullable=nullable,
        properties=dict(properties),
        required=tuple(properties) if required is None else tuple(required),
    )


@dataclass(frozen=True)
class ResponseSchema:
    """Named root of a response contract, as sent to the endpoint."""
    name: str
    root: SchemaNode

    def __post_init__(self) -> None:
        if self.root.type is not SchemaType.OBJECT:
            raise ValueError("response schema root must be an object")

    def response_format(self) -> dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {
                "name": self.name,
                "schema": self.root.to_json_schema(),
            },
        }
