"""
Plain-data codec for schema trees.

Schema trees are dataclasses; this module converts them to and from plain
JSON-compatible dicts so they can be printed, saved or compared. The format
mirrors the node classes one-to-one and is not JSON Schema:

    {"kind": "array", "element": {"kind": "string"}, "description": "Tags"}

Fields left at their default value are omitted. The callable attached to an
EffectsSchema cannot be serialized; it is dropped and restored as None.
"""

from dataclasses import fields
from typing import Any, Dict

from schema_simplify.schema.types import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    CustomSchema,
    DateSchema,
    DefaultSchema,
    EffectsSchema,
    EnumSchema,
    LiteralSchema,
    NullableSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RecordSchema,
    SchemaKind,
    SchemaNode,
    StringSchema,
    TupleSchema,
    UnionSchema,
    UnknownSchema,
)

NODE_CLASSES = {
    cls.kind: cls
    for cls in (
        StringSchema,
        NumberSchema,
        BooleanSchema,
        DateSchema,
        EnumSchema,
        ArraySchema,
        ObjectSchema,
        UnionSchema,
        OptionalSchema,
        NullableSchema,
        DefaultSchema,
        EffectsSchema,
        LiteralSchema,
        RecordSchema,
        TupleSchema,
        UnknownSchema,
        AnySchema,
        NullSchema,
        CustomSchema,
    )
}

# Attributes never written out
_SKIPPED = {"effect"}


def node_to_dict(node: SchemaNode) -> Dict[str, Any]:
    """
    Convert a schema tree to plain data.

    Args:
        node: Root of the schema tree

    Returns:
        Dict: JSON-compatible representation of the tree
    """
    data: Dict[str, Any] = {"kind": node.kind.value}
    for f in fields(node):
        if f.name in _SKIPPED:
            continue
        value = getattr(node, f.name)
        if value is None and f.name not in ("default_value", "value"):
            continue
        if f.name in ("is_integer", "include_time") and value is False:
            continue
        data[f.name] = _value_to_data(value)
    return data


def _value_to_data(value: Any) -> Any:
    if isinstance(value, SchemaNode):
        return node_to_dict(value)
    if isinstance(value, dict):
        return {k: _value_to_data(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_value_to_data(v) for v in value]
    return value


def node_from_dict(data: Dict[str, Any]) -> SchemaNode:
    """
    Rebuild a schema tree from the output of node_to_dict.

    Args:
        data: Plain-data representation of a tree

    Returns:
        SchemaNode: The rebuilt tree

    Raises:
        ValueError: If a "kind" is missing or unknown
    """
    try:
        kind = SchemaKind(data["kind"])
    except (KeyError, ValueError) as e:
        raise ValueError(f"Invalid schema node data: {data!r}") from e

    cls = NODE_CLASSES[kind]
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _data_to_value(f.name, data[f.name])
    return cls(**kwargs)


def _data_to_value(name: str, value: Any) -> Any:
    if name in ("element", "inner", "value_type", "key_type"):
        return node_from_dict(value) if value is not None else None
    if name == "fields":
        return {k: node_from_dict(v) for k, v in value.items()}
    if name in ("options", "items"):
        return [node_from_dict(v) for v in value]
    return value

