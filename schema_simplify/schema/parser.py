"""
JSON Schema parser - converts JSON Schema dicts to schema trees.

This module builds SchemaNode trees (see types.py) from JSON Schema documents
and Pydantic models, so that schemas written in either form can be passed to
the simplifier. It handles:
    - The JSON Schema keywords Pydantic emits (Draft 2020-12 subset)
    - Local $ref / $defs references (inlined with jsonref)
    - Nullable unions (anyOf with a null branch, type lists)
    - Optional object properties (not listed in "required")
    - Tuples (prefixItems), records (additionalProperties) and dates

Usage:
    ```python
    from schema_simplify.schema import parse_schema, simplify

    schema = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 3},
            "born": {"type": "string", "format": "date"},
            "tags": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        "required": ["name"],
    }

    node = parse_schema(schema)
    simplified = simplify(node)
    ```
"""

import copy
import logging
from typing import Any, Dict, FrozenSet, List, Union

import jsonref
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from schema_simplify.schema.types import (
    ArraySchema,
    BooleanSchema,
    CustomSchema,
    DateSchema,
    DefaultSchema,
    EnumSchema,
    LiteralSchema,
    NullableSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RecordSchema,
    SchemaNode,
    StringSchema,
    TupleSchema,
    UnionSchema,
    UnknownSchema,
)

logger = logging.getLogger(__name__)

# Definition containers that $ref may point into
DEFS_KEYS = ("$defs", "definitions")

# Keywords the parser cannot represent
UNSUPPORTED_KEYWORDS = ("not", "if", "then", "else")


def parse_schema(schema: Union[Dict[str, Any], bool, type]) -> SchemaNode:
    """
    Parse a JSON Schema or Pydantic model into a SchemaNode tree.

    This is the main entry point for schema parsing. It accepts either:
    - A JSON Schema dictionary (or a boolean schema)
    - A Pydantic BaseModel class (converted to JSON Schema internally)

    Args:
        schema: JSON Schema dict or Pydantic model class

    Returns:
        SchemaNode: Root of the schema tree

    Raises:
        ValueError: If the schema uses remote or recursive references
        TypeError: If ``schema`` is neither a dict nor a Pydantic model

    Example:
        ```python
        # JSON Schema
        node = parse_schema({"type": "string", "format": "email"})

        # Pydantic model
        from pydantic import BaseModel

        class User(BaseModel):
            name: str
            age: int

        node = parse_schema(User)
        ```
    """
    if isinstance(schema, type):
        # Import here to avoid circular dependency
        from schema_simplify.schema.pydantic_adapter import is_pydantic_model, pydantic_to_schema

        if not is_pydantic_model(schema):
            raise TypeError(f"{schema.__name__} is not a Pydantic model")
        schema = pydantic_to_schema(schema)

    if isinstance(schema, bool):
        return _parse_boolean_schema(schema)

    if not isinstance(schema, dict):
        raise TypeError(f"Expected a JSON Schema dict, got {type(schema).__name__}")

    return _parse_schema_dict(resolve_refs(schema))


def resolve_refs(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Inline every local $ref of a schema document.

    Args:
        schema: JSON Schema dictionary (never modified)

    Returns:
        Dict: Copy of the schema without $ref nodes. Definition blocks
        ($defs / definitions) are dropped.

    Raises:
        ValueError: If a $ref is remote or the definitions are recursive
    """
    refs = _collect_refs(schema)
    if not refs:
        return schema

    remote = sorted(ref for ref in refs if not ref.startswith("#"))
    if remote:
        raise ValueError(f"Remote $ref is not supported: {remote[0]}")
    _check_acyclic(schema)

    logger.debug(f"Inlining {len(refs)} distinct $ref target(s)")
    resolved = jsonref.replace_refs(
        copy.deepcopy(schema),
        proxies=False,
        lazy_load=False,
        merge_props=True,
    )
    return {k: v for k, v in resolved.items() if k not in DEFS_KEYS}


def _collect_refs(node: Any) -> FrozenSet[str]:
    """Collect every $ref string found anywhere under ``node``."""
    found = set()
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            found.add(ref)
        for value in node.values():
            found |= _collect_refs(value)
    elif isinstance(node, list):
        for item in node:
            found |= _collect_refs(item)
    return frozenset(found)


def _check_acyclic(schema: Dict[str, Any]) -> None:
    """
    Reject definitions that reference themselves, directly or indirectly.

    Schema trees are finite by construction, so recursive models cannot be
    represented.
    """
    definitions = {}
    for key in DEFS_KEYS:
        for name, sub_schema in schema.get(key, {}).items():
            definitions[f"#/{key}/{name}"] = sub_schema

    done = set()

    def visit(ref: str, stack: List[str]) -> None:
        if ref in stack:
            raise ValueError(f"Recursive $ref is not supported: {ref}")
        if ref in done or ref not in definitions:
            return
        for target in _collect_refs(definitions[ref]):
            visit(target, stack + [ref])
        done.add(ref)

    for ref in definitions:
        visit(ref, [])


def _parse_schema_dict(schema: Dict[str, Any]) -> SchemaNode:
    """
    Internal method to parse a JSON Schema dictionary.

    Builds the structural node, then applies the "default" and "description"
    annotations to it, in that order.

    Args:
        schema: JSON Schema dictionary without $ref

    Returns:
        SchemaNode: Parsed node
    """
    if isinstance(schema, bool):
        return _parse_boolean_schema(schema)

    if "$ref" in schema:
        raise ValueError(f"Unresolved $ref: {schema['$ref']}")

    node = _parse_structure(schema)

    if "default" in schema:
        node = DefaultSchema(node, default_value=schema["default"])

    description = schema.get("description")
    if description:
        node = node.describe(description)

    return node


def _parse_structure(schema: Dict[str, Any]) -> SchemaNode:
    """Dispatch on the structural keywords of a schema."""
    if "const" in schema:
        if schema["const"] is None:
            return NullSchema()
        return LiteralSchema(schema["const"])
    if "enum" in schema:
        return _parse_enum(schema["enum"])

    # Treat oneOf same as anyOf
    if "anyOf" in schema:
        return _parse_union(schema["anyOf"])
    if "oneOf" in schema:
        return _parse_union(schema["oneOf"])
    if "allOf" in schema:
        return _parse_all_of(schema)

    # Get type - may be string or list of strings
    schema_type = schema.get("type")

    if schema_type is None:
        # No type specified - try to infer from keywords
        if "properties" in schema or isinstance(schema.get("additionalProperties"), dict):
            schema_type = "object"
        elif "items" in schema or "prefixItems" in schema:
            schema_type = "array"
        else:
            return UnknownSchema()

    # Handle array of types (e.g., ["string", "null"])
    if isinstance(schema_type, list):
        shared = {k: v for k, v in schema.items() if k not in ("type", "default", "description")}
        return _parse_union([{**shared, "type": t} for t in schema_type])

    if schema_type == "object":
        return _parse_object(schema)
    elif schema_type == "array":
        return _parse_array(schema)
    elif schema_type == "string":
        return _parse_string(schema)
    elif schema_type == "integer":
        return _parse_number(schema, is_integer=True)
    elif schema_type == "number":
        return _parse_number(schema, is_integer=False)
    elif schema_type == "boolean":
        return BooleanSchema()
    elif schema_type == "null":
        return NullSchema()
    else:
        logger.debug(f"Unrecognized schema type {schema_type!r}, keeping it as a custom node")
        return CustomSchema(type_label=str(schema_type), payload=schema)


def _parse_boolean_schema(schema: bool) -> SchemaNode:
    """``true`` accepts anything; ``false`` accepts nothing."""
    if schema:
        return UnknownSchema()
    return CustomSchema(type_label="never")


def _parse_object(schema: Dict[str, Any]) -> SchemaNode:
    """
    Parse an object schema.

    An object that declares no properties but gives additionalProperties a
    schema is a record (arbitrary keys, typed values).

    Args:
        schema: JSON Schema dict with type=object

    Returns:
        ObjectSchema or RecordSchema
    """
    properties = schema.get("properties")
    additional = schema.get("additionalProperties")

    if properties is None and isinstance(additional, dict):
        key_schema = schema.get("propertyNames")
        return RecordSchema(
            _parse_schema_dict(additional),
            key_type=_parse_schema_dict(key_schema) if key_schema is not None else None,
        )

    required = set(schema.get("required", []))
    fields = {}
    for prop_name, prop_schema in (properties or {}).items():
        node = _parse_schema_dict(prop_schema)
        # A default already implies the property may be omitted
        if prop_name not in required and not isinstance(node, DefaultSchema):
            node = OptionalSchema(node)
        fields[prop_name] = node

    return ObjectSchema(fields)


def _parse_array(schema: Dict[str, Any]) -> SchemaNode:
    """
    Parse an array schema.

    Args:
        schema: JSON Schema dict with type=array

    Returns:
        TupleSchema for positional items (prefixItems or a list of items),
        ArraySchema otherwise
    """
    prefix_items = schema.get("prefixItems")
    items = schema.get("items")

    if prefix_items is None and isinstance(items, list):
        prefix_items = items

    if prefix_items is not None:
        return TupleSchema([_parse_schema_dict(item) for item in prefix_items])

    element = _parse_schema_dict(items) if items is not None else UnknownSchema()
    return ArraySchema(
        element,
        min_items=schema.get("minItems"),
        max_items=schema.get("maxItems"),
    )


def _parse_string(schema: Dict[str, Any]) -> SchemaNode:
    """
    Parse a string schema.

    Args:
        schema: JSON Schema dict with type=string

    Returns:
        DateSchema for the date / date-time formats, StringSchema otherwise
    """
    string_format = schema.get("format")
    if string_format in ("date", "date-time"):
        return DateSchema(include_time=string_format == "date-time")

    return StringSchema(
        format=string_format,
        min_length=schema.get("minLength"),
        max_length=schema.get("maxLength"),
        pattern=schema.get("pattern"),
    )


def _parse_number(schema: Dict[str, Any], is_integer: bool) -> NumberSchema:
    """
    Parse a number or integer schema.

    Args:
        schema: JSON Schema dict with type=number or type=integer
        is_integer: True for integer, False for number

    Returns:
        NumberSchema: Parsed number node
    """
    minimum = schema.get("minimum")
    maximum = schema.get("maximum")

    # Exclusive bounds are stored as plain bounds
    exclusive_min = schema.get("exclusiveMinimum")
    if isinstance(exclusive_min, (int, float)) and not isinstance(exclusive_min, bool):
        minimum = exclusive_min

    exclusive_max = schema.get("exclusiveMaximum")
    if isinstance(exclusive_max, (int, float)) and not isinstance(exclusive_max, bool):
        maximum = exclusive_max

    return NumberSchema(
        is_integer=is_integer,
        minimum=minimum,
        maximum=maximum,
        multiple_of=schema.get("multipleOf"),
    )


def _parse_enum(values: List[Any]) -> SchemaNode:
    """
    Parse an "enum" keyword.

    A null member makes the result nullable. One remaining value is a
    literal; several strings are an enum; anything else is a union of
    literals.
    """
    has_null = None in values
    rest = [v for v in values if v is not None]

    if not rest:
        return NullSchema()

    if len(rest) == 1:
        node: SchemaNode = LiteralSchema(rest[0])
    elif all(isinstance(v, str) for v in rest):
        node = EnumSchema(rest)
    else:
        node = UnionSchema([LiteralSchema(v) for v in rest])

    return NullableSchema(node) if has_null else node


def _parse_union(schemas: List[Any]) -> SchemaNode:
    """
    Parse a union (anyOf/oneOf).

    Null branches are folded into a NullableSchema wrapper; a single
    remaining branch is returned unwrapped.

    Args:
        schemas: List of JSON Schema dicts

    Returns:
        SchemaNode: Union, nullable or single parsed branch
    """
    options = [_parse_schema_dict(s) for s in schemas]
    non_null = [o for o in options if not isinstance(o, NullSchema)]

    if not non_null:
        return NullSchema()

    node = non_null[0] if len(non_null) == 1 else UnionSchema(non_null)
    if len(non_null) < len(options):
        return NullableSchema(node)
    return node


def _parse_all_of(schema: Dict[str, Any]) -> SchemaNode:
    """
    Parse an "allOf" keyword.

    A single-member allOf (as emitted for annotated references) is the member
    itself. Real intersections have no node kind and are kept as custom nodes.
    """
    members = schema["allOf"]
    if len(members) == 1:
        return _parse_schema_dict(members[0])
    return CustomSchema(type_label="intersection", payload=schema)


def normalize_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a JSON Schema for easier processing.

    This function adds the defaults the parser assumes for missing keywords.

    Args:
        schema: JSON Schema dictionary (never modified)

    Returns:
        Dict: Normalized schema

    Example:
        ```python
        normalized = normalize_schema({"type": "object"})
        # normalized = {"type": "object", "properties": {}, "required": []}
        ```
    """
    normalized = schema.copy()

    schema_type = normalized.get("type")

    if schema_type == "object":
        normalized.setdefault("properties", {})
        normalized.setdefault("required", [])

    elif schema_type == "array":
        if "items" not in normalized and "prefixItems" not in normalized:
            # Default to any type
            normalized["items"] = {}

    return normalized


def validate_schema(schema: Dict[str, Any]) -> None:
    """
    Validate that a schema is well-formed and supported.

    Well-formedness is checked against the Draft 2020-12 meta-schema; support
    is checked by looking for keywords the parser cannot represent.

    Args:
        schema: JSON Schema dictionary

    Raises:
        ValueError: If schema is invalid or uses unsupported features

    Example:
        ```python
        validate_schema({"type": "unknown"})  # Raises ValueError
        ```
    """
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema: {e.message}") from e

    _check_supported(schema)


def _check_supported(schema: Any) -> None:
    """Recursively reject keywords listed in UNSUPPORTED_KEYWORDS."""
    if isinstance(schema, list):
        for item in schema:
            _check_supported(item)
        return
    if not isinstance(schema, dict):
        return

    for keyword in UNSUPPORTED_KEYWORDS:
        if keyword in schema:
            raise ValueError(f"Keyword '{keyword}' is not supported")

    for key in ("items", "prefixItems", "anyOf", "oneOf", "allOf", "additionalProperties"):
        if key in schema:
            _check_supported(schema[key])

    for key in ("properties", *DEFS_KEYS):
        for sub_schema in schema.get(key, {}).values():
            _check_supported(sub_schema)
