"""
Schema node type definitions.

This module defines the schema tree used throughout schema_simplify. A schema
tree describes the shape of acceptable data (never the data itself) and is
built either directly with the node constructors below or by parsing a JSON
Schema document / Pydantic model (see parser.py).

Type Hierarchy:
    SchemaNode (abstract)
    ├── StringSchema: Strings with optional format / length / pattern constraints
    ├── NumberSchema: Integers or floats with optional range constraints
    ├── BooleanSchema: true / false
    ├── DateSchema: Dates and date-times
    ├── EnumSchema: One of an ordered list of string values
    ├── ArraySchema: Homogeneous arrays
    ├── ObjectSchema: Objects with named, ordered fields
    ├── UnionSchema: One of two or more alternatives
    ├── OptionalSchema: Wrapper - value may be absent
    ├── NullableSchema: Wrapper - value may be null
    ├── DefaultSchema: Wrapper - value defaults when absent
    ├── EffectsSchema: Wrapper - refinement / transformation around a base type
    ├── LiteralSchema: Exactly one scalar value
    ├── RecordSchema: Map with arbitrary keys and typed values
    ├── TupleSchema: Fixed-position arrays
    ├── UnknownSchema: Any value, no constraints declared
    ├── AnySchema: Any value, explicitly opted out of typing
    ├── NullSchema: Only null
    └── CustomSchema: Any other, host-specific kind

Nodes are frozen dataclasses: once built they are never modified. The fluent
helpers (describe, optional, nullable, default, ...) always return new nodes.

Every node carries an optional free-text description. It is metadata, not
structure, and is passed as a keyword argument:

    ```python
    from schema_simplify.schema.types import ObjectSchema, StringSchema

    user = ObjectSchema(
        {
            "email": StringSchema(format="email").describe("Contact address"),
            "nickname": StringSchema().optional(),
        },
        description="A user profile",
    )
    ```
"""

from abc import ABC
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union


class SchemaKind(str, Enum):
    """Kind tag carried by every schema node class."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    EFFECTS = "effects"
    LITERAL = "literal"
    RECORD = "record"
    TUPLE = "tuple"
    UNKNOWN = "unknown"
    ANY = "any"
    NULL = "null"
    CUSTOM = "custom"


@dataclass(frozen=True)
class SchemaNode(ABC):
    """
    Abstract base class for all schema node kinds.

    Subclasses set the ``kind`` class attribute; the simplifier dispatches on
    it rather than on the Python class.

    Attributes:
        description: Optional human-readable description of the node
    """

    kind: ClassVar[SchemaKind]

    description: Optional[str] = field(default=None, kw_only=True)

    @property
    def type_name(self) -> str:
        """Name used for this kind in diagnostics (e.g. "RecordSchema")."""
        return type(self).__name__

    def describe(self, description: Optional[str]) -> "SchemaNode":
        """Return a copy of this node carrying ``description``."""
        return replace(self, description=description)

    def optional(self) -> "OptionalSchema":
        """Wrap this node so the value may be absent."""
        return OptionalSchema(self)

    def nullable(self) -> "NullableSchema":
        """Wrap this node so the value may be null."""
        return NullableSchema(self)

    def default(self, value: Any) -> "DefaultSchema":
        """Wrap this node so ``value`` is used when the value is absent."""
        return DefaultSchema(self, default_value=value)

    def array(self) -> "ArraySchema":
        """Return an array schema whose elements are this node."""
        return ArraySchema(self)

    def refine(self, check: Callable[[Any], bool]) -> "EffectsSchema":
        """Attach a refinement predicate to this node."""
        return EffectsSchema(self, effect_type="refinement", effect=check)

    def transform(self, func: Callable[[Any], Any]) -> "EffectsSchema":
        """Attach a transformation to this node."""
        return EffectsSchema(self, effect_type="transform", effect=func)


@dataclass(frozen=True)
class StringSchema(SchemaNode):
    """
    Represents a string, optionally constrained.

    Attributes:
        format: Named format such as "email", "uri" or "uuid" (None = any)
        min_length: Minimum length (None = no limit)
        max_length: Maximum length (None = no limit)
        pattern: Regex the value must match (None = any)
    """

    kind: ClassVar[SchemaKind] = SchemaKind.STRING

    format: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None


@dataclass(frozen=True)
class NumberSchema(SchemaNode):
    """
    Represents a number (integer or float).

    Attributes:
        is_integer: True for integers only
        minimum: Minimum value (None = no limit)
        maximum: Maximum value (None = no limit)
        multiple_of: Required divisor (None = any)
    """

    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER

    is_integer: bool = False
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    multiple_of: Optional[Union[int, float]] = None


@dataclass(frozen=True)
class BooleanSchema(SchemaNode):
    """Represents a boolean value."""

    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN


@dataclass(frozen=True)
class DateSchema(SchemaNode):
    """
    Represents a calendar date or a timestamp.

    Attributes:
        include_time: True for date-times, False for plain dates
    """

    kind: ClassVar[SchemaKind] = SchemaKind.DATE

    include_time: bool = False


@dataclass(frozen=True)
class EnumSchema(SchemaNode):
    """
    Represents one of a fixed, ordered list of values.

    Attributes:
        values: Allowed values, in declaration order
    """

    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    values: List[Any]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("EnumSchema requires at least one value")


@dataclass(frozen=True)
class ArraySchema(SchemaNode):
    """
    Represents an array whose elements all match ``element``.

    Attributes:
        element: Schema for every element
        min_items: Minimum number of items (None = no limit)
        max_items: Maximum number of items (None = no limit)
    """

    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    element: SchemaNode
    min_items: Optional[int] = None
    max_items: Optional[int] = None


@dataclass(frozen=True)
class ObjectSchema(SchemaNode):
    """
    Represents an object with named fields.

    Field order is the insertion order of ``fields`` and is preserved by every
    transformation.

    Attributes:
        fields: Mapping of field name to field schema
    """

    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    fields: Dict[str, SchemaNode] = field(default_factory=dict)


@dataclass(frozen=True)
class UnionSchema(SchemaNode):
    """
    Represents a value matching any one of ``options``.

    Attributes:
        options: Two or more alternatives, in declaration order
    """

    kind: ClassVar[SchemaKind] = SchemaKind.UNION

    options: List[SchemaNode]

    def __post_init__(self) -> None:
        if len(self.options) < 2:
            raise ValueError(
                f"UnionSchema requires at least 2 options, got {len(self.options)}"
            )


@dataclass(frozen=True)
class OptionalSchema(SchemaNode):
    """Wrapper: the value may be absent."""

    kind: ClassVar[SchemaKind] = SchemaKind.OPTIONAL

    inner: SchemaNode


@dataclass(frozen=True)
class NullableSchema(SchemaNode):
    """Wrapper: the value may be null."""

    kind: ClassVar[SchemaKind] = SchemaKind.NULLABLE

    inner: SchemaNode


@dataclass(frozen=True)
class DefaultSchema(SchemaNode):
    """
    Wrapper: ``default_value`` is used when the value is absent.

    Attributes:
        inner: Wrapped schema
        default_value: Value substituted when absent (any value, None included)
    """

    kind: ClassVar[SchemaKind] = SchemaKind.DEFAULT

    inner: SchemaNode
    default_value: Any = None


@dataclass(frozen=True)
class EffectsSchema(SchemaNode):
    """
    Wrapper: a refinement or transformation applied around a base type.

    Attributes:
        inner: The declared base type
        effect_type: "refinement", "transform" or "preprocess"
        effect: The refinement predicate / transformation function, if any
    """

    kind: ClassVar[SchemaKind] = SchemaKind.EFFECTS

    inner: SchemaNode
    effect_type: str = "refinement"
    effect: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class LiteralSchema(SchemaNode):
    """
    Represents exactly one scalar value.

    Attributes:
        value: The only accepted value
    """

    kind: ClassVar[SchemaKind] = SchemaKind.LITERAL

    value: Any


@dataclass(frozen=True)
class RecordSchema(SchemaNode):
    """
    Represents a map with arbitrary keys.

    Attributes:
        value_type: Schema for every value
        key_type: Schema for keys (None = any string)
    """

    kind: ClassVar[SchemaKind] = SchemaKind.RECORD

    value_type: SchemaNode
    key_type: Optional[SchemaNode] = None


@dataclass(frozen=True)
class TupleSchema(SchemaNode):
    """
    Represents a fixed-length array with per-position types.

    Attributes:
        items: Schema for each position, in order
    """

    kind: ClassVar[SchemaKind] = SchemaKind.TUPLE

    items: List[SchemaNode] = field(default_factory=list)


@dataclass(frozen=True)
class UnknownSchema(SchemaNode):
    """Any value; no constraints declared."""

    kind: ClassVar[SchemaKind] = SchemaKind.UNKNOWN


@dataclass(frozen=True)
class AnySchema(SchemaNode):
    """Any value; typing explicitly opted out."""

    kind: ClassVar[SchemaKind] = SchemaKind.ANY


@dataclass(frozen=True)
class NullSchema(SchemaNode):
    """Only null."""

    kind: ClassVar[SchemaKind] = SchemaKind.NULL


@dataclass(frozen=True)
class CustomSchema(SchemaNode):
    """
    Any host-specific kind outside the enumerated set.

    Attributes:
        type_label: Name of the kind, e.g. "bigint" or "intersection"
        payload: Arbitrary kind-specific data, carried but never interpreted
    """

    kind: ClassVar[SchemaKind] = SchemaKind.CUSTOM

    type_label: str
    payload: Any = None

    @property
    def type_name(self) -> str:
        return self.type_label


# Kinds the downstream structured-output consumer understands
RESTRICTED_KINDS = frozenset({
    SchemaKind.STRING,
    SchemaKind.NUMBER,
    SchemaKind.BOOLEAN,
    SchemaKind.ENUM,
    SchemaKind.ARRAY,
    SchemaKind.OBJECT,
    SchemaKind.UNION,
    SchemaKind.NULLABLE,
})


def children(node: SchemaNode) -> List[Tuple[str, SchemaNode]]:
    """
    List the direct children of a node together with their path segments.

    Args:
        node: Any schema node

    Returns:
        List of (segment, child) pairs. Segments are appended to a parent
        path to locate the child: ".name" for object fields, "[]" for array
        elements, "[i]" for tuple items, "|i" for union options and "{}" for
        record values. Wrappers share their inner node's location, so their
        segment is empty.
    """
    if isinstance(node, ObjectSchema):
        return [(f".{name}", child) for name, child in node.fields.items()]
    if isinstance(node, ArraySchema):
        return [("[]", node.element)]
    if isinstance(node, UnionSchema):
        return [(f"|{i}", option) for i, option in enumerate(node.options)]
    if isinstance(node, TupleSchema):
        return [(f"[{i}]", item) for i, item in enumerate(node.items)]
    if isinstance(node, RecordSchema):
        return [("{}", node.value_type)]
    if isinstance(node, (OptionalSchema, NullableSchema, DefaultSchema, EffectsSchema)):
        return [("", node.inner)]
    return []
