"""
Schema simplifier - rewrite a schema tree into the restricted vocabulary.

Structured-output and function-calling contracts only understand a small set
of schema constructs: plain strings, numbers, booleans, enums, arrays,
objects, unions and nullable wrappers. This module rewrites an arbitrarily
rich schema tree into the closest tree built from those constructs only.

Rewrite Rules (one per node kind):
    String    -> String (format / length / pattern dropped)
    Number    -> Number (integer flag / range dropped)
    Boolean   -> Boolean
    Date      -> String
    Enum      -> Enum (same values, same order)
    Array     -> Array of the simplified element
    Object    -> Object with every field simplified, order preserved
    Union     -> Union of the simplified options, arity unchanged
    Optional  -> Nullable of the simplified inner type
    Nullable  -> Nullable of the simplified inner type
    Default   -> the simplified inner type (default value discarded)
    Effects   -> the simplified inner type (refinement / transform discarded)
    Literal   -> single-value Enum
    Record    -> empty Object (warning)
    Tuple     -> Array of the item type, or of a Union of the item types
    anything else -> String (warning)

Descriptions are carried from every input node to its output node. For the
unwrapping rules (Default, Effects) the wrapper's own description wins; when
the wrapper has none, the inner node keeps its description.

Usage:
    ```python
    from schema_simplify.schema import simplify
    from schema_simplify.schema.types import (
        ArraySchema, BooleanSchema, ObjectSchema, StringSchema,
    )

    schema = ObjectSchema({
        "name": StringSchema(min_length=3).optional().describe("Display name"),
        "flags": ArraySchema(BooleanSchema().default(True)),
    })

    simplified = simplify(schema)
    # ObjectSchema({
    #     "name": NullableSchema(StringSchema(), description="Display name"),
    #     "flags": ArraySchema(BooleanSchema()),
    # })
    ```
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from schema_simplify.schema.diagnostics import Diagnostic, DiagnosticSink, log_diagnostic
from schema_simplify.schema.types import (
    RESTRICTED_KINDS,
    ArraySchema,
    BooleanSchema,
    DefaultSchema,
    EffectsSchema,
    EnumSchema,
    LiteralSchema,
    NullableSchema,
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
    children,
)

logger = logging.getLogger(__name__)


class Simplifier:
    """
    Rewrites schema trees into the restricted vocabulary.

    A Simplifier holds no state besides its diagnostics sink, so one instance
    can be reused for any number of trees.

    Attributes:
        diagnostics: Sink receiving a Diagnostic for every lossy conversion
            (default: log at WARNING level)
    """

    def __init__(self, diagnostics: Optional[DiagnosticSink] = None):
        self.diagnostics = diagnostics if diagnostics is not None else log_diagnostic
        self._handlers: Dict[SchemaKind, Callable[[Any, str], SchemaNode]] = {
            SchemaKind.STRING: self._simplify_string,
            SchemaKind.NUMBER: self._simplify_number,
            SchemaKind.BOOLEAN: self._simplify_boolean,
            SchemaKind.DATE: self._simplify_date,
            SchemaKind.ENUM: self._simplify_enum,
            SchemaKind.ARRAY: self._simplify_array,
            SchemaKind.OBJECT: self._simplify_object,
            SchemaKind.UNION: self._simplify_union,
            SchemaKind.OPTIONAL: self._simplify_optional,
            SchemaKind.NULLABLE: self._simplify_nullable,
            SchemaKind.DEFAULT: self._simplify_default,
            SchemaKind.EFFECTS: self._simplify_effects,
            SchemaKind.LITERAL: self._simplify_literal,
            SchemaKind.RECORD: self._simplify_record,
            SchemaKind.TUPLE: self._simplify_tuple,
        }

    def simplify(self, node: SchemaNode, path: str = "$") -> SchemaNode:
        """
        Rewrite ``node`` and everything below it.

        Args:
            node: Root of the schema tree to rewrite (never modified)
            path: Location of ``node``, used in diagnostics

        Returns:
            SchemaNode: A new tree built from restricted-vocabulary kinds only
        """
        handler = self._handlers.get(getattr(node, "kind", None))
        if handler is None:
            return self._simplify_unsupported(node, path)
        return handler(node, path)

    def _warn(self, kind: str, message: str, path: str) -> None:
        self.diagnostics(Diagnostic(kind=kind, message=message, path=path))

    def _simplify_string(self, node: StringSchema, path: str) -> SchemaNode:
        # Format and validation constraints have no restricted equivalent
        return _preserve_description(StringSchema(), node)

    def _simplify_number(self, node: NumberSchema, path: str) -> SchemaNode:
        return _preserve_description(NumberSchema(), node)

    def _simplify_boolean(self, node: BooleanSchema, path: str) -> SchemaNode:
        return _preserve_description(BooleanSchema(), node)

    def _simplify_date(self, node: SchemaNode, path: str) -> SchemaNode:
        return _preserve_description(StringSchema(), node)

    def _simplify_enum(self, node: EnumSchema, path: str) -> SchemaNode:
        return _preserve_description(EnumSchema(list(node.values)), node)

    def _simplify_array(self, node: ArraySchema, path: str) -> SchemaNode:
        element = self.simplify(node.element, f"{path}[]")
        return _preserve_description(ArraySchema(element), node)

    def _simplify_object(self, node: ObjectSchema, path: str) -> SchemaNode:
        fields = {
            name: self.simplify(value, f"{path}.{name}")
            for name, value in node.fields.items()
        }
        return _preserve_description(ObjectSchema(fields), node)

    def _simplify_union(self, node: UnionSchema, path: str) -> SchemaNode:
        options = [
            self.simplify(option, f"{path}|{i}")
            for i, option in enumerate(node.options)
        ]
        return _preserve_description(UnionSchema(options), node)

    def _simplify_optional(self, node: OptionalSchema, path: str) -> SchemaNode:
        # Absence is re-encoded as "present but null"
        inner = self.simplify(node.inner, path)
        return _preserve_description(NullableSchema(inner), node)

    def _simplify_nullable(self, node: NullableSchema, path: str) -> SchemaNode:
        inner = self.simplify(node.inner, path)
        return _preserve_description(NullableSchema(inner), node)

    def _simplify_default(self, node: DefaultSchema, path: str) -> SchemaNode:
        return _preserve_description(self.simplify(node.inner, path), node)

    def _simplify_effects(self, node: EffectsSchema, path: str) -> SchemaNode:
        return _preserve_description(self.simplify(node.inner, path), node)

    def _simplify_literal(self, node: LiteralSchema, path: str) -> SchemaNode:
        return _preserve_description(EnumSchema([node.value]), node)

    def _simplify_record(self, node: RecordSchema, path: str) -> SchemaNode:
        # TODO: revisit once consumers accept an open "additional properties" marker
        self._warn(
            node.type_name,
            f"{node.type_name} converted to empty object. "
            "You may need to define specific properties.",
            path,
        )
        return _preserve_description(ObjectSchema({}), node)

    def _simplify_tuple(self, node: TupleSchema, path: str) -> SchemaNode:
        if not node.items:
            result = ArraySchema(UnknownSchema())
        else:
            items = [
                self.simplify(item, f"{path}[{i}]")
                for i, item in enumerate(node.items)
            ]
            if len(items) == 1:
                result = ArraySchema(items[0])
            else:
                # Per-position types collapse to "each element is one of these"
                result = ArraySchema(UnionSchema(items))
        return _preserve_description(result, node)

    def _simplify_unsupported(self, node: Any, path: str) -> SchemaNode:
        type_name = getattr(node, "type_name", type(node).__name__)
        self._warn(
            type_name,
            f"Unsupported schema type: {type_name}. Converting to string.",
            path,
        )
        return _preserve_description(StringSchema(), node)


def _preserve_description(new_node: SchemaNode, original: Any) -> SchemaNode:
    """Attach ``original``'s description (if any) to ``new_node``."""
    description = getattr(original, "description", None)
    if description:
        return new_node.describe(description)
    return new_node


def simplify(
    schema: SchemaNode,
    diagnostics: Optional[DiagnosticSink] = None,
) -> SchemaNode:
    """
    Rewrite a schema tree into the restricted vocabulary.

    Args:
        schema: Root of the schema tree (never modified)
        diagnostics: Sink for lossy-conversion reports (default: log them as
            warnings)

    Returns:
        SchemaNode: A new tree made of String, Number, Boolean, Enum, Array,
        Object, Union and Nullable nodes only

    Example:
        ```python
        simplify(TupleSchema([StringSchema(), NumberSchema()]))
        # ArraySchema(UnionSchema([StringSchema(), NumberSchema()]))

        simplify(LiteralSchema("active"))
        # EnumSchema(["active"])
        ```
    """
    logger.debug(f"Simplifying {getattr(schema, 'type_name', type(schema).__name__)} tree")
    return Simplifier(diagnostics).simplify(schema)


def is_restricted(schema: SchemaNode) -> bool:
    """
    Check whether a tree only uses restricted-vocabulary kinds.

    A restricted tree is left unchanged by simplify and produces no
    diagnostics.

    Args:
        schema: Root of the schema tree

    Returns:
        bool: True if the whole tree is already in the restricted vocabulary
    """
    return not find_unsupported(schema)


def find_unsupported(schema: SchemaNode, path: str = "$") -> List[Tuple[str, SchemaNode]]:
    """
    Locate every node outside the restricted vocabulary.

    Args:
        schema: Root of the schema tree
        path: Location of ``schema`` (prefix of every reported path)

    Returns:
        List of (path, node) pairs, in depth-first order

    Example:
        ```python
        find_unsupported(ObjectSchema({"tags": RecordSchema(StringSchema())}))
        # [("$.tags", RecordSchema(StringSchema()))]
        ```
    """
    found: List[Tuple[str, SchemaNode]] = []
    if getattr(schema, "kind", None) not in RESTRICTED_KINDS:
        found.append((path, schema))

    for segment, child in children(schema):
        found.extend(find_unsupported(child, f"{path}{segment}"))

    return found


def get_rule_summary(kind: SchemaKind) -> str:
    """
    Get a human-readable summary of what simplification does to a kind.

    Args:
        kind: Node kind

    Returns:
        str: Description of the rewrite rule

    Example:
        ```python
        print(get_rule_summary(SchemaKind.OPTIONAL))
        # "Optional: becomes Nullable (absent values are sent as null)"
        ```
    """
    summaries = {
        SchemaKind.STRING: "String: kept, format and validation constraints dropped",
        SchemaKind.NUMBER: "Number: kept, integer flag and range dropped",
        SchemaKind.BOOLEAN: "Boolean: kept unchanged",
        SchemaKind.DATE: "Date: becomes String",
        SchemaKind.ENUM: "Enum: kept, same values in the same order",
        SchemaKind.ARRAY: "Array: kept, element simplified, length limits dropped",
        SchemaKind.OBJECT: "Object: kept, every field simplified",
        SchemaKind.UNION: "Union: kept, every option simplified",
        SchemaKind.OPTIONAL: "Optional: becomes Nullable (absent values are sent as null)",
        SchemaKind.NULLABLE: "Nullable: kept, inner type simplified",
        SchemaKind.DEFAULT: "Default: unwrapped, default value discarded",
        SchemaKind.EFFECTS: "Effects: unwrapped, refinement/transform discarded",
        SchemaKind.LITERAL: "Literal: becomes single-value Enum",
        SchemaKind.RECORD: "Record: becomes empty Object (keys and values lost)",
        SchemaKind.TUPLE: "Tuple: becomes Array of a Union of the item types",
    }
    return summaries.get(kind, f"{kind.value.capitalize()}: unsupported, becomes String")
