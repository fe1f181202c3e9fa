"""
Shape relaxer - make the fields of an object schema nullable with a null default.

Structured-output contracts require every field to be present. When a model
may legitimately not know a value, the usual workaround is to let the field
be null and default it to null. relax_shape applies that to every top-level
field of an object schema, except the fields the caller marks as required.

Usage:
    ```python
    from schema_simplify.schema import relax_shape
    from schema_simplify.schema.types import NumberSchema, ObjectSchema, StringSchema

    shape = ObjectSchema({"x": StringSchema(), "y": NumberSchema()})
    relaxed = relax_shape(shape, {"y": True})
    # ObjectSchema({
    #     "x": DefaultSchema(NullableSchema(StringSchema()), default_value=None),
    #     "y": NumberSchema(),
    # })
    ```
"""

from typing import Mapping, Optional

from schema_simplify.schema.types import ObjectSchema, SchemaNode


def relax_shape(
    schema: SchemaNode,
    exceptions: Optional[Mapping[str, bool]] = None,
) -> ObjectSchema:
    """
    Make every non-exempt field of an object schema nullable, defaulting to null.

    Only the top-level fields are rewritten; nested objects are left alone.

    Args:
        schema: Object schema to relax (never modified)
        exceptions: Field names mapped to True are copied unchanged. Any other
            value, or a missing entry, means the field is relaxed.

    Returns:
        ObjectSchema: New object schema with the same field order and
        description

    Raises:
        ValueError: If ``schema`` is not an ObjectSchema
    """
    if not isinstance(schema, ObjectSchema):
        raise ValueError(
            f"relax_shape expects an ObjectSchema, got {type(schema).__name__}"
        )

    exceptions = exceptions or {}
    fields = {}
    for name, field_schema in schema.fields.items():
        if exceptions.get(name) is True:
            fields[name] = field_schema
        else:
            fields[name] = field_schema.nullable().default(None)

    return ObjectSchema(fields, description=schema.description)
