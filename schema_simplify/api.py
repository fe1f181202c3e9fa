"""
High-level Python API for schema_simplify.

This module provides the main user-facing entry point: prepare_schema accepts
any supported schema form and returns a tree ready for a structured-output
contract.
"""

from typing import Any, Dict, Optional, Union

from schema_simplify.schema.diagnostics import DiagnosticSink
from schema_simplify.schema.parser import parse_schema
from schema_simplify.schema.partial import relax_shape
from schema_simplify.schema.simplifier import simplify
from schema_simplify.schema.types import SchemaNode


def prepare_schema(
    schema: Union[SchemaNode, Dict[str, Any], type],
    diagnostics: Optional[DiagnosticSink] = None,
) -> SchemaNode:
    """
    Simplify a schema given as a tree, a JSON Schema dict or a Pydantic model.

    Args:
        schema: Schema tree, JSON Schema dictionary or Pydantic model class
        diagnostics: Sink for lossy-conversion reports (default: log them)

    Returns:
        SchemaNode: Simplified tree in the restricted vocabulary

    Example:
        ```python
        from pydantic import BaseModel

        class Event(BaseModel):
            title: str
            starts_at: datetime

        prepare_schema(Event)
        # ObjectSchema({"title": StringSchema(), "starts_at": StringSchema()}, ...)
        ```
    """
    if not isinstance(schema, SchemaNode):
        schema = parse_schema(schema)
    return simplify(schema, diagnostics=diagnostics)


# Re-export for convenience
__all__ = ["prepare_schema", "simplify", "relax_shape"]
