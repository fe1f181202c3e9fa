"""
Schema tree, simplification and parsing module.

This module holds the schema node types, the simplifier that rewrites rich
schemas into the restricted vocabulary understood by structured-output
consumers, the shape relaxer, and the parsers that build schema trees from
JSON Schema documents and Pydantic models.

Components:
    - types: Schema node definitions (ObjectSchema, StringSchema, etc.)
    - simplifier: Restricted-vocabulary rewrite (simplify, Simplifier)
    - partial: Shape relaxer (relax_shape)
    - diagnostics: Lossy-conversion reports and sinks
    - parser: JSON Schema / Pydantic -> schema tree
    - pydantic_adapter: Convert Pydantic models to JSON Schema
    - serialization: Plain-data codec for schema trees

Example:
    ```python
    from schema_simplify.schema import parse_schema, simplify
    from pydantic import BaseModel

    class User(BaseModel):
        name: str
        tags: dict[str, str]

    simplified = simplify(parse_schema(User))
    # "tags" becomes an empty object and a warning is logged
    ```
"""

from schema_simplify.schema.diagnostics import Diagnostic, DiagnosticCollector, log_diagnostic
from schema_simplify.schema.parser import parse_schema, normalize_schema, validate_schema, resolve_refs
from schema_simplify.schema.partial import relax_shape
from schema_simplify.schema.pydantic_adapter import pydantic_to_schema, is_pydantic_model
from schema_simplify.schema.serialization import node_from_dict, node_to_dict
from schema_simplify.schema.simplifier import (
    Simplifier,
    find_unsupported,
    get_rule_summary,
    is_restricted,
    simplify,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCollector",
    "log_diagnostic",
    "parse_schema",
    "normalize_schema",
    "validate_schema",
    "resolve_refs",
    "relax_shape",
    "pydantic_to_schema",
    "is_pydantic_model",
    "node_from_dict",
    "node_to_dict",
    "Simplifier",
    "find_unsupported",
    "get_rule_summary",
    "is_restricted",
    "simplify",
]
