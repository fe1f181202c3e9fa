"""
Schema Simplify: Rich schemas in, structured-output schemas out

Function-calling and structured-output APIs accept only a small part of what
schema libraries can describe: plain strings, numbers, booleans, enums,
arrays, objects, unions and nullable values. Schema Simplify rewrites richer
schemas (optional fields, defaults, refinements, dates, literals, tuples,
records, string formats) into that restricted vocabulary, keeping
descriptions and reporting every conversion that loses information.

Key Features:
    - Type-directed rewrite of arbitrarily nested schema trees
    - Descriptions preserved on every rewritten node
    - Lossy conversions reported through an injectable diagnostics sink
    - JSON Schema and Pydantic model input
    - Shape relaxer for "nullable, defaulting to null" object fields

Quick Start:
    ```python
    from typing import Literal

    from schema_simplify import prepare_schema
    from pydantic import BaseModel

    class User(BaseModel):
        name: str
        nickname: str | None = None
        role: Literal["admin", "member"] = "member"

    simplified = prepare_schema(User)
    ```

Architecture:
    1. Schema Types: Immutable node tree (schema/types.py)
    2. Parser: JSON Schema / Pydantic -> node tree
    3. Simplifier: One rewrite rule per node kind
    4. Shape Relaxer: Nullable-with-default object fields
    5. CLI: Inspect, simplify and relax schema files
"""

__version__ = "0.1.0"

# Main API exports - these are the primary user-facing functions
from schema_simplify.api import prepare_schema  # noqa: F401
from schema_simplify.schema import (  # noqa: F401
    DiagnosticCollector,
    Simplifier,
    parse_schema,
    relax_shape,
    simplify,
)

__all__ = [
    "prepare_schema",
    "DiagnosticCollector",
    "Simplifier",
    "parse_schema",
    "relax_shape",
    "simplify",
]
