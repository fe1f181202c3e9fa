"""
Command-line interface module.

This module provides a rich terminal interface for schema_simplify using Typer and Rich.

Commands:
    - simplify: Rewrite a JSON schema into the restricted vocabulary
    - relax: Make the fields of an object schema nullable with a null default
    - inspect: Show a parsed schema and the nodes simplification would rewrite

Features:
    - Tree view of parsed and simplified schemas
    - Syntax-highlighted JSON output
    - Warnings for lossy conversions, with their location
    - Statistics table (node counts, warnings)

Example Usage:
    ```bash
    # Simplify and save
    schema-simplify simplify \\
        --schema schema.json \\
        --output simplified.json

    # Relax every field except "id"
    schema-simplify relax \\
        --schema user.json \\
        --keep id \\
        --simplify

    # See what would change
    schema-simplify inspect --schema schema.json
    ```
"""

from .main import app

__all__ = ["app"]
