"""
CLI command implementations.

This module contains the business logic for each CLI command:
- simplify: Rewrite a schema into the restricted vocabulary
- relax: Make the fields of an object schema nullable with a null default
- inspect: Show a parsed schema and what simplification would change
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from schema_simplify.schema import (
    DiagnosticCollector,
    find_unsupported,
    node_to_dict,
    parse_schema,
    relax_shape,
    simplify,
    validate_schema,
)
from schema_simplify.schema.types import SchemaNode, children

from .display import (
    print_diagnostics,
    print_header,
    print_info,
    print_json,
    print_result_stats,
    print_schema,
    print_separator,
    print_success,
    print_tree,
    print_unsupported,
    print_warning,
)


def load_schema_file(schema_path: Path) -> Dict[str, Any]:
    """
    Load and parse a JSON schema file.

    Args:
        schema_path: Path to schema JSON file

    Returns:
        Parsed schema dictionary

    Raises:
        ValueError: If file doesn't exist or isn't valid JSON
    """
    if not schema_path.exists():
        raise ValueError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path) as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in schema file: {e}")

    validate_schema(schema)
    return schema


def count_nodes(node: SchemaNode) -> int:
    """Count the nodes of a schema tree."""
    return 1 + sum(count_nodes(child) for _, child in children(node))


def save_tree(node: SchemaNode, output_path: Path) -> None:
    """Write a schema tree to ``output_path`` as plain-data JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(node_to_dict(node), f, indent=2, default=repr)


def _load_tree(schema_path: Path, show_input: bool) -> SchemaNode:
    schema = load_schema_file(schema_path)
    print_success(f"Loaded schema from: {schema_path}")

    if show_input:
        print_schema(schema, title="Input Schema")

    return parse_schema(schema)


def simplify_command(
    schema_path: Path,
    output_path: Optional[Path],
    show_input: bool,
    as_json: bool
) -> None:
    """
    Execute the simplify command.

    Args:
        schema_path: Path to JSON schema file
        output_path: Optional path to save the simplified tree
        show_input: Whether to display the input schema and tree
        as_json: Print the simplified tree as JSON instead of a tree view
    """
    print_header("Schema Simplify - Simplify")

    tree = _load_tree(schema_path, show_input)
    if show_input:
        print_tree(tree, title="Parsed Tree")

    collector = DiagnosticCollector()
    simplified = simplify(tree, diagnostics=collector)

    print_separator()
    if as_json:
        print_json(node_to_dict(simplified), title="Simplified Tree")
    else:
        print_tree(simplified, title="Simplified Tree")

    print_diagnostics(collector.diagnostics)
    print_result_stats(
        input_nodes=count_nodes(tree),
        output_nodes=count_nodes(simplified),
        warnings=len(collector)
    )

    if output_path:
        save_tree(simplified, output_path)
        print_success(f"Output saved to: {output_path}")


def relax_command(
    schema_path: Path,
    keep: Optional[List[str]],
    output_path: Optional[Path],
    then_simplify: bool
) -> None:
    """
    Execute the relax command.

    Args:
        schema_path: Path to JSON schema file (must describe an object)
        keep: Field names to leave unchanged
        output_path: Optional path to save the relaxed tree
        then_simplify: Also simplify the relaxed tree
    """
    print_header("Schema Simplify - Relax")

    tree = _load_tree(schema_path, show_input=False)
    exceptions = {name: True for name in keep or []}

    relaxed = relax_shape(tree, exceptions)
    relaxed_fields = sum(1 for name in relaxed.fields if name not in exceptions)

    unknown = [name for name in exceptions if name not in relaxed.fields]
    for name in unknown:
        print_warning(f"--keep {name}: no such field")

    collector = DiagnosticCollector()
    result = simplify(relaxed, diagnostics=collector) if then_simplify else relaxed

    print_separator()
    print_tree(result, title="Relaxed Tree")
    print_diagnostics(collector.diagnostics)
    print_result_stats(
        input_nodes=count_nodes(tree),
        output_nodes=count_nodes(result),
        warnings=len(collector),
        relaxed_fields=relaxed_fields
    )

    if output_path:
        save_tree(result, output_path)
        print_success(f"Output saved to: {output_path}")


def inspect_command(schema_path: Path, show_input: bool) -> None:
    """
    Execute the inspect command.

    Args:
        schema_path: Path to JSON schema file
        show_input: Whether to display the input schema
    """
    print_header("Schema Simplify - Inspect")

    tree = _load_tree(schema_path, show_input)
    print_tree(tree, title="Parsed Tree")

    unsupported = find_unsupported(tree)
    if not unsupported:
        print_success("Schema already uses only restricted-vocabulary kinds")
        return

    print_info(f"{len(unsupported)} node(s) will be rewritten")
    print_unsupported(unsupported)

