"""
Rich terminal display utilities for CLI.

Provides formatted output using the Rich library for:
- Schema trees
- Syntax-highlighted JSON
- Diagnostics and error messages
- Statistics tables
- Success/failure indicators
"""

import json
from typing import Any, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from schema_simplify.schema.diagnostics import Diagnostic
from schema_simplify.schema.simplifier import get_rule_summary
from schema_simplify.schema.types import (
    CustomSchema,
    DateSchema,
    DefaultSchema,
    EffectsSchema,
    EnumSchema,
    LiteralSchema,
    NumberSchema,
    SchemaNode,
    StringSchema,
    children,
)


console = Console()


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))
    console.print()


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any, title: Optional[str] = None) -> None:
    """
    Print JSON data with syntax highlighting.

    Args:
        data: JSON-serializable data or JSON string
        title: Optional title for the panel
    """
    if isinstance(data, str):
        json_str = data
    else:
        json_str = json.dumps(data, indent=2, default=repr)

    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        panel = Panel(syntax, title=f"[bold]{title}[/bold]", border_style="cyan")
        console.print(panel)
    else:
        console.print(syntax)


def print_schema(schema: dict, title: str = "Schema") -> None:
    """Print a JSON Schema document with syntax highlighting."""
    print_json(schema, title)


def node_label(node: SchemaNode, segment: str = "") -> str:
    """
    Build the one-line label shown for a node in a schema tree.

    Args:
        node: Node to describe
        segment: Path segment leading to this node (e.g. ".name", "[]")

    Returns:
        str: Rich markup label
    """
    details = []
    if isinstance(node, StringSchema):
        if node.format:
            details.append(f"format={node.format}")
        if node.pattern:
            details.append(f"pattern={node.pattern}")
    elif isinstance(node, NumberSchema) and node.is_integer:
        details.append("integer")
    elif isinstance(node, DateSchema) and node.include_time:
        details.append("with time")
    elif isinstance(node, EnumSchema):
        details.append(", ".join(repr(v) for v in node.values))
    elif isinstance(node, LiteralSchema):
        details.append(repr(node.value))
    elif isinstance(node, DefaultSchema):
        details.append(f"default={node.default_value!r}")
    elif isinstance(node, EffectsSchema):
        details.append(node.effect_type)
    elif isinstance(node, CustomSchema):
        details.append("custom")

    label = f"[bold]{escape(node.type_name)}[/bold]"
    if segment:
        label = f"[cyan]{escape(segment)}[/cyan] {label}"
    if details:
        label += f" [magenta]({escape('; '.join(details))})[/magenta]"
    if node.description:
        label += f" [dim]- {escape(node.description)}[/dim]"
    return label


def build_tree(node: SchemaNode, segment: str = "", tree: Optional[Tree] = None) -> Tree:
    """
    Build a Rich tree mirroring a schema tree.

    Args:
        node: Root node
        segment: Path segment of the root
        tree: Parent tree to attach to (None = start a new tree)

    Returns:
        Tree: The tree (or subtree) for ``node``
    """
    label = node_label(node, segment)
    branch = Tree(label) if tree is None else tree.add(label)
    for child_segment, child in children(node):
        build_tree(child, child_segment, branch)
    return branch


def print_tree(node: SchemaNode, title: Optional[str] = None) -> None:
    """Print a schema tree, optionally inside a titled panel."""
    tree = build_tree(node, "$")
    if title:
        console.print(Panel(tree, title=f"[bold]{title}[/bold]", border_style="cyan"))
    else:
        console.print(tree)


def print_diagnostics(diagnostics: List[Diagnostic]) -> None:
    """
    Print lossy-conversion diagnostics in a formatted list.

    Args:
        diagnostics: Diagnostics collected during simplification
    """
    if not diagnostics:
        return

    console.print()
    console.print("[bold yellow]Warnings:[/bold yellow]")
    for diagnostic in diagnostics:
        console.print(
            f"  [yellow]•[/yellow] [cyan]{escape(diagnostic.path)}[/cyan] "
            f"{escape(diagnostic.message)}"
        )
    console.print()


def print_unsupported(unsupported: List[Tuple[str, SchemaNode]]) -> None:
    """
    Print the nodes outside the restricted vocabulary and what happens to them.

    Args:
        unsupported: (path, node) pairs from find_unsupported
    """
    table = Table(title="Nodes Needing Simplification", show_header=True, header_style="bold cyan")
    table.add_column("Path", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Rewrite", style="yellow")

    for path, node in unsupported:
        table.add_row(escape(path), escape(node.type_name), get_rule_summary(node.kind))

    console.print()
    console.print(table)
    console.print()


def print_result_stats(
    input_nodes: int,
    output_nodes: int,
    warnings: int,
    relaxed_fields: int = 0
) -> None:
    """
    Print simplification statistics in a table.

    Args:
        input_nodes: Number of nodes in the input tree
        output_nodes: Number of nodes in the output tree
        warnings: Number of diagnostics emitted
        relaxed_fields: Number of fields made nullable by the relaxer
    """
    table = Table(title="Simplification Statistics", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan", width=20)
    table.add_column("Value", style="white", width=30)

    table.add_row("Input Nodes", str(input_nodes))
    table.add_row("Output Nodes", str(output_nodes))
    table.add_row("Warnings", str(warnings), style="yellow" if warnings else None)

    if relaxed_fields > 0:
        table.add_row("Relaxed Fields", str(relaxed_fields))

    console.print()
    console.print(table)
    console.print()


def print_separator() -> None:
    """Print a visual separator line."""
    console.print("[dim]" + "─" * 70 + "[/dim]")
