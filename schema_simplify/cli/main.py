"""
Main CLI entry point using Typer.

This module defines the command-line interface for schema_simplify using
Typer. It provides three commands: simplify, relax, and inspect.
"""

from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from schema_simplify.utils import setup_logging

from .commands import inspect_command, relax_command, simplify_command
from .display import print_error


# Create Typer app
app = typer.Typer(
    name="schema-simplify",
    help="Schema Simplify - Rewrite rich schemas for structured-output APIs",
    add_completion=False,
    rich_markup_mode="rich"
)


@app.command("simplify")
def simplify(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to JSON schema file", exists=True, file_okay=True, dir_okay=False)
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the simplified tree (JSON)")
    ] = None,
    show_input: Annotated[
        bool,
        typer.Option("--show-input", help="Display the input schema and its parsed tree")
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the simplified tree as JSON")
    ] = False,
) -> None:
    """
    Rewrite a JSON schema into the restricted structured-output vocabulary.

    Example:
        schema-simplify simplify \\
            --schema schema.json \\
            --output simplified.json
    """
    try:
        simplify_command(
            schema_path=schema,
            output_path=output,
            show_input=show_input,
            as_json=as_json
        )
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("relax")
def relax(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to JSON schema file of an object", exists=True, file_okay=True, dir_okay=False)
    ],
    keep: Annotated[
        Optional[List[str]],
        typer.Option("--keep", "-k", help="Field to leave unchanged (can be used multiple times)")
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the relaxed tree (JSON)")
    ] = None,
    then_simplify: Annotated[
        bool,
        typer.Option("--simplify", help="Simplify the relaxed tree as well")
    ] = False,
) -> None:
    """
    Make every field of an object schema nullable, defaulting to null.

    Example:
        schema-simplify relax \\
            --schema user.json \\
            --keep id --keep email
    """
    try:
        relax_command(
            schema_path=schema,
            keep=keep,
            output_path=output,
            then_simplify=then_simplify
        )
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to JSON schema file", exists=True, file_okay=True, dir_okay=False)
    ],
    show_input: Annotated[
        bool,
        typer.Option("--show-input", help="Display the input schema")
    ] = False,
) -> None:
    """
    Show a parsed schema and the nodes simplification would rewrite.

    Example:
        schema-simplify inspect --schema schema.json
    """
    try:
        inspect_command(schema_path=schema, show_input=show_input)
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug details to stderr")
    ] = False,
) -> None:
    """
    Schema Simplify - Rewrite rich schemas for structured-output APIs.

    Turns optional fields, defaults, dates, literals, tuples and records into
    the plain strings, numbers, enums, arrays, objects, unions and nullables
    that structured-output contracts accept.
    """
    if version:
        from schema_simplify import __version__
        typer.echo(f"Schema Simplify version {__version__}")
        raise typer.Exit()

    setup_logging("DEBUG" if verbose else "WARNING")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli() -> None:
    """CLI entry point for the console script."""
    app()


if __name__ == "__main__":
    cli()
