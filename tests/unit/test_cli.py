"""
Unit tests for the CLI module.

Structure checks read the source files; command tests run the Typer app
in-process with CliRunner.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from schema_simplify.cli import app
from schema_simplify.cli.commands import count_nodes
from schema_simplify.schema import node_from_dict
from schema_simplify.schema.types import (
    ArraySchema,
    DefaultSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
)

CLI_DIR = Path(__file__).parent.parent.parent / "schema_simplify" / "cli"

runner = CliRunner()


def write_schema(tmp_path: Path, schema, name: str = "schema.json") -> Path:
    """Write a schema document to a temporary file."""
    path = tmp_path / name
    path.write_text(json.dumps(schema))
    return path


EVENT_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "when": {"type": "string", "format": "date-time"},
        "labels": {"type": "object", "additionalProperties": {"type": "string"}},
    },
    "required": ["title", "when", "labels"],
}


def test_cli_files_exist():
    """Test that all CLI files exist."""
    expected_files = [
        "__init__.py",
        "main.py",
        "commands.py",
        "display.py"
    ]

    for filename in expected_files:
        filepath = CLI_DIR / filename
        assert filepath.exists(), f"Missing CLI file: {filename}"


def test_cli_main_structure():
    """Test that main.py has expected structure."""
    content = (CLI_DIR / "main.py").read_text()

    assert "import typer" in content
    assert "def simplify(" in content
    assert "def relax(" in content
    assert "def inspect(" in content
    assert "def cli()" in content
    assert "app = typer.Typer(" in content


def test_pyproject_has_cli_script():
    """Test that pyproject.toml has CLI script entry point."""
    pyproject_file = Path(__file__).parent.parent.parent / "pyproject.toml"
    content = pyproject_file.read_text()

    assert "[project.scripts]" in content
    assert "schema-simplify = " in content
    assert "schema_simplify.cli.main:cli" in content


class TestSimplifyCommand:
    """Test the simplify command."""

    def test_simplify_reports_lossy_conversions(self, tmp_path):
        """Test that the record warning is shown with its location."""
        path = write_schema(tmp_path, EVENT_SCHEMA)
        result = runner.invoke(app, ["simplify", "--schema", str(path)])

        assert result.exit_code == 0, result.output
        assert "Simplified Tree" in result.output
        assert "RecordSchema converted" in result.output
        assert "$.labels" in result.output

    def test_simplify_writes_output(self, tmp_path):
        """Test that --output saves the simplified tree."""
        path = write_schema(tmp_path, EVENT_SCHEMA)
        output = tmp_path / "out" / "simplified.json"
        result = runner.invoke(app, ["simplify", "-s", str(path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        saved = node_from_dict(json.loads(output.read_text()))
        assert saved == ObjectSchema({
            "title": StringSchema(),
            "when": StringSchema(),
            "labels": ObjectSchema({}),
        })

    def test_simplify_json(self, tmp_path):
        """Test that --json prints the tree as plain data."""
        path = write_schema(tmp_path, {"type": "array", "items": {"const": "x"}})
        result = runner.invoke(app, ["simplify", "--schema", str(path), "--json"])

        assert result.exit_code == 0, result.output
        assert '"kind": "enum"' in result.output

    def test_simplify_invalid_json(self, tmp_path):
        """Test that an unreadable file fails with exit code 1."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["simplify", "--schema", str(path)])

        assert result.exit_code == 1
        assert "Command failed" in result.output

    def test_simplify_unsupported_keyword(self, tmp_path):
        """Test that unsupported keywords fail with exit code 1."""
        path = write_schema(tmp_path, {"type": "string", "not": {"const": ""}})
        result = runner.invoke(app, ["simplify", "--schema", str(path)])

        assert result.exit_code == 1
        assert "not supported" in result.output


class TestRelaxCommand:
    """Test the relax command."""

    def test_relax_with_keep(self, tmp_path):
        """Test that kept fields are left unchanged."""
        schema = {
            "type": "object",
            "properties": {"id": {"type": "integer"}, "bio": {"type": "string"}},
            "required": ["id", "bio"],
        }
        path = write_schema(tmp_path, schema)
        output = tmp_path / "relaxed.json"
        result = runner.invoke(app, ["relax", "-s", str(path), "--keep", "id", "-o", str(output)])

        assert result.exit_code == 0, result.output
        saved = node_from_dict(json.loads(output.read_text()))
        assert saved == ObjectSchema({
            "id": NumberSchema(is_integer=True),
            "bio": DefaultSchema(NullableSchema(StringSchema()), default_value=None),
        })

    def test_relax_then_simplify(self, tmp_path):
        """Test that --simplify removes the default wrappers."""
        schema = {
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            "required": ["tags"],
        }
        path = write_schema(tmp_path, schema)
        output = tmp_path / "relaxed.json"
        result = runner.invoke(app, ["relax", "-s", str(path), "--simplify", "-o", str(output)])

        assert result.exit_code == 0, result.output
        saved = node_from_dict(json.loads(output.read_text()))
        assert saved == ObjectSchema({"tags": NullableSchema(ArraySchema(StringSchema()))})

    def test_relax_unknown_keep(self, tmp_path):
        """Test that a --keep name without a field is reported."""
        path = write_schema(tmp_path, {"type": "object", "properties": {"a": {"type": "string"}}})
        result = runner.invoke(app, ["relax", "-s", str(path), "--keep", "b"])

        assert result.exit_code == 0, result.output
        assert "no such field" in result.output

    def test_relax_rejects_non_object(self, tmp_path):
        """Test that a non-object schema fails with exit code 1."""
        path = write_schema(tmp_path, {"type": "string"})
        result = runner.invoke(app, ["relax", "--schema", str(path)])

        assert result.exit_code == 1
        assert "expects an ObjectSchema" in result.output


class TestInspectCommand:
    """Test the inspect command."""

    def test_inspect_lists_rewrites(self, tmp_path):
        """Test that nodes needing simplification are listed."""
        path = write_schema(tmp_path, EVENT_SCHEMA)
        result = runner.invoke(app, ["inspect", "--schema", str(path)])

        assert result.exit_code == 0, result.output
        assert "2 node(s) will be rewritten" in result.output

    def test_inspect_restricted_schema(self, tmp_path):
        """Test a schema that needs no rewriting."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
        }
        path = write_schema(tmp_path, schema)
        result = runner.invoke(app, ["inspect", "--schema", str(path)])

        assert result.exit_code == 0, result.output
        assert "already uses only" in result.output


class TestRootCommand:
    """Test the root callback."""

    def test_version(self):
        """Test --version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Schema Simplify version 0.1.0" in result.output

    def test_no_command_shows_help(self):
        """Test that running without a command prints help."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "simplify" in result.output
        assert "relax" in result.output

    @pytest.mark.parametrize("command", ["simplify", "relax", "inspect"])
    def test_missing_schema_file(self, tmp_path, command):
        """Test that a missing schema file is a usage error."""
        result = runner.invoke(app, [command, "--schema", str(tmp_path / "missing.json")])

        assert result.exit_code != 0


def test_count_nodes():
    """Test node counting used in statistics."""
    node = ObjectSchema({"a": ArraySchema(StringSchema()), "b": NumberSchema().optional()})

    assert count_nodes(node) == 5
