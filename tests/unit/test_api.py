"""
Unit tests for the high-level API.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

import schema_simplify
from schema_simplify import DiagnosticCollector, prepare_schema
from schema_simplify.schema.types import (
    EnumSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    StringSchema,
)


class TestPrepareSchema:
    """Test prepare_schema with each accepted input form."""

    def test_tree_input(self):
        """Test that a schema tree is simplified directly."""
        node = ObjectSchema({"a": OptionalSchema(StringSchema(format="uuid"))})

        assert prepare_schema(node) == ObjectSchema({"a": NullableSchema(StringSchema())})

    def test_dict_input(self):
        """Test that a JSON Schema dict is parsed first."""
        schema = {
            "type": "object",
            "properties": {
                "count": {"type": "integer", "minimum": 0},
                "note": {"type": "string"},
            },
            "required": ["count"],
        }

        assert prepare_schema(schema) == ObjectSchema({
            "count": NumberSchema(),
            "note": NullableSchema(StringSchema()),
        })

    def test_pydantic_input(self):
        """Test that a Pydantic model is converted and simplified."""

        class User(BaseModel):
            name: str = Field(description="Display name")
            nickname: Optional[str] = None
            role: Literal["admin", "member"] = "member"

        result = prepare_schema(User)

        assert result.fields["name"] == StringSchema(description="Display name")
        assert result.fields["nickname"] == NullableSchema(StringSchema())
        assert result.fields["role"] == EnumSchema(["admin", "member"])

    def test_diagnostics_forwarded(self):
        """Test that the diagnostics sink receives lossy conversions."""
        collector = DiagnosticCollector()
        prepare_schema(
            {"type": "object", "additionalProperties": {"type": "number"}},
            diagnostics=collector,
        )

        assert len(collector) == 1
        assert "RecordSchema" in collector.messages[0]


def test_version():
    """Test that the package exposes a version."""
    assert schema_simplify.__version__ == "0.1.0"


def test_quick_start_imports():
    """Test that the package Quick Start imports every name it uses."""
    doc = schema_simplify.__doc__

    assert "from typing import Literal" in doc
    assert "from pydantic import BaseModel" in doc
    assert "from schema_simplify import prepare_schema" in doc
