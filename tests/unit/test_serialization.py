"""
Unit tests for the plain-data tree codec.
"""

import json

import pytest
from schema_simplify.schema import node_from_dict, node_to_dict
from schema_simplify.schema.types import (
    ArraySchema,
    CustomSchema,
    DefaultSchema,
    LiteralSchema,
    NumberSchema,
    ObjectSchema,
    RecordSchema,
    StringSchema,
    TupleSchema,
    UnionSchema,
)


class TestNodeToDict:
    """Test tree-to-data conversion."""

    def test_leaf(self):
        """Test that unset fields are omitted."""
        assert node_to_dict(StringSchema()) == {"kind": "string"}
        assert node_to_dict(NumberSchema(is_integer=True, minimum=0)) == {
            "kind": "number",
            "is_integer": True,
            "minimum": 0,
        }

    def test_nested(self):
        """Test a nested tree with a description."""
        node = ObjectSchema(
            {"tags": ArraySchema(StringSchema(), description="Tags")},
            description="Post",
        )

        assert node_to_dict(node) == {
            "kind": "object",
            "fields": {
                "tags": {
                    "kind": "array",
                    "element": {"kind": "string"},
                    "description": "Tags",
                },
            },
            "description": "Post",
        }

    def test_none_values_kept_where_meaningful(self):
        """Test that a None default or literal value is written."""
        assert node_to_dict(DefaultSchema(StringSchema(), default_value=None)) == {
            "kind": "default",
            "inner": {"kind": "string"},
            "default_value": None,
        }
        assert node_to_dict(LiteralSchema(None)) == {"kind": "literal", "value": None}

    def test_effect_callable_dropped(self):
        """Test that effect callables are not written."""
        data = node_to_dict(NumberSchema().refine(lambda v: v > 0))

        assert "effect" not in data
        assert data["effect_type"] == "refinement"

    def test_output_is_json(self):
        """Test that the output serializes to JSON."""
        node = UnionSchema([TupleSchema([StringSchema()]), RecordSchema(NumberSchema())])

        json.dumps(node_to_dict(node))


class TestNodeFromDict:
    """Test data-to-tree conversion."""

    def test_rebuild_nested_tree(self):
        """Test rebuilding a tree with every container kind."""
        node = ObjectSchema({
            "a": UnionSchema([StringSchema(format="uri"), NumberSchema()]).optional(),
            "b": TupleSchema([StringSchema(), StringSchema().default("x")]),
            "c": RecordSchema(NumberSchema(), key_type=StringSchema(pattern="^k")),
            "d": CustomSchema("bigint", payload={"bits": 64}),
        }, description="Root")

        assert node_from_dict(node_to_dict(node)) == node

    def test_from_plain_data(self):
        """Test building a tree from hand-written data."""
        data = {"kind": "enum", "values": ["a", "b"], "description": "Letter"}
        node = node_from_dict(data)

        assert node.values == ["a", "b"]
        assert node.description == "Letter"

    def test_unknown_kind(self):
        """Test that an unknown kind is rejected."""
        with pytest.raises(ValueError, match="Invalid schema node data"):
            node_from_dict({"kind": "bigint"})

    def test_missing_kind(self):
        """Test that data without a kind is rejected."""
        with pytest.raises(ValueError):
            node_from_dict({"values": ["a"]})
