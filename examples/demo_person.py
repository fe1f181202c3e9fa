#!/usr/bin/env python3
"""
Demo: Person record with nested fields.

This demonstrates preparing a person profile for a structured-output API:
- Optional fields become nullable
- Dates become strings
- A free-form "links" map is collapsed (with a warning)
- The relaxer makes every field except "name" nullable with a null default
"""

import json
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from schema_simplify import DiagnosticCollector, parse_schema, prepare_schema, relax_shape, simplify
from schema_simplify.schema import node_to_dict


class Address(BaseModel):
    street: Optional[str] = None
    city: str
    zipcode: str = Field(min_length=5, max_length=10)


class Person(BaseModel):
    name: str = Field(min_length=2, max_length=50, description="Full name")
    born: date
    status: Literal["active", "retired"] = "active"
    address: Address
    hobbies: List[str] = Field(default_factory=list, max_length=10)
    links: Dict[str, str] = Field(default_factory=dict, description="Profile links by site")


def main():
    print("=" * 60)
    print("Schema Simplify Demo: Person Record with Nested Fields")
    print("=" * 60)

    print("\nJSON Schema (from Pydantic):")
    print(json.dumps(Person.model_json_schema(), indent=2))

    # Simplify
    print("\n" + "=" * 60)
    print("Simplified")
    print("=" * 60)

    collector = DiagnosticCollector()
    simplified = prepare_schema(Person, diagnostics=collector)
    print(json.dumps(node_to_dict(simplified), indent=2))

    print("\nWarnings:")
    for diagnostic in collector:
        print(f"  - {diagnostic}")

    # Relax, then simplify
    print("\n" + "=" * 60)
    print("Relaxed (all fields but 'name' nullable, default null)")
    print("=" * 60)

    relaxed = relax_shape(parse_schema(Person), {"name": True})
    collector.clear()
    print(json.dumps(node_to_dict(simplify(relaxed, diagnostics=collector)), indent=2))

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
