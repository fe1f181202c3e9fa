"""
Pydantic adapter - convert Pydantic models to JSON Schema.

Pydantic describes nested models through "$defs" and "$ref". The parser
works on self-contained documents, so the adapter inlines those references
before handing the schema over.
"""

from typing import Any, Dict

from pydantic import BaseModel

from schema_simplify.schema.parser import resolve_refs


def is_pydantic_model(obj: Any) -> bool:
    """Return True if ``obj`` is a Pydantic model class."""
    return isinstance(obj, type) and issubclass(obj, BaseModel)


def pydantic_to_schema(model: type) -> Dict[str, Any]:
    """
    Convert a Pydantic model class to a self-contained JSON Schema dict.

    Args:
        model: Pydantic BaseModel subclass

    Returns:
        Dict: JSON Schema with every local $ref inlined

    Raises:
        TypeError: If ``model`` is not a Pydantic model class
        ValueError: If the model is recursive

    Example:
        ```python
        class Address(BaseModel):
            city: str

        class User(BaseModel):
            name: str
            address: Address

        schema = pydantic_to_schema(User)
        # schema["properties"]["address"]["properties"]["city"] == {"title": "City", "type": "string"}
        ```
    """
    if not is_pydantic_model(model):
        raise TypeError(f"Expected a Pydantic model class, got {model!r}")

    return resolve_refs(model.model_json_schema())
