"""
Pydantic models for Schema Translator.
"""
from .common import BasePydanticModel, Visibility
from .schema import Field, Schema, Table
from .uml import UMLAttribute, UMLClass

__all__ = [
    "BasePydanticModel",
    "Field",
    "Schema",
    "Table",
    "UMLAttribute",
    "UMLClass",
    "Visibility",
]
