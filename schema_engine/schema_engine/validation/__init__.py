"""Validation engine: instance values against ``SchemaNode`` trees."""

from .engine import SchemaValidator, is_valid, validate

__all__ = ["SchemaValidator", "is_valid", "validate"]
