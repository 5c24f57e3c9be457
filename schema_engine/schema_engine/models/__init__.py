"""Schema tree, validation results and schema issues."""

from .json_type import JsonType
from .schema_issue import ERROR, WARNING, SchemaIssue
from .schema_node import MISSING, SchemaNode
from .validation_result import ValidationError, ValidationResult

__all__ = [
    "ERROR",
    "MISSING",
    "WARNING",
    "JsonType",
    "SchemaIssue",
    "SchemaNode",
    "ValidationError",
    "ValidationResult",
]
