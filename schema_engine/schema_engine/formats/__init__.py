"""String format predicates (date-time, email, uri, ...) used by the ``format`` keyword."""

from .predicates import BUILTIN_FORMATS, decode_base64
from .registry import (
    FormatRegistry,
    default_formats,
    is_valid_format,
    validate_format,
)

__all__ = [
    "BUILTIN_FORMATS",
    "FormatRegistry",
    "decode_base64",
    "default_formats",
    "is_valid_format",
    "validate_format",
]
