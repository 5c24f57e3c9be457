from __future__ import annotations

from enum import Enum
from typing import Any

from ..utils.json_values import is_array, is_integer_value, is_number


class JsonType(str, Enum):
    """Draft-07 simple types."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NULL = "null"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: Any) -> "JsonType":
        if isinstance(raw, JsonType):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(
                f"Unknown JSON type {raw!r}. Valid types: {[t.value for t in cls]}"
            ) from None

    @classmethod
    def of(cls, value: Any) -> "JsonType":
        """Runtime kind of a Python JSON value; integers report as ``number``."""
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if is_number(value):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if is_array(value):
            return cls.ARRAY
        if isinstance(value, dict):
            return cls.OBJECT
        raise TypeError(f"Not a JSON value: {type(value).__name__}")

    def matches(self, value: Any) -> bool:
        if self is JsonType.INTEGER:
            return is_integer_value(value)
        try:
            return JsonType.of(value) is self
        except TypeError:
            return False
