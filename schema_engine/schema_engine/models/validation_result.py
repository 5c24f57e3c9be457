# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Validation outcome value types.

Instance validation never raises: every outcome, including total failure, is a
:class:`ValidationResult` holding zero or more :class:`ValidationError` values.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from ..utils.json_pointer import JsonPointer
from .schema_node import SchemaNode


@dataclass(frozen=True)
class ValidationError:
    """A single keyword violation at one location of the instance.

    Attributes:
        path: JSON Pointer into the instance ("" is the root)
        keyword: The failing keyword ("type", "minimum", "anyOf", ...)
        expected: The constraint value the instance was compared against
        actual: The offending value (or a measurement of it, e.g. a length)
        message: Human-readable rendering
    """

    path: JsonPointer
    keyword: str
    expected: Any
    actual: Any
    message: str
    schema_ref: Optional[weakref.ReferenceType] = field(default=None, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        path: JsonPointer,
        keyword: str,
        expected: Any,
        actual: Any,
        message: str,
        schema: Optional[SchemaNode] = None,
    ) -> "ValidationError":
        return cls(
            path=path,
            keyword=keyword,
            expected=expected,
            actual=actual,
            message=message,
            schema_ref=weakref.ref(schema) if schema is not None else None,
        )

    @property
    def schema(self) -> Optional[SchemaNode]:
        """The node that raised this error, if it is still alive (diagnostics only)."""
        return self.schema_ref() if self.schema_ref is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "keyword": self.keyword,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.message} (at {self.path or '/'})"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[ValidationError, ...] = ()

    @classmethod
    def success(cls) -> "ValidationResult":
        return _SUCCESS

    @classmethod
    def failure(cls, errors: Iterable[ValidationError]) -> "ValidationResult":
        return cls(valid=False, errors=tuple(errors))

    @classmethod
    def of(cls, errors: Iterable[ValidationError]) -> "ValidationResult":
        """Valid iff ``errors`` is empty."""
        errors = tuple(errors)
        return cls(valid=not errors, errors=errors)

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        """Valid only if every input is valid; errors are concatenated in order."""
        valid = True
        errors = []
        for result in results:
            valid = valid and result.valid
            errors.extend(result.errors)
        return cls(valid=valid, errors=tuple(errors))

    def where(self, predicate: Callable[[ValidationError], bool]) -> "ValidationResult":
        return ValidationResult.of(e for e in self.errors if predicate(e))

    def at_path(self, path: JsonPointer) -> "ValidationResult":
        return self.where(lambda e: e.path == path)

    def for_keyword(self, keyword: str) -> "ValidationResult":
        return self.where(lambda e: e.keyword == keyword)

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    @property
    def keywords(self) -> Tuple[str, ...]:
        return tuple(e.keyword for e in self.errors)

    def __bool__(self) -> bool:
        return self.valid

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __str__(self) -> str:
        if self.valid:
            return "ValidationResult: Valid"
        return "ValidationResult: Invalid\n" + "\n".join(str(e) for e in self.errors)


_SUCCESS = ValidationResult(valid=True)
