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

"""Recursive validation of JSON values against a ``SchemaNode`` tree.

Order of evaluation for one node:

1. boolean schemas (``true``/``false``)
2. ``null`` short-circuit
3. ``type`` gate
4. ``const`` gate, then ``enum`` gate
5. composition and conditional keywords (accumulating)
6. keyword group for the instance's runtime kind (accumulating)

``type``, ``const`` and ``enum`` stop at their first failure; everything else is
reported together so a caller can fix every problem in one pass.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..config import EngineConfig, engine_config
from ..formats.registry import FormatRegistry, default_formats
from ..models.json_type import JsonType
from ..models.schema_node import SchemaNode
from ..models.validation_result import ValidationError, ValidationResult
from ..utils.json_pointer import JsonPointer
from ..utils.json_values import deep_equals, describe
from . import composition, keywords

logger = logging.getLogger(__name__)


def _type_names(types) -> List[str]:
    return [t.value for t in types]


def _type_error(value: Any, schema: SchemaNode, path: JsonPointer, actual: str) -> ValidationError:
    expected = _type_names(schema.type)
    return ValidationError.create(
        path=path,
        keyword="type",
        expected=expected,
        actual=actual,
        message=f"Expected {' or '.join(expected)} but got {actual}",
        schema=schema,
    )


class SchemaValidator:
    """Validates instances against one or more schema trees.

    Holds no per-call state, so one instance can be shared between threads.
    """

    def __init__(
        self,
        formats: Optional[FormatRegistry] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or engine_config
        self.formats = formats or default_formats

    def validate(self, value: Any, schema: SchemaNode, path: JsonPointer = "") -> ValidationResult:
        try:
            errors = self.descend(value, schema, path, 0)
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            logger.warning(f"Interpreter recursion limit reached validating '{path}'")
            errors = [self._depth_error(schema, path, None)]
        return ValidationResult.of(errors)

    def is_valid(self, value: Any, schema: SchemaNode) -> bool:
        return self.validate(value, schema).valid

    def _depth_error(self, schema: SchemaNode, path: JsonPointer, depth: Optional[int]) -> ValidationError:
        return ValidationError.create(
            path=path,
            keyword="depth",
            expected=self.config.max_depth,
            actual=depth,
            message=f"Maximum validation depth {self.config.max_depth} exceeded",
            schema=schema,
        )

    def descend(self, value: Any, schema: SchemaNode, path: JsonPointer, depth: int) -> List[ValidationError]:
        """Validate ``value`` against ``schema`` and return the accumulated errors."""
        if depth > self.config.max_depth:
            logger.warning(f"Validation depth limit {self.config.max_depth} exceeded at '{path}'")
            return [self._depth_error(schema, path, depth)]

        if schema.is_boolean:
            if schema.boolean:
                return []
            return [
                ValidationError.create(
                    path=path,
                    keyword="false",
                    expected=False,
                    actual=value,
                    message="No value is allowed by the false schema",
                    schema=schema,
                )
            ]

        if value is None:
            if schema.type is not None and JsonType.NULL not in schema.type:
                return [_type_error(value, schema, path, "null")]
            return []

        try:
            kind = JsonType.of(value)
        except TypeError:
            return [
                ValidationError.create(
                    path=path,
                    keyword="type",
                    expected=_type_names(schema.type) if schema.type else "JSON value",
                    actual=type(value).__name__,
                    message=f"Value of Python type {type(value).__name__} is not a JSON value",
                    schema=schema,
                )
            ]

        if schema.type is not None and not any(t.matches(value) for t in schema.type):
            return [_type_error(value, schema, path, kind.value)]

        if schema.has_const:
            if deep_equals(value, schema.const):
                return []
            return [
                ValidationError.create(
                    path=path,
                    keyword="const",
                    expected=schema.const,
                    actual=value,
                    message=f"Value must be equal to: {describe(schema.const)}",
                    schema=schema,
                )
            ]

        if schema.enum is not None:
            if any(deep_equals(value, candidate) for candidate in schema.enum):
                return []
            return [
                ValidationError.create(
                    path=path,
                    keyword="enum",
                    expected=list(schema.enum),
                    actual=value,
                    message=f"Value must be one of: {describe(list(schema.enum))}",
                    schema=schema,
                )
            ]

        errors: List[ValidationError] = []
        errors.extend(composition.check_composition(self, value, schema, path, depth))

        if kind is JsonType.STRING:
            errors.extend(keywords.check_string(self, value, schema, path))
        elif kind is JsonType.NUMBER:
            errors.extend(keywords.check_number(value, schema, path))
        elif kind is JsonType.ARRAY:
            errors.extend(keywords.check_array(self, value, schema, path, depth))
        elif kind is JsonType.OBJECT:
            errors.extend(keywords.check_object(self, value, schema, path, depth))

        return errors


def validate(
    value: Any,
    schema: SchemaNode,
    path: JsonPointer = "",
    *,
    formats: Optional[FormatRegistry] = None,
    config: Optional[EngineConfig] = None,
) -> ValidationResult:
    """Validate ``value`` against ``schema``; reported paths point into the instance."""
    return SchemaValidator(formats=formats, config=config).validate(value, schema, path)


def is_valid(value: Any, schema: SchemaNode, **kwargs) -> bool:
    return validate(value, schema, **kwargs).valid
