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

"""allOf / anyOf / oneOf / not / if-then-else.

Nested errors keep the instance path reported by the sub-schema; no
``/allOf/{index}`` segment is inserted, so every path stays a pointer into
the instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from ..models.schema_node import SchemaNode
from ..models.validation_result import ValidationError
from ..utils.json_pointer import JsonPointer

if TYPE_CHECKING:
    from .engine import SchemaValidator


def _synthetic(path, keyword, expected, message, schema) -> ValidationError:
    return ValidationError.create(
        path=path,
        keyword=keyword,
        expected=expected,
        actual=None,
        message=message,
        schema=schema,
    )


def check_all_of(
    validator: "SchemaValidator",
    value: Any,
    schemas: Sequence[SchemaNode],
    path: JsonPointer,
    depth: int,
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for sub in schemas:
        errors.extend(validator.descend(value, sub, path, depth + 1))
    return errors


def check_any_of(
    validator: "SchemaValidator",
    value: Any,
    schemas: Sequence[SchemaNode],
    path: JsonPointer,
    depth: int,
    parent: SchemaNode,
) -> List[ValidationError]:
    nested: List[ValidationError] = []
    for sub in schemas:
        sub_errors = validator.descend(value, sub, path, depth + 1)
        if not sub_errors:
            return []
        nested.extend(sub_errors)
    head = _synthetic(
        path, "anyOf", len(schemas), "Value does not match any schema in anyOf", parent
    )
    return [head] + nested


def check_one_of(
    validator: "SchemaValidator",
    value: Any,
    schemas: Sequence[SchemaNode],
    path: JsonPointer,
    depth: int,
    parent: SchemaNode,
) -> List[ValidationError]:
    nested: List[ValidationError] = []
    matched: List[int] = []
    for idx, sub in enumerate(schemas):
        sub_errors = validator.descend(value, sub, path, depth + 1)
        if sub_errors:
            nested.extend(sub_errors)
        else:
            matched.append(idx)

    if len(matched) == 1:
        return []
    if not matched:
        head = _synthetic(
            path, "oneOf", 1, "Value does not match any schema in oneOf", parent
        )
        return [head] + nested
    # Ambiguous: no branch is singled out as wrong, so nested errors are dropped.
    return [
        _synthetic(
            path,
            "oneOf",
            1,
            f"Value matches more than one schema in oneOf (indices {matched})",
            parent,
        )
    ]


def check_not(
    validator: "SchemaValidator",
    value: Any,
    schema: SchemaNode,
    path: JsonPointer,
    depth: int,
    parent: SchemaNode,
) -> List[ValidationError]:
    if validator.descend(value, schema, path, depth + 1):
        return []
    return [
        _synthetic(path, "not", False, "Value must not be valid against the not schema", parent)
    ]


def check_conditional(
    validator: "SchemaValidator",
    value: Any,
    if_schema: Optional[SchemaNode],
    then_schema: Optional[SchemaNode],
    else_schema: Optional[SchemaNode],
    path: JsonPointer,
    depth: int,
    parent: SchemaNode,
) -> List[ValidationError]:
    if if_schema is None:
        return []

    if not validator.descend(value, if_schema, path, depth + 1):
        if then_schema is None:
            return []
        branch_errors = validator.descend(value, then_schema, path, depth + 1)
        if not branch_errors:
            return []
        head = _synthetic(
            path, "then", True, "Value matches if schema but not then schema", parent
        )
        return [head] + branch_errors

    if else_schema is None:
        return []
    branch_errors = validator.descend(value, else_schema, path, depth + 1)
    if not branch_errors:
        return []
    head = _synthetic(
        path,
        "else",
        True,
        "Value does not match if schema and does not match else schema",
        parent,
    )
    return [head] + branch_errors


def check_composition(
    validator: "SchemaValidator",
    value: Any,
    schema: SchemaNode,
    path: JsonPointer,
    depth: int,
) -> List[ValidationError]:
    """Run every composition/conditional keyword on ``schema``, accumulating errors."""
    errors: List[ValidationError] = []
    if schema.all_of:
        errors.extend(check_all_of(validator, value, schema.all_of, path, depth))
    if schema.any_of:
        errors.extend(check_any_of(validator, value, schema.any_of, path, depth, schema))
    if schema.one_of:
        errors.extend(check_one_of(validator, value, schema.one_of, path, depth, schema))
    if schema.not_ is not None:
        errors.extend(check_not(validator, value, schema.not_, path, depth, schema))
    if schema.if_ is not None:
        errors.extend(
            check_conditional(
                validator, value, schema.if_, schema.then, schema.else_, path, depth, schema
            )
        )
    return errors
