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

"""Keyword groups for string, number, array and object instances."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List, Sequence

from ..formats.predicates import decode_base64
from ..models.schema_node import SchemaNode
from ..models.validation_result import ValidationError
from ..utils.json_pointer import JsonPointer, join_path
from ..utils.json_values import compile_pattern, first_duplicate, is_multiple_of

if TYPE_CHECKING:
    from .engine import SchemaValidator


def _error(path, keyword, expected, actual, message, schema) -> ValidationError:
    return ValidationError.create(
        path=path, keyword=keyword, expected=expected, actual=actual, message=message, schema=schema
    )


# -------------------------
# strings
# -------------------------


def check_string(validator: "SchemaValidator", value: str, schema: SchemaNode, path: JsonPointer) -> List[ValidationError]:
    errors: List[ValidationError] = []
    length = len(value)  # code points

    if schema.min_length is not None and length < schema.min_length:
        errors.append(
            _error(path, "minLength", schema.min_length, length,
                   f"String length {length} is less than minimum length {schema.min_length}", schema)
        )
    if schema.max_length is not None and length > schema.max_length:
        errors.append(
            _error(path, "maxLength", schema.max_length, length,
                   f"String length {length} exceeds maximum length {schema.max_length}", schema)
        )
    if schema.pattern is not None and not compile_pattern(schema.pattern).search(value):
        errors.append(
            _error(path, "pattern", schema.pattern, value,
                   f"String does not match pattern: {schema.pattern}", schema)
        )
    if schema.format is not None and validator.config.format_assertion:
        reason = validator.formats.validate(value, schema.format)
        if reason is not None:
            errors.append(
                _error(path, "format", schema.format, value, f"Invalid {schema.format} format: {reason}", schema)
            )

    errors.extend(_check_content(value, schema, path))
    return errors


def _check_content(value: str, schema: SchemaNode, path: JsonPointer) -> List[ValidationError]:
    encoding = schema.content_encoding
    media_type = schema.content_media_type
    if encoding is None and media_type is None:
        return []

    text = value
    if encoding is not None:
        if encoding.lower() != "base64":
            return []
        try:
            decoded = decode_base64(value)
        except ValueError as exc:
            return [_error(path, "contentEncoding", encoding, value, str(exc), schema)]
        if media_type is None:
            return []
        try:
            text = decoded.decode("utf-8")
        except UnicodeDecodeError as exc:
            return [
                _error(path, "contentEncoding", encoding, value,
                       f"Failed to decode base64 content as UTF-8: {exc}", schema)
            ]

    if media_type is not None and media_type.lower() == "application/json":
        try:
            json.loads(text)
        except json.JSONDecodeError:
            message = "Decoded content is not valid JSON" if encoding else "Content is not valid JSON"
            return [_error(path, "contentMediaType", media_type, value, message, schema)]
    return []


# -------------------------
# numbers
# -------------------------


def check_number(value, schema: SchemaNode, path: JsonPointer) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if schema.minimum is not None and value < schema.minimum:
        errors.append(
            _error(path, "minimum", schema.minimum, value,
                   f"Value {value} must be greater than or equal to {schema.minimum}", schema)
        )
    if schema.maximum is not None and value > schema.maximum:
        errors.append(
            _error(path, "maximum", schema.maximum, value,
                   f"Value {value} must be less than or equal to {schema.maximum}", schema)
        )
    if schema.exclusive_minimum is not None and value <= schema.exclusive_minimum:
        errors.append(
            _error(path, "exclusiveMinimum", schema.exclusive_minimum, value,
                   f"Value {value} must be greater than {schema.exclusive_minimum}", schema)
        )
    if schema.exclusive_maximum is not None and value >= schema.exclusive_maximum:
        errors.append(
            _error(path, "exclusiveMaximum", schema.exclusive_maximum, value,
                   f"Value {value} must be less than {schema.exclusive_maximum}", schema)
        )
    if schema.multiple_of is not None and not is_multiple_of(value, schema.multiple_of):
        errors.append(
            _error(path, "multipleOf", schema.multiple_of, value,
                   f"Value {value} must be a multiple of {schema.multiple_of}", schema)
        )
    return errors


# -------------------------
# arrays
# -------------------------


def check_array(
    validator: "SchemaValidator",
    value: Sequence[Any],
    schema: SchemaNode,
    path: JsonPointer,
    depth: int,
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    count = len(value)

    if schema.min_items is not None and count < schema.min_items:
        errors.append(
            _error(path, "minItems", schema.min_items, count,
                   f"Array length {count} is less than minimum length {schema.min_items}", schema)
        )
    if schema.max_items is not None and count > schema.max_items:
        errors.append(
            _error(path, "maxItems", schema.max_items, count,
                   f"Array length {count} exceeds maximum length {schema.max_items}", schema)
        )
    if schema.unique_items:
        duplicate = first_duplicate(value)
        if duplicate is not None:
            i, j = duplicate
            errors.append(
                _error(path, "uniqueItems", True, [i, j],
                       f"Array items at positions {i} and {j} are duplicates", schema)
            )

    if isinstance(schema.items, SchemaNode):
        for idx, item in enumerate(value):
            errors.extend(validator.descend(item, schema.items, join_path(path, idx), depth + 1))
    elif schema.items is not None:
        tuple_schemas = schema.items
        for idx, (item, item_schema) in enumerate(zip(value, tuple_schemas)):
            errors.extend(validator.descend(item, item_schema, join_path(path, idx), depth + 1))

        extra = count - len(tuple_schemas)
        additional = schema.additional_items
        if extra > 0 and additional is False:
            errors.append(
                _error(path, "additionalItems", len(tuple_schemas), count,
                       f"Array has {count} items, but only {len(tuple_schemas)} are allowed by items schema",
                       schema)
            )
        elif extra > 0 and isinstance(additional, SchemaNode):
            for idx in range(len(tuple_schemas), count):
                errors.extend(validator.descend(value[idx], additional, join_path(path, idx), depth + 1))

    if schema.contains is not None:
        if not any(not validator.descend(item, schema.contains, join_path(path, idx), depth + 1)
                   for idx, item in enumerate(value)):
            errors.append(
                _error(path, "contains", "at least one item matching the schema", "no matching items",
                       "Array does not contain any items matching the schema", schema)
            )
    return errors


# -------------------------
# objects
# -------------------------


def _is_additional(name: str, schema: SchemaNode) -> bool:
    if schema.properties and name in schema.properties:
        return False
    if schema.pattern_properties:
        for pattern in schema.pattern_properties:
            if compile_pattern(pattern).search(name):
                return False
    return True


def check_object(
    validator: "SchemaValidator",
    value: Dict[str, Any],
    schema: SchemaNode,
    path: JsonPointer,
    depth: int,
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    count = len(value)

    if schema.min_properties is not None and count < schema.min_properties:
        errors.append(
            _error(path, "minProperties", schema.min_properties, count,
                   f"Object has {count} properties, which is less than the required minimum of "
                   f"{schema.min_properties}", schema)
        )
    if schema.max_properties is not None and count > schema.max_properties:
        errors.append(
            _error(path, "maxProperties", schema.max_properties, count,
                   f"Object has {count} properties, which exceeds the maximum of {schema.max_properties}",
                   schema)
        )

    for name in schema.required or ():
        if name not in value:
            errors.append(
                _error(path, "required", name, None, f'Required property "{name}" is missing', schema)
            )

    if schema.property_names is not None:
        for name in value:
            key = str(name)
            if validator.descend(key, schema.property_names, join_path(path, key), depth + 1):
                errors.append(
                    _error(join_path(path, key), "propertyNames", "property name matching schema", key,
                           f'Property name "{key}" does not match propertyNames schema', schema)
                )

    if schema.properties:
        for name, prop_schema in schema.properties.items():
            if name in value:
                errors.extend(validator.descend(value[name], prop_schema, join_path(path, name), depth + 1))

    if schema.pattern_properties:
        for pattern, prop_schema in schema.pattern_properties.items():
            regex = compile_pattern(pattern)
            for name, prop_value in value.items():
                key = str(name)
                if regex.search(key):
                    errors.extend(validator.descend(prop_value, prop_schema, join_path(path, key), depth + 1))

    additional = schema.additional_properties
    if additional is not None and additional is not True:
        for name, prop_value in value.items():
            key = str(name)
            if not _is_additional(key, schema):
                continue
            if additional is False:
                errors.append(
                    _error(join_path(path, key), "additionalProperties", False, key,
                           f'Additional property "{key}" is not allowed', schema)
                )
            else:
                errors.extend(validator.descend(prop_value, additional, join_path(path, key), depth + 1))

    if schema.dependencies:
        for name, dependency in schema.dependencies.items():
            if name not in value:
                continue
            if isinstance(dependency, SchemaNode):
                nested = validator.descend(value, dependency, path, depth + 1)
                if nested:
                    errors.append(
                        _error(path, "dependencies", name, None,
                               f'Object with property "{name}" does not match its dependency schema', schema)
                    )
                    errors.extend(nested)
            else:
                for dep_name in dependency:
                    if dep_name not in value:
                        errors.append(
                            _error(path, "dependencies", dep_name, None,
                                   f'Property "{name}" depends on property "{dep_name}", which is missing',
                                   schema)
                        )
    return errors
