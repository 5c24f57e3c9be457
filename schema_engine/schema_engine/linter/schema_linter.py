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

"""Well-formedness rules for ``SchemaNode`` trees.

These are the self-consistency checks the metaschema cannot express
(``maximum < minimum``, invalid regexes, a ``const`` its own node rejects, ...).
Issue paths point into the schema document, not into an instance.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Iterator, List, Sequence, Tuple

from ..models.schema_issue import ERROR, WARNING, SchemaIssue
from ..models.schema_node import MISSING, SchemaNode
from ..utils.json_pointer import JsonPointer, join_path
from ..utils.json_values import deep_equals
from ..validation.engine import validate

KNOWN_CONTENT_ENCODINGS = ("7bit", "8bit", "binary", "quoted-printable", "base16", "base32", "base64")
SCHEMA_URI_PREFIXES = ("http://json-schema.org/", "https://json-schema.org/")
ROOT_METADATA = (("$schema", "schema_uri"), ("$id", "id"), ("title", "title"), ("description", "description"))


def _children(node: SchemaNode, path: JsonPointer) -> Iterator[Tuple[SchemaNode, JsonPointer]]:
    """Yield every direct child schema with its document path."""
    for keyword, attr in (
        ("contains", "contains"),
        ("propertyNames", "property_names"),
        ("not", "not_"),
        ("if", "if_"),
        ("then", "then"),
        ("else", "else_"),
    ):
        child = getattr(node, attr)
        if child is not None:
            yield child, join_path(path, keyword)

    for keyword, attr in (("additionalItems", "additional_items"), ("additionalProperties", "additional_properties")):
        child = getattr(node, attr)
        if isinstance(child, SchemaNode):
            yield child, join_path(path, keyword)

    if isinstance(node.items, SchemaNode):
        yield node.items, join_path(path, "items")
    elif node.items is not None:
        for idx, child in enumerate(node.items):
            yield child, join_path(join_path(path, "items"), idx)

    for keyword, attr in (("allOf", "all_of"), ("anyOf", "any_of"), ("oneOf", "one_of")):
        for idx, child in enumerate(getattr(node, attr) or ()):
            yield child, join_path(join_path(path, keyword), idx)

    for keyword, attr in (
        ("properties", "properties"),
        ("patternProperties", "pattern_properties"),
        ("definitions", "definitions"),
    ):
        for name, child in (getattr(node, attr) or {}).items():
            yield child, join_path(join_path(path, keyword), name)

    for name, dep in (node.dependencies or {}).items():
        if isinstance(dep, SchemaNode):
            yield dep, join_path(join_path(path, "dependencies"), name)


def _duplicates(values: Sequence) -> List[Tuple[int, int]]:
    found = []
    for j in range(1, len(values)):
        for i in range(j):
            if deep_equals(values[i], values[j]):
                found.append((i, j))
                break
    return found


class SchemaLinter:
    """Collects :class:`SchemaIssue` values for a tree."""

    def __init__(self, root: bool = False):
        self.root = root
        self.issues: List[SchemaIssue] = []

    def _error(self, message: str, path: JsonPointer) -> None:
        self.issues.append(SchemaIssue(message=message, path=path, severity=ERROR))

    def _warning(self, message: str, path: JsonPointer) -> None:
        self.issues.append(SchemaIssue(message=message, path=path, severity=WARNING))

    def lint(self, node: SchemaNode, path: JsonPointer = "") -> List[SchemaIssue]:
        if self.root and not node.is_boolean:
            self._lint_root(node)
        self._walk(node, path)
        return self.issues

    def _lint_root(self, node: SchemaNode) -> None:
        for keyword, attr in ROOT_METADATA:
            if getattr(node, attr) in (None, ""):
                self._error(f"Root schema requires a non-empty '{keyword}'", join_path("", keyword))

    def _walk(self, node: SchemaNode, path: JsonPointer) -> None:
        if node.is_boolean:
            return
        self._lint_common(node, path)
        self._lint_numbers(node, path)
        self._lint_strings(node, path)
        self._lint_arrays(node, path)
        self._lint_objects(node, path)
        for child, child_path in _children(node, path):
            self._walk(child, child_path)
        self._lint_self_consistency(node, path)

    def _lint_common(self, node: SchemaNode, path: JsonPointer) -> None:
        if node.schema_uri is not None and not node.schema_uri.startswith(SCHEMA_URI_PREFIXES):
            self._error(
                f"Invalid $schema: {node.schema_uri}. Must be a URI from json-schema.org.",
                join_path(path, "$schema"),
            )

        if node.type is not None:
            if not node.type:
                self._error("Type array must not be empty", join_path(path, "type"))
            seen = set()
            for t in node.type:
                if t in seen:
                    self._error(f"Duplicate type: {t.value}", join_path(path, "type"))
                seen.add(t)

        if node.enum is not None:
            if not node.enum:
                self._error("Enum array must not be empty", join_path(path, "enum"))
            for i, j in _duplicates(node.enum):
                self._error(f"Duplicate enum value at indices {i} and {j}", join_path(path, "enum"))

        for keyword, attr in (("allOf", "all_of"), ("anyOf", "any_of"), ("oneOf", "one_of")):
            value = getattr(node, attr)
            if value is not None and not value:
                self._error(f"{keyword} array must not be empty", join_path(path, keyword))

        if node.if_ is None:
            if node.then is not None:
                self._error("then requires if to be present", join_path(path, "then"))
            if node.else_ is not None:
                self._error("else requires if to be present", join_path(path, "else"))

    def _lint_bounds(self, node, path, low_keyword, low_attr, high_keyword, high_attr) -> None:
        low = getattr(node, low_attr)
        high = getattr(node, high_attr)
        for keyword, value in ((low_keyword, low), (high_keyword, high)):
            if value is not None and value < 0:
                self._error(f"{keyword} must be a non-negative integer", join_path(path, keyword))
        if low is not None and high is not None and high < low:
            self._error(f"{high_keyword} must be greater than or equal to {low_keyword}", join_path(path, high_keyword))

    def _lint_numbers(self, node: SchemaNode, path: JsonPointer) -> None:
        if node.multiple_of is not None and node.multiple_of <= 0:
            self._error("multipleOf must be greater than 0", join_path(path, "multipleOf"))
        if node.minimum is not None and node.maximum is not None and node.maximum < node.minimum:
            self._error("maximum must be greater than or equal to minimum", join_path(path, "maximum"))
        if (
            node.exclusive_minimum is not None
            and node.exclusive_maximum is not None
            and node.exclusive_maximum <= node.exclusive_minimum
        ):
            self._error(
                "exclusiveMaximum must be greater than exclusiveMinimum",
                join_path(path, "exclusiveMaximum"),
            )

    def _lint_strings(self, node: SchemaNode, path: JsonPointer) -> None:
        self._lint_bounds(node, path, "minLength", "min_length", "maxLength", "max_length")
        if node.pattern is not None:
            self._lint_regex(node.pattern, join_path(path, "pattern"), "pattern")
        if node.content_encoding is not None and node.content_encoding.lower() not in KNOWN_CONTENT_ENCODINGS:
            self._error(
                f"Invalid contentEncoding: {node.content_encoding}. "
                f"Must be one of: {', '.join(KNOWN_CONTENT_ENCODINGS)}",
                join_path(path, "contentEncoding"),
            )
        if node.content_media_type is not None:
            parts = node.content_media_type.split("/")
            if len(parts) != 2 or not all(parts):
                self._error(
                    f'Invalid contentMediaType: {node.content_media_type}. Must be in format "type/subtype"',
                    join_path(path, "contentMediaType"),
                )

    def _lint_arrays(self, node: SchemaNode, path: JsonPointer) -> None:
        self._lint_bounds(node, path, "minItems", "min_items", "maxItems", "max_items")
        if node.is_tuple_items and not node.items:
            self._error("items array must not be empty", join_path(path, "items"))

    def _lint_objects(self, node: SchemaNode, path: JsonPointer) -> None:
        self._lint_bounds(node, path, "minProperties", "min_properties", "maxProperties", "max_properties")

        if node.required is not None:
            if not node.required:
                self._error("required array must not be empty", join_path(path, "required"))
            seen = set()
            for name in node.required:
                if name in seen:
                    self._error(f"Duplicate required property: {name}", join_path(path, "required"))
                seen.add(name)

        for name, dep in (node.dependencies or {}).items():
            if isinstance(dep, SchemaNode):
                continue
            dep_path = join_path(join_path(path, "dependencies"), name)
            if not dep:
                self._error(f"Property dependency array for {name} must not be empty", dep_path)
            seen = set()
            for dep_name in dep:
                if dep_name in seen:
                    self._error(f"Duplicate dependency in property dependency array for {name}: {dep_name}", dep_path)
                seen.add(dep_name)

        for pattern in node.pattern_properties or {}:
            self._lint_regex(pattern, join_path(join_path(path, "patternProperties"), pattern), "patternProperties")

    def _lint_regex(self, pattern: str, path: JsonPointer, keyword: str) -> None:
        try:
            re.compile(pattern)
        except re.error as exc:
            self._error(f"Invalid regular expression in {keyword}: {pattern} ({exc})", path)

    def _lint_self_consistency(self, node: SchemaNode, path: JsonPointer) -> None:
        """``const`` must satisfy its own node; a non-conforming ``default`` is only a warning."""
        # Skip when this subtree is already broken (e.g. an uncompilable pattern).
        if any(i.is_error and (i.path == path or i.path.startswith(path + "/")) for i in self.issues):
            return

        if node.has_const:
            bare = dataclasses.replace(node, const=MISSING)
            result = validate(node.const, bare)
            if not result.valid:
                self._error(
                    f"const value violates its own schema: {result.first_error.message}",
                    join_path(path, "const"),
                )
        if node.has_default:
            result = validate(node.default, node)
            if not result.valid:
                self._warning(
                    f"default value does not validate against its schema: {result.first_error.message}",
                    join_path(path, "default"),
                )


def lint_schema(node: SchemaNode, *, root: bool = False) -> List[SchemaIssue]:
    """Return every well-formedness issue in the tree rooted at ``node``."""
    return SchemaLinter(root=root).lint(node)
