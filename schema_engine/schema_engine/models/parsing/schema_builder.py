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

"""Build ``SchemaNode`` trees from generic documents and serialize them back.

Construction runs in three passes over the fully assembled input:

1. the document is checked against the Draft-07 metaschema (``jsonschema``)
2. the document is converted into an immutable ``SchemaNode`` tree
3. the tree is linted for self-inconsistencies (``maximum < minimum``, ...)

Any error-level issue aborts construction with a single
:class:`SchemaConstructionError` listing all of them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator

from ...exceptions import SchemaConstructionError
from ...linter.schema_linter import lint_schema
from ...utils.json_pointer import JsonPointer, join_path, pointer_from_parts
from ..json_type import JsonType
from ..schema_issue import SchemaIssue
from ..schema_node import MISSING, SchemaNode

logger = logging.getLogger(__name__)

# (document keyword, SchemaNode attribute, value kind); order is the serialization order
KEYWORDS: Tuple[Tuple[str, str, str], ...] = (
    ("$schema", "schema_uri", "string"),
    ("$id", "id", "string"),
    ("$ref", "ref", "string"),
    ("$comment", "comment", "string"),
    ("title", "title", "string"),
    ("description", "description", "string"),
    ("type", "type", "type"),
    ("enum", "enum", "list"),
    ("const", "const", "value"),
    ("default", "default", "value"),
    ("examples", "examples", "list"),
    ("readOnly", "read_only", "value"),
    ("writeOnly", "write_only", "value"),
    ("multipleOf", "multiple_of", "value"),
    ("minimum", "minimum", "value"),
    ("maximum", "maximum", "value"),
    ("exclusiveMinimum", "exclusive_minimum", "value"),
    ("exclusiveMaximum", "exclusive_maximum", "value"),
    ("minLength", "min_length", "count"),
    ("maxLength", "max_length", "count"),
    ("pattern", "pattern", "string"),
    ("format", "format", "string"),
    ("contentEncoding", "content_encoding", "string"),
    ("contentMediaType", "content_media_type", "string"),
    ("items", "items", "items"),
    ("additionalItems", "additional_items", "bool_or_schema"),
    ("minItems", "min_items", "count"),
    ("maxItems", "max_items", "count"),
    ("uniqueItems", "unique_items", "value"),
    ("contains", "contains", "schema"),
    ("minProperties", "min_properties", "count"),
    ("maxProperties", "max_properties", "count"),
    ("required", "required", "list"),
    ("properties", "properties", "schema_map"),
    ("patternProperties", "pattern_properties", "schema_map"),
    ("additionalProperties", "additional_properties", "bool_or_schema"),
    ("dependencies", "dependencies", "dependencies"),
    ("propertyNames", "property_names", "schema"),
    ("allOf", "all_of", "schema_list"),
    ("anyOf", "any_of", "schema_list"),
    ("oneOf", "one_of", "schema_list"),
    ("not", "not_", "schema"),
    ("if", "if_", "schema"),
    ("then", "then", "schema"),
    ("else", "else_", "schema"),
    ("definitions", "definitions", "schema_map"),
)

_META_VALIDATOR = Draft7Validator(Draft7Validator.META_SCHEMA)

_TOO_DEEP = "Schema document is nested too deeply to process"


def _too_deep_issue() -> SchemaIssue:
    logger.warning(_TOO_DEEP)
    return SchemaIssue(message=_TOO_DEEP, path="")


def check_metaschema(document: Any) -> List[SchemaIssue]:
    """Check ``document`` against the Draft-07 metaschema."""
    issues: List[SchemaIssue] = []
    try:
        for err in _META_VALIDATOR.iter_errors(document):
            issues.append(SchemaIssue(message=err.message, path=pointer_from_parts(err.absolute_path)))
    except RecursionError:
        return [_too_deep_issue()]
    return issues


class _DocumentParser:
    """Tolerant document → tree conversion; shape problems become issues."""

    def __init__(self):
        self.issues: List[SchemaIssue] = []

    def _issue(self, message: str, path: JsonPointer) -> None:
        self.issues.append(SchemaIssue(message=message, path=path))

    def parse(self, document: Any, path: JsonPointer = "") -> SchemaNode:
        if isinstance(document, bool):
            return SchemaNode.always() if document else SchemaNode.never()
        if not isinstance(document, dict):
            self._issue(f"Schema must be an object or a boolean, got {type(document).__name__}", path)
            return SchemaNode.always()

        attrs: Dict[str, Any] = {}
        for keyword, attr, kind in KEYWORDS:
            if keyword not in document:
                continue
            raw = document[keyword]
            kw_path = join_path(path, keyword)
            value = getattr(self, f"_parse_{kind}")(raw, kw_path)
            if value is not MISSING:
                attrs[attr] = value
        return SchemaNode(**attrs)

    def _parse_value(self, raw, path):
        return raw

    def _parse_string(self, raw, path):
        if not isinstance(raw, str):
            self._issue(f"Expected a string, got {type(raw).__name__}", path)
            return MISSING
        return raw

    def _parse_count(self, raw, path):
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        if not isinstance(raw, int) or isinstance(raw, bool):
            self._issue(f"Expected a non-negative integer, got {raw!r}", path)
            return MISSING
        return raw

    def _parse_list(self, raw, path):
        if not isinstance(raw, list):
            self._issue(f"Expected an array, got {type(raw).__name__}", path)
            return MISSING
        return tuple(raw)

    def _parse_type(self, raw, path):
        names = raw if isinstance(raw, list) else [raw]
        types = []
        for idx, name in enumerate(names):
            try:
                types.append(JsonType.parse(name))
            except ValueError as exc:
                self._issue(str(exc), join_path(path, idx) if isinstance(raw, list) else path)
        if not types:
            return MISSING
        return tuple(types)

    def _parse_schema(self, raw, path):
        return self.parse(raw, path)

    def _parse_schema_list(self, raw, path):
        if not isinstance(raw, list):
            self._issue(f"Expected an array of schemas, got {type(raw).__name__}", path)
            return MISSING
        return tuple(self.parse(item, join_path(path, idx)) for idx, item in enumerate(raw))

    def _parse_schema_map(self, raw, path):
        if not isinstance(raw, dict):
            self._issue(f"Expected an object of schemas, got {type(raw).__name__}", path)
            return MISSING
        return {str(name): self.parse(sub, join_path(path, str(name))) for name, sub in raw.items()}

    def _parse_items(self, raw, path):
        if isinstance(raw, list):
            return self._parse_schema_list(raw, path)
        return self.parse(raw, path)

    def _parse_bool_or_schema(self, raw, path):
        if isinstance(raw, bool):
            return raw
        return self.parse(raw, path)

    def _parse_dependencies(self, raw, path):
        if not isinstance(raw, dict):
            self._issue(f"Expected an object, got {type(raw).__name__}", path)
            return MISSING
        deps: Dict[str, Any] = {}
        for name, dep in raw.items():
            dep_path = join_path(path, str(name))
            if isinstance(dep, list):
                if not all(isinstance(d, str) for d in dep):
                    self._issue("Property dependency must list property names", dep_path)
                    continue
                deps[str(name)] = tuple(dep)
            else:
                deps[str(name)] = self.parse(dep, dep_path)
        return deps


def parse_schema(document: Any) -> Tuple[SchemaNode, List[SchemaIssue]]:
    """Convert ``document`` into a tree without linting it."""
    parser = _DocumentParser()
    try:
        node = parser.parse(document)
    except RecursionError:
        return SchemaNode.always(), [_too_deep_issue()]
    return node, parser.issues


def collect_schema_issues(
    document: Any, *, root: bool = False
) -> Tuple[Optional[SchemaNode], List[SchemaIssue]]:
    """Run every construction check and return ``(node, issues)`` without raising.

    ``node`` is None when the document does not satisfy the metaschema.
    """
    issues = check_metaschema(document)
    if any(i.is_error for i in issues):
        return None, issues

    node, parse_issues = parse_schema(document)
    issues.extend(parse_issues)
    try:
        issues.extend(lint_schema(node, root=root))
    except RecursionError:
        issues.append(_too_deep_issue())
    return node, issues


def build_schema(document: Any, *, check: bool = True, root: bool = False) -> SchemaNode:
    """Build a validated ``SchemaNode`` tree from a JSON-like document.

    Args:
        document: A dict (schema object) or bool (boolean schema)
        check: Run the metaschema check and the linter (default). With
            ``check=False`` only shape errors found during conversion are fatal.
        root: Require root-document metadata (``$schema``, ``$id``, ``title``,
            ``description``)

    Raises:
        SchemaConstructionError: If the document is malformed or self-inconsistent
    """
    if check:
        node, issues = collect_schema_issues(document, root=root)
    else:
        node, issues = parse_schema(document)

    if any(i.is_error for i in issues):
        raise SchemaConstructionError.from_issues(issues)

    for issue in issues:
        logger.warning(f"Schema warning: {issue}")
    return node


def build_root_schema(document: Any) -> SchemaNode:
    return build_schema(document, check=True, root=True)


def to_document(node: SchemaNode) -> Any:
    """Serialize a tree back into a plain JSON-compatible document."""
    if node.is_boolean:
        return node.boolean

    document: Dict[str, Any] = {}
    for keyword, attr, kind in KEYWORDS:
        value = getattr(node, attr)
        # const/default use MISSING for absence, so a null value is kept
        if value is MISSING or (value is None and attr not in ("const", "default")):
            continue
        document[keyword] = _serialize(value, kind)
    return document


def _serialize(value: Any, kind: str) -> Any:
    if kind == "type":
        names = [t.value for t in value]
        return names[0] if len(names) == 1 else names
    if kind == "list":
        return list(value)
    if kind == "schema":
        return to_document(value)
    if kind == "schema_list":
        return [to_document(v) for v in value]
    if kind == "schema_map":
        return {name: to_document(v) for name, v in value.items()}
    if kind == "items":
        if isinstance(value, tuple):
            return [to_document(v) for v in value]
        return to_document(value)
    if kind == "bool_or_schema":
        return value if isinstance(value, bool) else to_document(value)
    if kind == "dependencies":
        return {
            name: list(dep) if isinstance(dep, tuple) else to_document(dep)
            for name, dep in value.items()
        }
    return value
