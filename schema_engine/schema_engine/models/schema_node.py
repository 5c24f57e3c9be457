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

"""Immutable schema tree.

One ``SchemaNode`` type carries every Draft-07 keyword. Type-specific keyword
groups are always present as attributes but are only consulted by the engine
when the instance has the matching runtime kind.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .json_type import JsonType


class _Missing:
    """Marker for keywords whose value may legitimately be ``None`` (const, default)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

Items = Union["SchemaNode", Tuple["SchemaNode", ...]]
BoolOrSchema = Union[bool, "SchemaNode"]
Dependency = Union[Tuple[str, ...], "SchemaNode"]

# attributes holding sequences that are normalised to tuples
_TUPLE_FIELDS = ("examples", "enum", "required", "all_of", "any_of", "one_of")


@dataclass(frozen=True)
class SchemaNode:
    # boolean schema form: True accepts everything, False rejects everything
    boolean: Optional[bool] = None

    # metadata
    id: Optional[str] = None
    schema_uri: Optional[str] = None
    ref: Optional[str] = None
    comment: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = MISSING
    examples: Optional[Tuple[Any, ...]] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None
    definitions: Optional[Dict[str, "SchemaNode"]] = None

    # any instance
    type: Optional[Tuple[JsonType, ...]] = None
    enum: Optional[Tuple[Any, ...]] = None
    const: Any = MISSING

    # numbers
    multiple_of: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: Optional[float] = None
    exclusive_maximum: Optional[float] = None

    # strings
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    content_encoding: Optional[str] = None
    content_media_type: Optional[str] = None

    # arrays
    items: Optional[Items] = None
    additional_items: Optional[BoolOrSchema] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: Optional[bool] = None
    contains: Optional["SchemaNode"] = None

    # objects
    min_properties: Optional[int] = None
    max_properties: Optional[int] = None
    required: Optional[Tuple[str, ...]] = None
    properties: Optional[Dict[str, "SchemaNode"]] = None
    pattern_properties: Optional[Dict[str, "SchemaNode"]] = None
    additional_properties: Optional[BoolOrSchema] = None
    dependencies: Optional[Dict[str, Dependency]] = None
    property_names: Optional["SchemaNode"] = None

    # composition
    all_of: Optional[Tuple["SchemaNode", ...]] = None
    any_of: Optional[Tuple["SchemaNode", ...]] = None
    one_of: Optional[Tuple["SchemaNode", ...]] = None
    not_: Optional["SchemaNode"] = None

    # conditional
    if_: Optional["SchemaNode"] = None
    then: Optional["SchemaNode"] = None
    else_: Optional["SchemaNode"] = None

    def __post_init__(self) -> None:
        # Accept the convenient authoring forms: type="string", lists instead of tuples.
        if self.type is not None:
            raw = self.type
            if isinstance(raw, (str, JsonType)):
                raw = (raw,)
            object.__setattr__(self, "type", tuple(JsonType.parse(t) for t in raw))
        for name in _TUPLE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, list):
                object.__setattr__(self, name, tuple(value))
        if isinstance(self.items, list):
            object.__setattr__(self, "items", tuple(self.items))
        if self.dependencies:
            deps = {
                k: tuple(v) if isinstance(v, list) else v
                for k, v in self.dependencies.items()
            }
            object.__setattr__(self, "dependencies", deps)

    @classmethod
    def always(cls) -> "SchemaNode":
        return _TRUE

    @classmethod
    def never(cls) -> "SchemaNode":
        return _FALSE

    @property
    def is_boolean(self) -> bool:
        return self.boolean is not None

    @property
    def has_const(self) -> bool:
        return self.const is not MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_tuple_items(self) -> bool:
        return isinstance(self.items, tuple)

    def keywords(self) -> Iterator[Tuple[str, Any]]:
        """Yield ``(attribute, value)`` for every keyword set on this node."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is MISSING or (value is None and f.default is None) or f.name == "boolean":
                continue
            yield f.name, value


_TRUE = SchemaNode(boolean=True)
_FALSE = SchemaNode(boolean=False)
