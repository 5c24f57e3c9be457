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

"""JSON Schema (Draft-07) model and validation engine.

Typical use::

    from schema_engine import build_schema, validate

    schema = build_schema({"type": "object", "required": ["name"]})
    result = validate({"age": 3}, schema)
    for error in result:
        print(error.path, error.keyword, error.message)
"""

from .config import EngineConfig, engine_config
from .exceptions import (
    DocumentLoadError,
    FormatRegistrationError,
    SchemaConstructionError,
    SchemaEngineError,
)
from .formats import FormatRegistry, default_formats, is_valid_format, validate_format
from .models import (
    MISSING,
    JsonType,
    SchemaIssue,
    SchemaNode,
    ValidationError,
    ValidationResult,
)
from .validation import SchemaValidator, is_valid, validate
from .linter import lint_schema
from .models.parsing import build_root_schema, build_schema, to_document

__version__ = "0.1.0"

DRAFT_07_URI = "http://json-schema.org/draft-07/schema#"

__all__ = [
    "DRAFT_07_URI",
    "MISSING",
    "DocumentLoadError",
    "EngineConfig",
    "FormatRegistrationError",
    "FormatRegistry",
    "JsonType",
    "SchemaConstructionError",
    "SchemaEngineError",
    "SchemaIssue",
    "SchemaNode",
    "SchemaValidator",
    "ValidationError",
    "ValidationResult",
    "build_root_schema",
    "build_schema",
    "default_formats",
    "engine_config",
    "is_valid",
    "is_valid_format",
    "lint_schema",
    "to_document",
    "validate",
    "validate_format",
]
