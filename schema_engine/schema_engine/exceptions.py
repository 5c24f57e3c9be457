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

"""Custom exceptions for the schema engine.

Instance validation never raises; these cover schema construction,
document loading and format registration only.
"""


class SchemaEngineError(Exception):
    """Base exception for schema-engine related errors."""
    pass


class SchemaConstructionError(SchemaEngineError):
    """Exception raised when a schema document is malformed or self-inconsistent.

    ``issues`` holds every :class:`~schema_engine.models.schema_issue.SchemaIssue`
    found while building the tree, warnings included.
    """

    def __init__(self, message: str, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])

    @classmethod
    def from_issues(cls, issues, source: str = "schema") -> "SchemaConstructionError":
        errors = [i for i in issues if i.is_error]
        details = "\n".join(f"  - {i}" for i in errors)
        return cls(f"Invalid {source}:\n{details}", issues)


class DocumentLoadError(SchemaEngineError):
    """Exception raised when a JSON/YAML document cannot be read or parsed."""
    pass


class FormatRegistrationError(SchemaEngineError):
    """Exception raised for invalid format predicate registrations."""
    pass
