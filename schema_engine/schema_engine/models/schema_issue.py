from __future__ import annotations

from dataclasses import dataclass

from ..utils.json_pointer import JsonPointer

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class SchemaIssue:
    """One well-formedness problem, located by a pointer into the schema document."""

    message: str
    path: JsonPointer = ""
    severity: str = ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def __str__(self) -> str:
        return self.message + (f" (schema_path={self.path})" if self.path else "")
