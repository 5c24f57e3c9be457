from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    pointer: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[SourceMap], pointer: Optional[str]) -> SourceLocation:
    """Find the closest recorded location for ``pointer``.

    Missing pointers (e.g. a required property that is absent) fall back to the
    nearest recorded ancestor, so the location still lands on the enclosing object.
    """
    if not source_map or pointer is None:
        return SourceLocation(pointer=pointer)

    candidate = pointer
    while True:
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(
                pointer=pointer,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not candidate:
            return SourceLocation(pointer=pointer)
        candidate = candidate.rsplit("/", 1)[0]

