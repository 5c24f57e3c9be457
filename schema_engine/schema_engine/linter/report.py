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

"""Per-file reports shared by the linter and validate command line tools."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from ..utils.source_location import SourceMap, lookup_source

OUTPUT_FORMATS = ('human', 'json', 'github-actions')


class LintResult:
    """Container for the errors and warnings reported for a single file."""

    def __init__(self, file_path: Path, source_map: Optional[SourceMap] = None):
        """Initialize the result.

        Args:
            file_path: Path to the file being checked
            source_map: Optional pointer → line/column map used to locate entries
        """
        self.file_path = file_path
        self.source_map = source_map
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    def _entry(self, message: str, pointer: Optional[str], extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if pointer is not None:
            entry['path'] = pointer
            loc = lookup_source(self.source_map, pointer)
            if loc.line is not None:
                entry['line'] = loc.line
            if loc.column is not None:
                entry['column'] = loc.column
        if extra:
            entry.update(extra)
        return entry

    def add_error(self, message: str, pointer: Optional[str] = None, **extra):
        self.errors.append(self._entry(message, pointer, extra))

    def add_warning(self, message: str, pointer: Optional[str] = None, **extra):
        self.warnings.append(self._entry(message, pointer, extra))

    @property
    def ok(self) -> bool:
        return not self.errors


def _location(entry: Dict[str, Any]) -> str:
    if 'line' in entry:
        return f":{entry['line']}:{entry.get('column', 1)}"
    return ""


def render_results(results: List[LintResult], output_format: str, stream: TextIO) -> None:
    """Write ``results`` to ``stream`` in one of :data:`OUTPUT_FORMATS`."""
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [
                {
                    'file': str(r.file_path),
                    'errors': r.errors,
                    'warnings': r.warnings,
                }
                for r in results
            ],
        }
        stream.write(json.dumps(output, indent=2, default=str) + "\n")
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                stream.write(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}\n")
            for warning in result.warnings:
                stream.write(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}\n")
    else:  # human-readable
        for result in results:
            if result.errors or result.warnings:
                stream.write(f"\n{result.file_path}:\n")
                for error in result.errors:
                    where = f" at {error['path'] or '/'}" if 'path' in error else ""
                    stream.write(f"  ERROR{_location(error)}: {error['message']}{where}\n")
                for warning in result.warnings:
                    where = f" at {warning['path'] or '/'}" if 'path' in warning else ""
                    stream.write(f"  WARNING{_location(warning)}: {warning['message']}{where}\n")
