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

"""Linter package for JSON Schema documents."""

import logging
from pathlib import Path
from typing import List

from ..exceptions import DocumentLoadError
from .report import LintResult
from .schema_linter import SchemaLinter, lint_schema

__all__ = ['lint_files', 'lint_schema', 'LintResult', 'SchemaLinter']

logger = logging.getLogger(__name__)


def lint_files(file_paths: List[Path], root: bool = False) -> List[LintResult]:
    """Lint a list of schema files.

    Args:
        file_paths: List of file paths to lint
        root: Also require root-document metadata ($schema, $id, title, description)

    Returns:
        List of LintResult objects, one per file
    """
    # Imported here: the builder itself depends on this package's rules.
    from ..models.parsing.schema_builder import collect_schema_issues
    from ..models.parsing.yaml_parser import yaml_parser

    results = []
    for file_path in file_paths:
        try:
            document, source_map = yaml_parser.load_document(file_path)
        except DocumentLoadError as e:
            result = LintResult(file_path)
            result.add_error(f"Failed to load schema file: {e}")
            results.append(result)
            continue

        result = LintResult(file_path, source_map)
        _, issues = collect_schema_issues(document, root=root)
        for issue in issues:
            if issue.is_error:
                result.add_error(issue.message, issue.path)
            else:
                result.add_warning(issue.message, issue.path)
        logger.debug(f"Linted {file_path}: {len(result.errors)} errors, {len(result.warnings)} warnings")
        results.append(result)

    return results
