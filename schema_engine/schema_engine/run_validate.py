#!/usr/bin/env python3
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

"""CLI entry point for validating JSON/YAML instance documents against a schema."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .config import engine_config
from .exceptions import DocumentLoadError, SchemaConstructionError
from .linter.report import OUTPUT_FORMATS, LintResult, render_results
from .linter.run_lint import DOCUMENT_EXTENSIONS, find_documents
from .models.parsing.schema_builder import build_schema
from .models.parsing.yaml_parser import yaml_parser
from .validation.engine import SchemaValidator

logger = logging.getLogger(__name__)


def validate_files(schema_path: Path, instance_paths: List[Path], first_error: bool = False,
                   root: bool = False) -> List[LintResult]:
    """Validate each instance file against the schema in ``schema_path``.

    Schema problems are reported against the schema file and stop the run;
    instance problems are reported per instance file.
    """
    try:
        document, source_map = yaml_parser.load_document(schema_path)
    except DocumentLoadError as e:
        result = LintResult(schema_path)
        result.add_error(f"Failed to load schema file: {e}")
        return [result]

    result = LintResult(schema_path, source_map)
    try:
        schema = build_schema(document, root=root)
    except SchemaConstructionError as e:
        for issue in e.issues:
            if issue.is_error:
                result.add_error(f"Invalid schema: {issue.message}", issue.path)
        return [result]

    validator = SchemaValidator()
    results = []
    for instance_path in instance_paths:
        try:
            instance, source_map = yaml_parser.load_document(instance_path)
        except DocumentLoadError as e:
            result = LintResult(instance_path)
            result.add_error(str(e))
            results.append(result)
            continue

        result = LintResult(instance_path, source_map)
        outcome = validator.validate(instance, schema)
        errors = outcome.errors[:1] if first_error else outcome.errors
        for error in errors:
            result.add_error(error.message, error.path, keyword=error.keyword)
        logger.debug(f"Validated {instance_path}: {'valid' if outcome.valid else f'{len(outcome)} errors'}")
        results.append(result)
    return results


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validate CLI."""
    parser = argparse.ArgumentParser(
        description='Validate JSON/YAML documents against a JSON Schema (Draft-07)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema', help='Schema file (.json, .yaml or .yml)')
    parser.add_argument(
        'instances',
        nargs='+',
        help='Instance files or directories to validate',
    )
    parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--first-error',
        action='store_true',
        help='Report only the first error of each instance',
    )
    parser.add_argument(
        '--root',
        action='store_true',
        help='Require root-document metadata in the schema',
    )

    args = parser.parse_args(argv)
    engine_config.set_logging(quiet_stdout=args.format != 'human')

    instance_files = find_documents(args.instances, DOCUMENT_EXTENSIONS)
    if not instance_files:
        print("No instance documents found.", file=sys.stderr)
        sys.exit(1)

    results = validate_files(Path(args.schema), instance_files, first_error=args.first_error, root=args.root)
    render_results(results, args.format, sys.stdout)

    if any(not r.ok for r in results):
        sys.exit(1)
    if args.format == 'human':
        print(f"Validation succeeded for {len(results)} document(s).")
    sys.exit(0)


if __name__ == '__main__':
    main()
