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

"""CLI entry point for linting JSON Schema documents."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from ..config import engine_config
from . import lint_files
from .report import OUTPUT_FORMATS, render_results

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = ['.schema.json', '.schema.yaml', '.schema.yml']
DOCUMENT_EXTENSIONS = ['.json', '.yaml', '.yml']


def find_documents(paths: Sequence[str], extensions: Sequence[str]) -> List[Path]:
    """Expand ``paths`` into document files.

    Directories are searched recursively for ``extensions``; explicit files are
    accepted when they carry any JSON/YAML suffix.
    """
    found = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            if path.suffix.lower() in DOCUMENT_EXTENSIONS:
                found.append(path)
            else:
                logger.warning(f"File is not a JSON/YAML document: {path}")
        elif path.is_dir():
            for ext in extensions:
                found.extend(path.rglob(f'*{ext}'))
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(found))


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint JSON Schema (Draft-07) documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Schema files or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--root',
        action='store_true',
        help='Require root-document metadata ($schema, $id, title, description)',
    )

    args = parser.parse_args(argv)
    engine_config.set_logging(quiet_stdout=args.format != 'human')

    if not args.paths:
        args.paths = ['.']

    schema_files = find_documents(args.paths, SCHEMA_EXTENSIONS)

    if not schema_files:
        print("No schema files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(schema_files, root=args.root)
    render_results(results, args.format, sys.stdout)

    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
