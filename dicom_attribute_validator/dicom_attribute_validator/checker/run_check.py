#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
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

"""CLI entry point for checking DICOM JSON records against module rules."""

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Iterable, List

from ..config import validator_config
from ..exceptions import RuleFormatError
from ..schema.module_rules import load_module_rules
from . import check_files

RECORD_EXTENSIONS = ('.json', '.yaml', '.yml')


def find_record_files(paths: List[str], exclude: Iterable[Path] = ()) -> List[Path]:
    """Find all record files in given paths, skipping any file in *exclude*."""
    excluded = {Path(p).resolve() for p in exclude}
    record_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            record_files.append(path)
        elif path.is_dir():
            for ext in RECORD_EXTENSIONS:
                record_files.extend(path.rglob(f'*{ext}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(p for p in set(record_files) if p.resolve() not in excluded)


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the checker CLI."""
    parser = argparse.ArgumentParser(
        description='Check DICOM JSON records for Type 1/2/3 attribute conformance',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='+',
        help='Record files or directories containing records',
    )
    parser.add_argument(
        '--rules',
        required=True,
        help='YAML module rule document',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Log level (default: DICOM_VALIDATOR_LOG_LEVEL or INFO)',
    )

    args = parser.parse_args(argv)

    config = dataclasses.replace(validator_config)
    if args.log_level:
        config.log_level = args.log_level
    if args.format == 'json':
        # keep stdout for the report
        config.print_level = 'DEBUG'
    config.set_logging()

    try:
        rules = load_module_rules(args.rules)
    except RuleFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    record_files = find_record_files(args.paths, exclude=[Path(args.rules)])
    if not record_files:
        print("No record files found.", file=sys.stderr)
        sys.exit(2)

    reports = check_files(record_files, rules)

    if args.format == 'json':
        output = {
            'module': rules.name,
            'records': len(reports),
            'nonconformant': sum(1 for r in reports if not r.ok),
            'offending_elements': sum(r.offending_count for r in reports),
            'results': [r.to_dict() for r in reports],
        }
        print(json.dumps(output, indent=2))
    else:  # human-readable
        for report in reports:
            print(report.summary())

    failed = [r for r in reports if not r.ok]
    if failed:
        if args.format == 'human':
            print(f"\n{len(failed)} of {len(reports)} record(s) do not conform to '{rules.name}'.")
        sys.exit(1)
    if args.format == 'human':
        print(f"All {len(reports)} record(s) conform to '{rules.name}'.")
    sys.exit(0)


if __name__ == '__main__':
    main()
