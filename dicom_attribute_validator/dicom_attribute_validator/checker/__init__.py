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

"""Checker package: validate record files against module rules."""

import logging
from pathlib import Path
from typing import List

from ..data.dicom_json import load_record
from ..exceptions import RecordFormatError
from ..schema.module_rules import ModuleRules
from ..validation.report import ValidationReport
from .module_checker import check_attributes, check_rule

__all__ = ['check_files', 'check_attributes', 'check_rule']

logger = logging.getLogger(__name__)


def check_files(file_paths: List[Path], rules: ModuleRules) -> List[ValidationReport]:
    """Check a list of record files.

    Args:
        file_paths: List of DICOM JSON record files
        rules: Module rules every record is checked against

    Returns:
        List of ValidationReport objects, one per file
    """
    reports = []

    for file_path in file_paths:
        file_path = Path(file_path)
        try:
            attrs = load_record(file_path)
        except RecordFormatError as e:
            logger.warning(f"Skipping unreadable record {file_path}: {e}")
            report = ValidationReport(source=file_path)
            report.add_error(str(e))
            reports.append(report)
            continue

        reports.append(check_attributes(attrs, rules, source=file_path))

    return reports
