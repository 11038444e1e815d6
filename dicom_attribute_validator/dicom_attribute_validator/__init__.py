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

"""Conformance checks of DICOM attribute sets against Type 1/2/3 rules."""

__version__ = "0.3.0"

# Rule document format understood by this version of the tool.
RULE_FORMAT_VERSION = "1.0.0"

from .data.attributes import AttributeSet, Sequence
from .data.tag_utils import Tag, parse_tag, to_string
from .exceptions import AttributeValidatorError, NullInputError
from .validation.attributes_validator import AttributesValidator
from .validation.check_result import AttributeType, CheckOutcome, CheckResult
from .validation.report import ValidationReport

__all__ = [
    "AttributeSet",
    "AttributeType",
    "AttributeValidatorError",
    "AttributesValidator",
    "CheckOutcome",
    "CheckResult",
    "NullInputError",
    "RULE_FORMAT_VERSION",
    "Sequence",
    "Tag",
    "ValidationReport",
    "parse_tag",
    "to_string",
]
