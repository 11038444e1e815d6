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

"""Drive an attributes validator from module rules."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..data.attributes import AttributeSet
from ..data.tag_utils import to_string
from ..schema.module_rules import AttributeRule, ModuleRules
from ..validation.attributes_validator import AttributesValidator
from ..validation.check_result import CheckResult
from ..validation.report import ValidationReport

logger = logging.getLogger(__name__)


def check_rule(validator: AttributesValidator, rule: AttributeRule) -> CheckResult:
    """Run the check one rule describes against the validator's attribute set."""
    if rule.sequence:
        return validator.check_sequence(rule.tag, rule.type, rule.max_items)
    return validator.check_string(rule.tag, rule.type, rule.index, rule.vm, rule.default, rule.enum)


def check_attributes(
    attrs: AttributeSet,
    rules: Union[ModuleRules, Iterable[AttributeRule]],
    path: str = "",
    source: Optional[Path] = None,
) -> ValidationReport:
    """Check *attrs* against *rules* in rule order.

    Items of sequences that pass their own check are checked against the
    nested rules of the sequence, each with a validator of its own, and
    reported as children of the returned report.
    """
    attribute_rules = rules.attributes if isinstance(rules, ModuleRules) else tuple(rules)
    validator = AttributesValidator(attrs)
    children = []

    for rule in attribute_rules:
        result = check_rule(validator, rule)
        if not result.ok:
            logger.debug(f"{path or '/'}: {rule.label} -> {result.outcome.value}")
            continue
        if rule.sequence and rule.items and result.value is not None:
            for idx, item in enumerate(result.value):
                item_path = f"{path}/{to_string(rule.tag)}[{idx}]" if path else f"{to_string(rule.tag)}[{idx}]"
                children.append(check_attributes(item, rule.items, path=item_path))

    report = ValidationReport.from_validator(validator, path=path, source=source)
    for child in children:
        report.add_child(child)
    return report
