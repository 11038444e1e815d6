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

"""Type 1/2/3 conformance checks of a single attribute set.

The validator never raises on a non-conformant record. Each check classifies
one attribute, records at most one violation and returns the value the caller
asked for, so that a whole module can be checked in one pass and inspected
afterwards.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..data.attributes import AttributeSet, Sequence
from ..data.tag_utils import to_string
from ..exceptions import NullInputError
from .check_result import AttributeType, CheckOutcome, CheckResult

logger = logging.getLogger(__name__)


class AttributesValidator:
    """Validator for one attribute set, accumulating every violation found.

    One instance corresponds to one validation pass; accumulators only grow.
    Not safe for concurrent use.
    """

    def __init__(self, attrs: AttributeSet):
        if attrs is None:
            raise NullInputError("AttributesValidator requires an attribute set")
        self._attrs = attrs
        self._missing_attributes: List[int] = []
        self._missing_attribute_values = AttributeSet()
        self._invalid_attribute_values = AttributeSet()
        self._error_comment: Optional[str] = None

    @property
    def attributes(self) -> AttributeSet:
        return self._attrs

    # ---- classification -----------------------------------------------------

    def classify_string(
        self,
        tag: int,
        attribute_type: AttributeType,
        index: int = 0,
        maxvm: int = 1,
        default: Optional[str] = None,
        enumvals: Iterable[str] = (),
    ) -> CheckResult:
        """Classify a string valued attribute without recording anything.

        Priority: absent, then value missing at *index*, then multiplicity
        above *maxvm*, then enumeration. The enumeration is only consulted
        when the multiplicity is within range. Type 1 ignores *default*.
        """
        attribute_type = AttributeType(attribute_type)
        values = self._attrs.get_strings(tag)

        if values is None:
            if attribute_type is AttributeType.TYPE_3:
                return CheckResult(tag, CheckOutcome.OK, default)
            if attribute_type is AttributeType.TYPE_1:
                return CheckResult(tag, CheckOutcome.MISSING_ATTRIBUTE)
            return CheckResult(tag, CheckOutcome.MISSING_ATTRIBUTE, default)

        if len(values) <= index:
            if attribute_type is AttributeType.TYPE_1:
                return CheckResult(tag, CheckOutcome.MISSING_ATTRIBUTE_VALUE)
            return CheckResult(tag, CheckOutcome.OK, default)

        value = values[index]
        if len(values) > maxvm:
            return CheckResult(tag, CheckOutcome.INVALID_ATTRIBUTE_VALUE, value)

        enumvals = tuple(enumvals)
        if enumvals and value not in enumvals:
            # the non-conforming value is still handed back to the caller
            return CheckResult(tag, CheckOutcome.INVALID_ATTRIBUTE_VALUE, value)

        return CheckResult(tag, CheckOutcome.OK, value)

    def classify_sequence(
        self,
        tag: int,
        attribute_type: AttributeType,
        max_size: int,
    ) -> CheckResult:
        """Classify a sequence attribute without recording anything.

        The minimum number of items is implied by the type: 1 for Type 1,
        0 for Type 2 and none for Type 3.
        """
        min_size = AttributeType(attribute_type).min_sequence_size
        value = self._attrs.get_value(tag)

        if value is None:
            if min_size >= 0:
                return CheckResult(tag, CheckOutcome.MISSING_ATTRIBUTE)
            return CheckResult(tag, CheckOutcome.OK)

        if AttributeSet.is_empty_value(value):
            if min_size >= 0:
                return CheckResult(tag, CheckOutcome.MISSING_ATTRIBUTE_VALUE)
            return CheckResult(tag, CheckOutcome.OK)

        if isinstance(value, Sequence) and min_size <= len(value) <= max_size:
            return CheckResult(tag, CheckOutcome.OK, value)

        return CheckResult(tag, CheckOutcome.INVALID_ATTRIBUTE_VALUE)

    def check_string(
        self,
        tag: int,
        attribute_type: AttributeType,
        index: int = 0,
        maxvm: int = 1,
        default: Optional[str] = None,
        enumvals: Iterable[str] = (),
    ) -> CheckResult:
        """Classify a string valued attribute and record its violation, if any."""
        return self._record(self.classify_string(tag, attribute_type, index, maxvm, default, enumvals))

    def check_sequence(self, tag: int, attribute_type: AttributeType, max_size: int) -> CheckResult:
        """Classify a sequence attribute and record its violation, if any."""
        return self._record(self.classify_sequence(tag, attribute_type, max_size))

    def _record(self, result: CheckResult) -> CheckResult:
        if result.outcome is CheckOutcome.MISSING_ATTRIBUTE:
            self.record_missing_attribute(result.tag)
        elif result.outcome is CheckOutcome.MISSING_ATTRIBUTE_VALUE:
            self.record_missing_attribute_value(result.tag)
        elif result.outcome is CheckOutcome.INVALID_ATTRIBUTE_VALUE:
            self.record_invalid_attribute_value(result.tag)
        return result

    # ---- typed getters ------------------------------------------------------

    def get_type1_string(self, tag: int, index: int, maxvm: int, *enumvals: str) -> Optional[str]:
        return self.check_string(tag, AttributeType.TYPE_1, index, maxvm, None, enumvals).value

    def get_type2_string(
        self, tag: int, index: int, maxvm: int, default: Optional[str], *enumvals: str
    ) -> Optional[str]:
        return self.check_string(tag, AttributeType.TYPE_2, index, maxvm, default, enumvals).value

    def get_type3_string(
        self, tag: int, index: int, maxvm: int, default: Optional[str], *enumvals: str
    ) -> Optional[str]:
        return self.check_string(tag, AttributeType.TYPE_3, index, maxvm, default, enumvals).value

    def get_type1_sequence(self, tag: int, max_size: int) -> Optional[Sequence]:
        return self.check_sequence(tag, AttributeType.TYPE_1, max_size).value

    def get_type2_sequence(self, tag: int, max_size: int) -> Optional[Sequence]:
        return self.check_sequence(tag, AttributeType.TYPE_2, max_size).value

    def get_type3_sequence(self, tag: int, max_size: int) -> Optional[Sequence]:
        return self.check_sequence(tag, AttributeType.TYPE_3, max_size).value

    # ---- accumulation -------------------------------------------------------

    def record_missing_attribute(self, tag: int) -> None:
        self._missing_attributes.append(tag)
        self.set_error_comment("Missing Attribute ", tag)

    def record_missing_attribute_value(self, tag: int) -> None:
        self._missing_attribute_values.add_selected(self._attrs, None, tag)
        self.set_error_comment("Missing Attribute Value of ", tag)

    def record_invalid_attribute_value(self, tag: int) -> None:
        self._invalid_attribute_values.add_selected(self._attrs, None, tag)
        self.set_error_comment("Invalid Attribute Value of ", tag)

    def set_error_comment(self, prefix: str, tag: int) -> None:
        self._error_comment = prefix + to_string(tag)
        logger.debug(self._error_comment)

    # ---- reporting ----------------------------------------------------------

    @property
    def missing_attributes(self) -> Tuple[int, ...]:
        return tuple(self._missing_attributes)

    @property
    def missing_attribute_values(self) -> AttributeSet:
        return self._missing_attribute_values

    @property
    def invalid_attribute_values(self) -> AttributeSet:
        return self._invalid_attribute_values

    @property
    def error_comment(self) -> Optional[str]:
        """Description of the most recent violation, None if there was none."""
        return self._error_comment

    def get_error_comment(self) -> Optional[str]:
        return self._error_comment

    def has_missing_attributes(self) -> bool:
        return len(self._missing_attributes) > 0

    def has_missing_attribute_values(self) -> bool:
        return not self._missing_attribute_values.is_empty()

    def has_invalid_attribute_values(self) -> bool:
        return not self._invalid_attribute_values.is_empty()

    def has_offending_elements(self) -> bool:
        return (
            self.has_missing_attributes()
            or self.has_missing_attribute_values()
            or self.has_invalid_attribute_values()
        )

    def get_offending_elements(self) -> List[int]:
        """Tags of all recorded violations.

        Missing attributes in recorded order, then the tags of the missing
        and of the invalid value accumulators in tag order.
        """
        return (
            list(self._missing_attributes)
            + self._missing_attribute_values.tags()
            + self._invalid_attribute_values.tags()
        )
