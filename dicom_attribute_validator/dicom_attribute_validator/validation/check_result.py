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

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Union

from ..exceptions import RuleFormatError


class AttributeType(IntEnum):
    """Presence requirement of an attribute.

    * Type 1: must be present with a value.
    * Type 2: must be present, the value may be empty.
    * Type 3: may be absent.
    """

    TYPE_1 = 1
    TYPE_2 = 2
    TYPE_3 = 3

    @property
    def min_sequence_size(self) -> int:
        # -1: no minimum, absence is not a violation
        return {AttributeType.TYPE_1: 1, AttributeType.TYPE_2: 0, AttributeType.TYPE_3: -1}[self]

    @classmethod
    def from_value(cls, value: Union[int, str]) -> "AttributeType":
        if isinstance(value, bool):
            raise RuleFormatError(f"Invalid attribute type: {value!r}. Expected 1, 2 or 3.")
        try:
            return cls(int(value))
        except (TypeError, ValueError) as exc:
            raise RuleFormatError(f"Invalid attribute type: {value!r}. Expected 1, 2 or 3.") from exc


class CheckOutcome(Enum):
    OK = "ok"
    MISSING_ATTRIBUTE = "missing_attribute"
    MISSING_ATTRIBUTE_VALUE = "missing_attribute_value"
    INVALID_ATTRIBUTE_VALUE = "invalid_attribute_value"


@dataclass(frozen=True)
class CheckResult:
    """Classification of one attribute check.

    ``value`` is what the corresponding getter returns: the retrieved string
    or sequence, the caller's default, or None.
    """

    tag: int
    outcome: CheckOutcome
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.outcome is CheckOutcome.OK
