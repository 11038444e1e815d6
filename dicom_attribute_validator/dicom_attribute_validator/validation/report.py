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

"""Discrepancy reports built from validator state."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..data.dicom_json import attributes_to_dicom_json
from ..data.tag_utils import to_string
from .attributes_validator import AttributesValidator


class ValidationReport:
    """Container for the validation result of one record or sequence item."""

    def __init__(self, path: str = "", source: Optional[Path] = None):
        """Initialize validation report.

        Args:
            path: Location of the checked item inside the record, "" for the record itself
            source: Optional file the record was read from
        """
        self.path = path
        self.source = source
        self.missing_attributes: List[str] = []
        self.missing_attribute_values: Dict[str, Any] = {}
        self.invalid_attribute_values: Dict[str, Any] = {}
        self.offending_elements: List[str] = []
        self.error_comment: Optional[str] = None
        self.errors: List[str] = []
        self.children: List["ValidationReport"] = []

    @classmethod
    def from_validator(
        cls,
        validator: AttributesValidator,
        path: str = "",
        source: Optional[Path] = None,
    ) -> "ValidationReport":
        """Snapshot the accumulators of *validator*."""
        report = cls(path=path, source=source)
        report.missing_attributes = [to_string(tag) for tag in validator.missing_attributes]
        report.missing_attribute_values = attributes_to_dicom_json(validator.missing_attribute_values)
        report.invalid_attribute_values = attributes_to_dicom_json(validator.invalid_attribute_values)
        report.offending_elements = [to_string(tag) for tag in validator.get_offending_elements()]
        report.error_comment = validator.error_comment
        return report

    def add_error(self, message: str):
        """Add an error that is not tied to a single attribute.

        Args:
            message: Error message
        """
        self.errors.append(message)

    def add_child(self, report: "ValidationReport"):
        self.children.append(report)

    @property
    def offending_count(self) -> int:
        return len(self.offending_elements) + sum(child.offending_count for child in self.children)

    @property
    def ok(self) -> bool:
        return (
            not self.offending_elements
            and not self.errors
            and all(child.ok for child in self.children)
        )

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {
            "path": self.path,
            "ok": self.ok,
            "missing_attributes": list(self.missing_attributes),
            "missing_attribute_values": self.missing_attribute_values,
            "invalid_attribute_values": self.invalid_attribute_values,
            "offending_elements": list(self.offending_elements),
            "error_comment": self.error_comment,
            "errors": list(self.errors),
            "children": [child.to_dict() for child in self.children],
        }
        if self.source is not None:
            output["source"] = str(self.source)
        return output

    def summary(self, indent: str = "") -> str:
        lines = []
        label = self.path or (str(self.source) if self.source is not None else "record")
        if self.ok:
            lines.append(f"{indent}{label}: OK")
            return "\n".join(lines)

        lines.append(f"{indent}{label}:")
        for message in self.errors:
            lines.append(f"{indent}  ERROR: {message}")
        for tag in self.missing_attributes:
            lines.append(f"{indent}  Missing Attribute {tag}")
        for key in self.missing_attribute_values:
            lines.append(f"{indent}  Missing Attribute Value of ({key[:4]},{key[4:]})")
        for key in self.invalid_attribute_values:
            lines.append(f"{indent}  Invalid Attribute Value of ({key[:4]},{key[4:]})")
        for child in self.children:
            if not child.ok:
                lines.append(child.summary(indent + "  "))
        return "\n".join(lines)
