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

"""Tag helpers.

A tag packs the 16-bit group and element numbers of a data element into one
32-bit integer, e.g. ``0x00100010`` for Patient's Name. Its display form is
``(0010,0010)``.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Union

from ..exceptions import TagFormatError


_TAG_RE = re.compile(
    r"^(?:\(\s*([0-9A-Fa-f]{4})\s*,\s*([0-9A-Fa-f]{4})\s*\)"
    r"|([0-9A-Fa-f]{4}),([0-9A-Fa-f]{4})"
    r"|(?:0[xX])?([0-9A-Fa-f]{8}))$"
)

_MAX_TAG = 0xFFFFFFFF


class Tag:
    """Keywords of commonly checked attributes."""

    SpecificCharacterSet = 0x00080005
    ImageType = 0x00080008
    SOPClassUID = 0x00080016
    SOPInstanceUID = 0x00080018
    StudyDate = 0x00080020
    StudyTime = 0x00080030
    AccessionNumber = 0x00080050
    Modality = 0x00080060
    ReferringPhysicianName = 0x00080090
    ReferencedStudySequence = 0x00081110
    ReferencedSeriesSequence = 0x00081115
    ReferencedSOPClassUID = 0x00081150
    ReferencedSOPInstanceUID = 0x00081155
    ReferencedSOPSequence = 0x00081199
    PatientName = 0x00100010
    PatientID = 0x00100020
    IssuerOfPatientID = 0x00100021
    PatientBirthDate = 0x00100030
    PatientSex = 0x00100040
    OtherPatientIDsSequence = 0x00101002
    StudyInstanceUID = 0x0020000D
    SeriesInstanceUID = 0x0020000E
    StudyID = 0x00200010
    SeriesNumber = 0x00200011
    InstanceNumber = 0x00200013
    PatientOrientation = 0x00200020
    Rows = 0x00280010
    Columns = 0x00280011
    ScheduledProcedureStepID = 0x00400009
    RequestAttributesSequence = 0x00400275
    RequestedProcedureID = 0x00401001
    PixelData = 0x7FE00010


_KEYWORDS: Dict[str, int] = {
    name: value for name, value in vars(Tag).items()
    if not name.startswith("_") and isinstance(value, int)
}
_TAGS_BY_VALUE: Dict[int, str] = {value: name for name, value in _KEYWORDS.items()}


def group(tag: int) -> int:
    return (tag >> 16) & 0xFFFF


def element(tag: int) -> int:
    return tag & 0xFFFF


def to_string(tag: int) -> str:
    """Return the display form ``(GGGG,EEEE)`` of *tag*."""
    return f"({group(tag):04X},{element(tag):04X})"


def to_hex_string(tag: int) -> str:
    """Return the ``GGGGEEEE`` form used as key by the DICOM JSON model."""
    return f"{tag & _MAX_TAG:08X}"


def keyword_of(tag: int) -> Optional[str]:
    return _TAGS_BY_VALUE.get(tag)


def parse_tag(value: Union[int, str]) -> int:
    """Parse a tag given as int, ``(gggg,eeee)``, ``gggg,eeee``, ``ggggeeee``,
    ``0xggggeeee`` or a known keyword.

    Raises:
        TagFormatError: If *value* is not a valid tag.
    """
    if isinstance(value, bool):
        raise TagFormatError(f"Tag must be an int or a string, got bool: {value!r}")

    if isinstance(value, int):
        if value < 0 or value > _MAX_TAG:
            raise TagFormatError(f"Tag out of 32-bit range: {value:#x}")
        return value

    if not isinstance(value, str):
        raise TagFormatError(
            f"Tag must be an int or a string, got {type(value).__name__}: {value!r}"
        )

    text = value.strip()
    if text in _KEYWORDS:
        return _KEYWORDS[text]

    m = _TAG_RE.match(text)
    if m is None:
        raise TagFormatError(
            f"Invalid tag: '{value}'. Expected a keyword, '(gggg,eeee)' or 'ggggeeee'."
        )
    if m.group(1) is not None:
        return int(m.group(1) + m.group(2), 16)
    if m.group(3) is not None:
        return int(m.group(3) + m.group(4), 16)
    return int(m.group(5), 16)
