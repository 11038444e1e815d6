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

"""Read and write attribute sets in the DICOM JSON model (PS3.18 Annex F).

Records are parsed with PyYAML's safe loader, which accepts JSON documents
as well as the same structure written in YAML.
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..exceptions import RecordFormatError, TagFormatError
from .attributes import AttributeSet, Sequence
from .tag_utils import parse_tag, to_hex_string

logger = logging.getLogger(__name__)

_PN_GROUPS = ("Alphabetic", "Ideographic", "Phonetic")


def _person_name(value: Any) -> str:
    if isinstance(value, dict):
        groups = [str(value.get(key) or "") for key in _PN_GROUPS]
        while groups and not groups[-1]:
            groups.pop()
        return "=".join(groups)
    return "" if value is None else str(value)


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        # JSON booleans are not part of the model; keep their literal text
        return "true" if value else "false"
    return str(value)


def attributes_from_dicom_json(data: Dict[str, Any], path: str = "") -> AttributeSet:
    """Build an attribute set from a DICOM JSON model object.

    Args:
        data: Mapping of ``GGGGEEEE`` keys to element objects
        path: Location used in error messages

    Raises:
        RecordFormatError: If the document does not follow the model.
    """
    if not isinstance(data, dict):
        raise RecordFormatError(f"Expected an object at '{path or '/'}', got {type(data).__name__}")

    attrs = AttributeSet()
    for key, element in data.items():
        element_path = f"{path}/{key}"
        try:
            tag = parse_tag(str(key))
        except TagFormatError as exc:
            raise RecordFormatError(f"Invalid element key at '{element_path}': {exc}") from exc

        if not isinstance(element, dict):
            raise RecordFormatError(f"Element at '{element_path}' must be an object")

        vr = element.get("vr")
        if "BulkDataURI" in element:
            raise RecordFormatError(f"BulkDataURI values are not supported ('{element_path}')")

        if "InlineBinary" in element:
            try:
                attrs.set_value(tag, base64.b64decode(element["InlineBinary"], validate=True), vr=vr)
            except (binascii.Error, TypeError, ValueError) as exc:
                raise RecordFormatError(f"Invalid InlineBinary at '{element_path}': {exc}") from exc
            continue

        values = element.get("Value")
        if values is None:
            # present, empty
            if vr == "SQ":
                attrs.new_sequence(tag)
            else:
                attrs.set_value(tag, (), vr=vr)
            continue

        if not isinstance(values, list):
            raise RecordFormatError(f"'Value' at '{element_path}' must be an array")

        if vr == "SQ":
            seq = attrs.new_sequence(tag)
            for idx, item in enumerate(values):
                seq.append(attributes_from_dicom_json(item, f"{element_path}/Value/{idx}"))
        elif vr == "PN":
            attrs.set_value(tag, [_person_name(v) for v in values], vr=vr)
        else:
            attrs.set_value(tag, [_scalar(v) for v in values], vr=vr)

    return attrs


def attributes_to_dicom_json(attrs: AttributeSet) -> Dict[str, Any]:
    """Dump an attribute set as a DICOM JSON model object."""
    output: Dict[str, Any] = {}
    for tag in attrs.tags():
        value = attrs.get_value(tag)
        vr = attrs.get_vr(tag)
        element: Dict[str, Any] = {}
        if vr is not None:
            element["vr"] = vr

        if isinstance(value, Sequence):
            element.setdefault("vr", "SQ")
            if len(value) > 0:
                element["Value"] = [attributes_to_dicom_json(item) for item in value]
        elif isinstance(value, bytes):
            element["InlineBinary"] = base64.b64encode(value).decode("ascii")
        elif value:
            if vr == "PN":
                element["Value"] = [
                    {key: group for key, group in zip(_PN_GROUPS, v.split("=")) if group}
                    for v in value
                ]
            else:
                element["Value"] = list(value)

        output[to_hex_string(tag)] = element
    return output


def load_record(file_path: Union[str, Path]) -> AttributeSet:
    """Load a DICOM JSON (or YAML) record file into an attribute set.

    Raises:
        RecordFormatError: If the file is missing or malformed.
    """
    path = Path(file_path)
    if not path.is_file():
        raise RecordFormatError(f"Record file not found: {path}")

    logger.debug(f"Loading record: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordFormatError(f"Failed to read record {path}: {exc}") from exc

    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RecordFormatError(f"Failed to parse record {path}: {exc}") from exc

    # A single-instance array, as returned by QIDO/WADO metadata requests
    if isinstance(content, list) and len(content) == 1:
        content = content[0]

    if not isinstance(content, dict):
        raise RecordFormatError(f"Record {path} must contain a DICOM JSON object")

    return attributes_from_dicom_json(content)
