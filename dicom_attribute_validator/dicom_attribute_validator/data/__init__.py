"""Attribute sets, tags and record loading."""

from .attributes import AttributeSet, Sequence
from .dicom_json import attributes_from_dicom_json, attributes_to_dicom_json, load_record
from .tag_utils import Tag, keyword_of, parse_tag, to_hex_string, to_string
