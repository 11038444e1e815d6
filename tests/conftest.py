"""Shared fixtures for the attribute validator tests."""

import pytest

from dicom_attribute_validator.data.attributes import AttributeSet
from dicom_attribute_validator.data.tag_utils import Tag


@pytest.fixture
def study_attrs():
    """A small General Study record with one referenced study item."""
    attrs = AttributeSet()
    attrs.set_strings(Tag.StudyInstanceUID, "1.2.840.10008.1", vr="UI")
    attrs.set_strings(Tag.StudyDate, "20240131", vr="DA")
    attrs.set_strings(Tag.AccessionNumber, vr="SH")
    attrs.set_strings(Tag.Modality, "CT", vr="CS")
    attrs.set_strings(Tag.ImageType, "ORIGINAL", "PRIMARY", "AXIAL", vr="CS")
    seq = attrs.new_sequence(Tag.ReferencedStudySequence)
    item = seq.new_item()
    item.set_strings(Tag.ReferencedSOPClassUID, "1.2.840.10008.3.1.2.3.1", vr="UI")
    item.set_strings(Tag.ReferencedSOPInstanceUID, "1.2.3.4", vr="UI")
    return attrs


RULES_YAML = """\
format_version: 1.0.0
name: General Study
attributes:
  - tag: StudyInstanceUID
    type: 1
  - tag: "(0008,0020)"
    name: Study Date
    type: 2
  - tag: Modality
    type: 1
    enum: [CT, MR, CR]
  - tag: ReferencedStudySequence
    type: 3
    sequence: true
    max_items: n
    items:
      - tag: ReferencedSOPClassUID
        type: 1
      - tag: ReferencedSOPInstanceUID
        type: 1
"""


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "general_study.yaml"
    path.write_text(RULES_YAML, encoding="utf-8")
    return path
