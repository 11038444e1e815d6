"""Tests for the Type 1/2/3 attribute checks and their accumulators."""

import pytest

from dicom_attribute_validator.data.attributes import AttributeSet, Sequence
from dicom_attribute_validator.data.tag_utils import Tag
from dicom_attribute_validator.exceptions import AttributeValidatorError, NullInputError
from dicom_attribute_validator.validation.attributes_validator import AttributesValidator
from dicom_attribute_validator.validation.check_result import AttributeType, CheckOutcome


def _counts(validator):
    return (
        len(validator.missing_attributes),
        validator.missing_attribute_values.size(),
        validator.invalid_attribute_values.size(),
    )


class TestConstruction:
    def test_rejects_missing_attribute_set(self):
        with pytest.raises(NullInputError):
            AttributesValidator(None)

    def test_null_input_is_library_and_type_error(self):
        with pytest.raises(AttributeValidatorError):
            AttributesValidator(None)
        with pytest.raises(TypeError):
            AttributesValidator(None)

    def test_accepts_empty_attribute_set(self):
        attrs = AttributeSet()
        validator = AttributesValidator(attrs)
        assert validator.attributes is attrs
        assert not validator.has_offending_elements()
        assert validator.get_offending_elements() == []
        assert validator.error_comment is None
        assert validator.get_error_comment() is None


class TestType1String:
    def test_absent_records_missing_attribute(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type1_string(Tag.PatientName, 0, 1) is None
        assert validator.missing_attributes == (Tag.PatientName,)
        assert _counts(validator) == (1, 0, 0)
        assert validator.error_comment == "Missing Attribute (0010,0010)"

    def test_empty_value_records_missing_value(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.PatientID, vr="LO")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.PatientID, 0, 1) is None
        assert _counts(validator) == (0, 1, 0)
        assert validator.missing_attribute_values.contains(Tag.PatientID)
        assert validator.error_comment == "Missing Attribute Value of (0010,0020)"

    def test_index_beyond_values_records_missing_value(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.ImageType, "ORIGINAL")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.ImageType, 1, 4) is None
        assert validator.missing_attribute_values.get_strings(Tag.ImageType) == ("ORIGINAL",)

    def test_value_within_multiplicity_is_returned(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.ImageType, "ORIGINAL", "PRIMARY")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.ImageType, 1, 2) == "PRIMARY"
        assert not validator.has_offending_elements()

    def test_multiplicity_exceeded_records_invalid_and_returns_value(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "CT", "MR")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.Modality, 0, 1) == "CT"
        assert _counts(validator) == (0, 0, 1)
        assert validator.error_comment == "Invalid Attribute Value of (0008,0060)"

    def test_enumeration_mismatch_returns_actual_value(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "XX")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.Modality, 0, 1, "CT", "MR") == "XX"
        assert validator.has_invalid_attribute_values()
        assert validator.invalid_attribute_values.get_strings(Tag.Modality) == ("XX",)

    def test_enumeration_match_records_nothing(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "MR")
        validator = AttributesValidator(attrs)
        assert validator.get_type1_string(Tag.Modality, 0, 1, "CT", "MR") == "MR"
        assert not validator.has_offending_elements()

    def test_enumeration_skipped_when_multiplicity_exceeded(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "XX", "YY")
        validator = AttributesValidator(attrs)
        result = validator.check_string(Tag.Modality, AttributeType.TYPE_1, 0, 1, None, ("CT",))
        assert result.outcome is CheckOutcome.INVALID_ATTRIBUTE_VALUE
        assert result.value == "XX"
        # a single invalid entry, not one per failed rule
        assert _counts(validator) == (0, 0, 1)


class TestType2String:
    def test_absent_records_missing_attribute_and_returns_default(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type2_string(Tag.StudyDate, 0, 1, "19700101") == "19700101"
        assert validator.missing_attributes == (Tag.StudyDate,)

    def test_empty_value_returns_default_without_violation(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.AccessionNumber)
        validator = AttributesValidator(attrs)
        assert validator.get_type2_string(Tag.AccessionNumber, 0, 1, "none") == "none"
        assert not validator.has_offending_elements()
        assert validator.error_comment is None

    def test_multiplicity_exceeded(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.StudyDate, "20240101", "20240102")
        validator = AttributesValidator(attrs)
        assert validator.get_type2_string(Tag.StudyDate, 0, 1, None) == "20240101"
        assert validator.has_invalid_attribute_values()

    def test_enumeration_mismatch(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.PatientSex, "X")
        validator = AttributesValidator(attrs)
        assert validator.get_type2_string(Tag.PatientSex, 0, 1, None, "M", "F", "O") == "X"
        assert validator.get_offending_elements() == [Tag.PatientSex]


class TestType3String:
    def test_absent_returns_default_without_violation(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type3_string(Tag.StudyID, 0, 1, "1") == "1"
        assert not validator.has_offending_elements()

    def test_empty_value_returns_default_without_violation(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.StudyID)
        validator = AttributesValidator(attrs)
        assert validator.get_type3_string(Tag.StudyID, 0, 1, None) is None
        assert not validator.has_offending_elements()

    def test_multiplicity_exceeded(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.StudyID, "1", "2")
        validator = AttributesValidator(attrs)
        assert validator.get_type3_string(Tag.StudyID, 1, 1, None) == "2"
        assert validator.invalid_attribute_values.tags() == [Tag.StudyID]

    def test_opaque_value_is_read_as_strings(self):
        attrs = AttributeSet()
        attrs.set_value(Tag.PatientSex, b"M ")
        validator = AttributesValidator(attrs)
        assert validator.get_type3_string(Tag.PatientSex, 0, 1, None, "M", "F") == "M"
        assert not validator.has_offending_elements()


class TestSequences:
    def _with_items(self, count):
        attrs = AttributeSet()
        seq = attrs.new_sequence(Tag.ReferencedSOPSequence)
        for _ in range(count):
            seq.new_item().set_strings(Tag.ReferencedSOPInstanceUID, "1.2.3")
        return attrs

    def test_type1_absent_records_missing_attribute(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type1_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert validator.missing_attributes == (Tag.ReferencedSOPSequence,)

    def test_type1_empty_records_missing_value(self):
        validator = AttributesValidator(self._with_items(0))
        assert validator.get_type1_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert _counts(validator) == (0, 1, 0)
        assert validator.missing_attribute_values.get_value(Tag.ReferencedSOPSequence) == Sequence()

    def test_type1_in_range_returns_sequence(self):
        attrs = self._with_items(2)
        validator = AttributesValidator(attrs)
        seq = validator.get_type1_sequence(Tag.ReferencedSOPSequence, 2)
        assert seq is attrs.get_value(Tag.ReferencedSOPSequence)
        assert len(seq) == 2
        assert not validator.has_offending_elements()

    def test_type2_absent_records_missing_attribute(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type2_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert validator.has_missing_attributes()

    def test_type2_empty_records_missing_value(self):
        validator = AttributesValidator(self._with_items(0))
        assert validator.get_type2_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert validator.has_missing_attribute_values()

    def test_type3_absent_records_nothing(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.get_type3_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert not validator.has_offending_elements()

    def test_type3_empty_records_nothing(self):
        validator = AttributesValidator(self._with_items(0))
        assert validator.get_type3_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert not validator.has_offending_elements()

    @pytest.mark.parametrize("getter", ["get_type1_sequence", "get_type2_sequence", "get_type3_sequence"])
    def test_too_many_items_is_invalid_for_every_type(self, getter):
        validator = AttributesValidator(self._with_items(3))
        assert getattr(validator, getter)(Tag.ReferencedSOPSequence, 2) is None
        assert validator.invalid_attribute_values.tags() == [Tag.ReferencedSOPSequence]
        assert len(validator.invalid_attribute_values.get_value(Tag.ReferencedSOPSequence)) == 3

    def test_non_sequence_value_is_invalid(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.ReferencedSOPSequence, "not a sequence")
        validator = AttributesValidator(attrs)
        assert validator.get_type3_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert validator.has_invalid_attribute_values()

    def test_empty_non_sequence_value_is_missing_value(self):
        attrs = AttributeSet()
        attrs.set_value(Tag.ReferencedSOPSequence, b"")
        validator = AttributesValidator(attrs)
        assert validator.get_type2_sequence(Tag.ReferencedSOPSequence, 1) is None
        assert validator.has_missing_attribute_values()
        assert not validator.has_invalid_attribute_values()


class TestClassification:
    def test_classify_does_not_record(self):
        validator = AttributesValidator(AttributeSet())
        result = validator.classify_string(Tag.PatientName, AttributeType.TYPE_1)
        assert result.outcome is CheckOutcome.MISSING_ATTRIBUTE
        assert not result.ok
        assert not validator.has_offending_elements()

        result = validator.classify_sequence(Tag.ReferencedSOPSequence, AttributeType.TYPE_2, 1)
        assert result.outcome is CheckOutcome.MISSING_ATTRIBUTE
        assert validator.error_comment is None

    def test_plain_int_type_is_accepted(self):
        validator = AttributesValidator(AttributeSet())
        assert validator.check_string(Tag.PatientName, 3, default="x").value == "x"

    def test_type1_ignores_default(self):
        validator = AttributesValidator(AttributeSet())
        result = validator.check_string(Tag.PatientName, AttributeType.TYPE_1, default="ignored")
        assert result.value is None

    def test_at_most_one_violation_per_check(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "XX", "YY")
        attrs.set_strings(Tag.PatientID)
        validator = AttributesValidator(attrs)
        checks = [
            (Tag.PatientName, AttributeType.TYPE_1),
            (Tag.PatientID, AttributeType.TYPE_1),
            (Tag.Modality, AttributeType.TYPE_1),
        ]
        for expected_total, (tag, attribute_type) in enumerate(checks, start=1):
            validator.check_string(tag, attribute_type, 0, 1, None, ("CT",))
            assert sum(_counts(validator)) == expected_total


class TestAccumulation:
    def test_record_primitives_and_comments(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.PatientID, "123")
        validator = AttributesValidator(attrs)

        validator.record_missing_attribute(Tag.PatientName)
        assert validator.error_comment == "Missing Attribute (0010,0010)"
        validator.record_invalid_attribute_value(Tag.PatientID)
        assert validator.error_comment == "Invalid Attribute Value of (0010,0020)"
        validator.record_missing_attribute_value(Tag.PatientID)
        assert validator.error_comment == "Missing Attribute Value of (0010,0020)"

        assert validator.get_offending_elements() == [Tag.PatientName, Tag.PatientID, Tag.PatientID]

    def test_set_error_comment(self):
        validator = AttributesValidator(AttributeSet())
        validator.set_error_comment("Unexpected ", Tag.PixelData)
        assert validator.get_error_comment() == "Unexpected (7FE0,0010)"
        assert not validator.has_offending_elements()

    def test_missing_attributes_keep_duplicates(self):
        validator = AttributesValidator(AttributeSet())
        validator.get_type1_string(Tag.PatientName, 0, 1)
        validator.get_type2_string(Tag.PatientName, 0, 1, None)
        assert validator.missing_attributes == (Tag.PatientName, Tag.PatientName)
        assert validator.get_offending_elements() == [Tag.PatientName, Tag.PatientName]

    def test_value_accumulators_keep_one_entry_per_tag(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "XX")
        validator = AttributesValidator(attrs)
        validator.get_type1_string(Tag.Modality, 0, 1, "CT")
        validator.get_type3_string(Tag.Modality, 0, 1, None, "MR")
        assert validator.invalid_attribute_values.tags() == [Tag.Modality]

    def test_recording_value_of_absent_tag_only_sets_comment(self):
        validator = AttributesValidator(AttributeSet())
        validator.record_invalid_attribute_value(Tag.Modality)
        assert not validator.has_invalid_attribute_values()
        assert validator.error_comment == "Invalid Attribute Value of (0008,0060)"

    def test_error_comment_is_most_recent_violation(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "CT", "MR")
        validator = AttributesValidator(attrs)
        validator.get_type1_string(Tag.PatientName, 0, 1)
        validator.get_type1_string(Tag.Modality, 0, 1)
        validator.get_type3_string(Tag.StudyID, 0, 1, None)
        assert validator.error_comment == "Invalid Attribute Value of (0008,0060)"

    def test_wrapped_set_is_not_modified(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.Modality, "CT", "MR")
        snapshot = attrs.copy()
        validator = AttributesValidator(attrs)
        validator.get_type1_string(Tag.Modality, 0, 1)
        validator.get_type1_string(Tag.PatientName, 0, 1)
        assert attrs == snapshot

    def test_offending_elements_length_matches_accumulators(self, study_attrs):
        validator = AttributesValidator(study_attrs)
        validator.get_type1_string(Tag.PatientName, 0, 1)
        validator.get_type1_string(Tag.AccessionNumber, 0, 1)
        validator.get_type1_string(Tag.ImageType, 0, 2)
        validator.get_type2_string(Tag.PatientID, 0, 1, None)
        validator.get_type1_sequence(Tag.ReferencedStudySequence, 0)
        expected = sum(_counts(validator))
        assert len(validator.get_offending_elements()) == expected == 5

    def test_offending_elements_order(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.StudyID, "1", "2")
        attrs.set_strings(Tag.AccessionNumber)
        validator = AttributesValidator(attrs)
        validator.get_type3_string(Tag.StudyID, 0, 1, None)
        validator.get_type1_string(Tag.AccessionNumber, 0, 1)
        validator.get_type1_string(Tag.PatientName, 0, 1)
        validator.get_type1_string(Tag.Modality, 0, 1)
        assert validator.get_offending_elements() == [
            Tag.PatientName,
            Tag.Modality,
            Tag.AccessionNumber,
            Tag.StudyID,
        ]

    def test_predicates(self):
        attrs = AttributeSet()
        attrs.set_strings(Tag.PatientID)
        validator = AttributesValidator(attrs)
        validator.get_type1_string(Tag.PatientID, 0, 1)
        assert validator.has_missing_attribute_values()
        assert not validator.has_missing_attributes()
        assert not validator.has_invalid_attribute_values()
        assert validator.has_offending_elements()


def test_modality_scenario():
    attrs = AttributeSet()
    attrs.set_strings(Tag.Modality, "CT", "MR", vr="CS")
    validator = AttributesValidator(attrs)

    assert validator.get_type1_string(Tag.PatientName, 0, 1) is None
    assert validator.get_type1_string(Tag.Modality, 0, 1, "CT", "MR", "CR") == "CT"

    assert validator.has_offending_elements()
    assert validator.missing_attributes == (Tag.PatientName,)
    assert validator.invalid_attribute_values.tags() == [Tag.Modality]
    assert validator.get_offending_elements() == [Tag.PatientName, Tag.Modality]
