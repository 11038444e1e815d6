"""Attribute conformance validation and reporting."""

from .attributes_validator import AttributesValidator
from .check_result import AttributeType, CheckOutcome, CheckResult
from .report import ValidationReport
