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

"""Custom exceptions for the DICOM attribute validator.

Rule violations found in a record are never raised; they are accumulated by
the validator. The exceptions below cover programming errors and malformed
input documents only.
"""


class AttributeValidatorError(Exception):
    """Base exception for attribute-validator related errors."""
    pass


class NullInputError(AttributeValidatorError, TypeError):
    """Exception raised when a validator is constructed without an attribute set."""
    pass


class TagFormatError(AttributeValidatorError, ValueError):
    """Exception raised for tags that cannot be parsed or are out of range."""
    pass


class RecordFormatError(AttributeValidatorError):
    """Exception raised when a record document cannot be read into an attribute set."""
    pass


class RuleFormatError(AttributeValidatorError):
    """Exception raised for malformed module rule documents."""
    pass


class FormatVersionError(RuleFormatError):
    """Exception raised when a rule document's format version is incompatible."""
    pass
