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

"""Module rule documents: which attributes a record must carry, and how.

A rule document lists attributes in the order they are checked::

    format_version: 1.0.0
    name: General Study
    attributes:
      - tag: StudyInstanceUID
        type: 1
      - tag: "(0008,0060)"
        type: 1
        enum: [CT, MR, CR]
      - tag: ReferencedStudySequence
        type: 3
        sequence: true
        max_items: n
        items:
          - tag: ReferencedSOPClassUID
            type: 1

Tags written as eight hex digits must be quoted, YAML reads ``00100010`` as
an octal number.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from jsonschema.validators import validator_for

from .. import RULE_FORMAT_VERSION
from ..config import validator_config
from ..data.tag_utils import parse_tag, to_string
from ..exceptions import FormatVersionError, RuleFormatError, TagFormatError
from ..utils.format_version import check_format_version
from ..validation.check_result import AttributeType
from .json_schema_loader import load_schema

logger = logging.getLogger(__name__)

UNBOUNDED = sys.maxsize

JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None

    def __str__(self) -> str:
        return f"{self.yaml_path or '/'}: {self.message}"


@dataclass(frozen=True)
class AttributeRule:
    tag: int
    type: AttributeType
    name: Optional[str] = None
    vm: int = 1
    index: int = 0
    default: Optional[str] = None
    enum: Tuple[str, ...] = ()
    sequence: bool = False
    max_items: int = UNBOUNDED
    items: Tuple["AttributeRule", ...] = ()

    @property
    def label(self) -> str:
        if self.name:
            return f"{self.name} {to_string(self.tag)}"
        return to_string(self.tag)


@dataclass(frozen=True)
class ModuleRules:
    name: str
    attributes: Tuple[AttributeRule, ...]
    format_version: str = RULE_FORMAT_VERSION
    source: Optional[Path] = None


def _bound(value: Union[int, str]) -> int:
    if isinstance(value, str) and value.lower() == "n":
        return UNBOUNDED
    return int(value)


def schema_issues(data: Any, version: str) -> List[SchemaIssue]:
    """Validate *data* against the rule JSON Schema, returning every issue found."""
    schema = load_schema(version)
    validator = validator_for(schema)(schema)
    issues = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SchemaIssue(message=error.message, yaml_path=path))
    return issues


def _parse_rule(raw: Dict[str, Any], path: JsonPointer) -> AttributeRule:
    try:
        tag = parse_tag(raw["tag"])
    except TagFormatError as exc:
        raise RuleFormatError(f"{path}/tag: {exc}") from exc

    attribute_type = AttributeType.from_value(raw["type"])
    name = raw.get("name")

    if raw.get("sequence", False):
        misplaced = [key for key in ("vm", "index", "default", "enum") if key in raw]
        if misplaced:
            raise RuleFormatError(f"{path}: keys {misplaced} do not apply to sequence attributes")
        items = tuple(
            _parse_rule(item, f"{path}/items/{idx}") for idx, item in enumerate(raw.get("items", []))
        )
        return AttributeRule(
            tag=tag,
            type=attribute_type,
            name=name,
            sequence=True,
            max_items=_bound(raw.get("max_items", "n")),
            items=items,
        )

    misplaced = [key for key in ("max_items", "items") if key in raw]
    if misplaced:
        raise RuleFormatError(f"{path}: keys {misplaced} only apply to sequence attributes")

    vm = _bound(raw.get("vm", 1))
    index = raw.get("index", 0)
    if index >= vm:
        raise RuleFormatError(f"{path}: index {index} is outside the allowed multiplicity {raw.get('vm', 1)}")

    return AttributeRule(
        tag=tag,
        type=attribute_type,
        name=name,
        vm=vm,
        index=index,
        default=raw.get("default"),
        enum=tuple(raw.get("enum", ())),
    )


def parse_module_rules(data: Any, source: Optional[Path] = None) -> ModuleRules:
    """Build module rules from a parsed rule document.

    Raises:
        FormatVersionError: If the document's format version is incompatible.
        RuleFormatError: If the document does not follow the rule schema.
    """
    where = f" in {source}" if source is not None else ""
    if not isinstance(data, dict):
        raise RuleFormatError(f"Rule document root must be a mapping{where}")

    version_check = check_format_version(data.get("format_version"))
    if not version_check.compatible:
        raise FormatVersionError(f"{version_check.message}{where}")
    if version_check.file_version is None or version_check.minor_newer:
        logger.warning(f"{version_check.message}{where}")

    version = str(version_check.file_version) if version_check.file_version else RULE_FORMAT_VERSION
    issues = schema_issues(data, version)
    if issues:
        details = "\n".join(f"  - {issue}" for issue in issues)
        raise RuleFormatError(f"Rule schema validation failed{where}:\n{details}")

    attributes = tuple(
        _parse_rule(raw, f"/attributes/{idx}") for idx, raw in enumerate(data["attributes"])
    )
    return ModuleRules(
        name=data["name"],
        attributes=attributes,
        format_version=version,
        source=source,
    )


_RULES_CACHE: Dict[Path, ModuleRules] = {}


def load_module_rules(file_path: Union[str, Path]) -> ModuleRules:
    """Load and parse a YAML rule document.

    Raises:
        RuleFormatError: If the file is missing, unreadable or malformed.
    """
    path = Path(file_path).resolve()
    if validator_config.cache_enabled and path in _RULES_CACHE:
        logger.debug(f"Loading module rules from cache: {path}")
        return _RULES_CACHE[path]

    if not path.is_file():
        raise RuleFormatError(f"Rule file not found: {path}")

    logger.debug(f"Loading module rules: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuleFormatError(f"Failed to read rule file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuleFormatError(f"Failed to parse rule file {path}: {exc}") from exc

    rules = parse_module_rules(data, source=path)
    if validator_config.cache_enabled:
        _RULES_CACHE[path] = rules
    return rules


def clear_cache() -> None:
    _RULES_CACHE.clear()
