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

"""JSON Schema loader for module rule documents."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..exceptions import FormatVersionError
from ..utils.format_version import SemanticVersion, parse_format_version

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(version: str) -> Path:
    """Get the path to the rule document JSON Schema for *version*."""
    return SCHEMA_DIR / version / "module.json"


def available_versions() -> List[SemanticVersion]:
    versions = []
    for version_dir in SCHEMA_DIR.iterdir():
        if not version_dir.is_dir() or not (version_dir / "module.json").exists():
            continue
        try:
            versions.append(parse_format_version(version_dir.name))
        except FormatVersionError:
            # not a version directory
            continue
    return versions


def resolve_schema_version(version: str) -> str:
    """Resolve the schema version to load for a document of *version*.

    - Major version must match exactly
    - If the exact version exists, use it
    - Otherwise use the largest available version of the same major version

    Returns:
        Resolved version string, or *version* itself if nothing matches
    """
    parsed = parse_format_version(version)

    if get_schema_path(version).exists():
        return version

    candidates = [v for v in available_versions() if v.major == parsed.major]
    if not candidates:
        return version

    return str(max(candidates, key=lambda v: (v.minor, v.patch)))


def load_schema(version: str) -> dict:
    """Load the rule document JSON Schema for *version*.

    Raises:
        FileNotFoundError: If no schema exists for the version
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    resolved_version = resolve_schema_version(version)

    if resolved_version in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[resolved_version]

    schema_path = get_schema_path(resolved_version)
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found for rule format {version} "
            f"(resolved to {resolved_version}): {schema_path}"
        )

    logger.debug(f"Loading rule schema: {schema_path}")
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    _SCHEMA_CACHE[resolved_version] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
