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

"""Configuration of the validator command line tool and loaders."""

import logging
import os
from dataclasses import dataclass

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging, level_from_name


@dataclass
class ValidatorConfig:
    """Configuration read from ``DICOM_VALIDATOR_*`` environment variables."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = True

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv("DICOM_VALIDATOR_LOG_LEVEL", "INFO"),
            print_level=os.getenv("DICOM_VALIDATOR_PRINT_LEVEL", "WARNING"),
            cache_enabled=os.getenv("DICOM_VALIDATOR_CACHE_ENABLED", "true").lower() == "true",
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = level_from_name(self.log_level, logging.INFO)
        stderr_level = level_from_name(self.print_level, logging.WARNING)

        formatter = logging.Formatter(DEFAULT_FORMAT)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger("dicom_attribute_validator")


# Global configuration instance
validator_config = ValidatorConfig.from_env()
