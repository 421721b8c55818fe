# Copyright 2026 Cisco Systems, Inc.
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration class for Formula Cops.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .constants import FormulaCopsConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Configuration for Formula Cops.

    Explicit constructor arguments win; fields left at their defaults are
    filled from ``FORMULA_COPS_*`` environment variables.
    """

    # Output Options
    output_format: str = FormulaCopsConstants.DEFAULT_OUTPUT_FORMAT
    log_level: str = FormulaCopsConstants.DEFAULT_LOG_LEVEL

    # Auditing Options
    max_workers: int = FormulaCopsConstants.DEFAULT_MAX_WORKERS
    max_file_size_kb: int = FormulaCopsConstants.DEFAULT_MAX_FILE_SIZE_KB
    policy_path: str | None = None

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.output_format == FormulaCopsConstants.DEFAULT_OUTPUT_FORMAT:
            if env_format := os.getenv("FORMULA_COPS_OUTPUT_FORMAT"):
                self.output_format = env_format.lower()

        if self.log_level == FormulaCopsConstants.DEFAULT_LOG_LEVEL:
            if env_level := os.getenv("FORMULA_COPS_LOG_LEVEL"):
                self.log_level = env_level.upper()

        if self.max_workers == FormulaCopsConstants.DEFAULT_MAX_WORKERS:
            self.max_workers = _int_from_env("FORMULA_COPS_MAX_WORKERS", self.max_workers)

        if self.max_file_size_kb == FormulaCopsConstants.DEFAULT_MAX_FILE_SIZE_KB:
            self.max_file_size_kb = _int_from_env("FORMULA_COPS_MAX_FILE_SIZE_KB", self.max_file_size_kb)

        if self.policy_path is None:
            self.policy_path = os.getenv("FORMULA_COPS_POLICY") or None

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            with open(config_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ[key.strip()] = value.strip()

        return cls.from_env()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
