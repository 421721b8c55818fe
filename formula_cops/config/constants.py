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
Constants for Formula Cops.
"""

from pathlib import Path

from .. import __version__ as PACKAGE_VERSION
from ..data import DATA_DIR as _DATA_DIR
from ..data import DEFAULT_POLICY_PATH as _DEFAULT_POLICY_PATH


class FormulaCopsConstants:
    """Constants used throughout the auditor."""

    VERSION = PACKAGE_VERSION
    TOOL_NAME = "formula-cops"

    # Resource paths
    DATA_DIR = _DATA_DIR
    DEFAULT_POLICY_PATH = _DEFAULT_POLICY_PATH

    # Default values
    DEFAULT_MAX_FILE_SIZE_KB = 512
    DEFAULT_MAX_WORKERS = 1
    DEFAULT_OUTPUT_FORMAT = "summary"
    DEFAULT_LOG_LEVEL = "WARNING"

    # Formula discovery
    FORMULA_EXTENSION = ".rb"
    FORMULA_BASE_CLASSES = frozenset({"Formula", "AmazonWebServicesFormula"})

    # Calls whose blocks only apply on some systems (on_macos, on_linux, on_arm, ...)
    CONDITIONAL_BLOCK_PREFIX = "on_"

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR

    @classmethod
    def get_default_policy_path(cls) -> Path:
        """Get path to the built-in audit policy."""
        return cls.DEFAULT_POLICY_PATH
