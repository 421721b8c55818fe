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
Audit policy: which cops run and at what severity.

The built-in ``data/default_policy.yaml`` enables every cop. A user policy
file only needs the sections it overrides:

.. code-block:: yaml

    cops:
      FormulaAudit/UsesFromMacos:
        severity: warning
      FormulaAudit/ProvidedByMacos:
        enabled: false

The dependency allow-lists themselves are not part of the policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..config.constants import FormulaCopsConstants
from ..cops import COP_CLASSES
from .exceptions import AuditPolicyError
from .models import Severity

logger = logging.getLogger(__name__)

_DEFAULT_POLICY_PATH = FormulaCopsConstants.DEFAULT_POLICY_PATH


@dataclass
class CopPolicy:
    """Settings for a single cop."""

    enabled: bool = True
    severity: Severity = Severity.CONVENTION


@dataclass
class AuditPolicy:
    """Per-cop settings for an audit run."""

    policy_name: str = "default"
    cops: dict[str, CopPolicy] = field(default_factory=dict)

    def is_enabled(self, cop_name: str) -> bool:
        cop = self.cops.get(cop_name)
        return cop.enabled if cop is not None else True

    def severity_for(self, cop_name: str) -> Severity:
        cop = self.cops.get(cop_name)
        return cop.severity if cop is not None else Severity.CONVENTION

    @classmethod
    def default(cls) -> AuditPolicy:
        """Load the built-in policy."""
        return cls._from_dict(cls._load_default_raw())

    @classmethod
    def from_yaml(cls, path: str | Path) -> AuditPolicy:
        """
        Load a policy from a YAML file.

        The YAML is merged on top of the built-in defaults so that users only
        need to specify the cops they want to change.

        Raises:
            FileNotFoundError: If the file does not exist
            AuditPolicyError: If the file is malformed or names unknown cops
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")

        try:
            with open(path, encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise AuditPolicyError(f"Invalid YAML in policy file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise AuditPolicyError(f"Policy file {path} must contain a mapping")

        merged = cls._deep_merge(cls._load_default_raw(), raw)
        merged["policy_name"] = raw.get("policy_name", path.stem)
        logger.debug("Loaded audit policy %s from %s", merged["policy_name"], path)
        return cls._from_dict(merged)

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        with open(_DEFAULT_POLICY_PATH, encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into a copy of *base*."""
        result = dict(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = AuditPolicy._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def _from_dict(cls, d: dict[str, Any]) -> AuditPolicy:
        cops: dict[str, CopPolicy] = {}
        for cop_name, settings in (d.get("cops") or {}).items():
            if cop_name not in COP_CLASSES:
                raise AuditPolicyError(f"Unknown cop in policy: {cop_name}")
            settings = settings or {}
            severity_value = str(settings.get("severity", Severity.CONVENTION.value)).lower()
            try:
                severity = Severity(severity_value)
            except ValueError as e:
                raise AuditPolicyError(f"Invalid severity {severity_value!r} for {cop_name}") from e
            cops[cop_name] = CopPolicy(enabled=bool(settings.get("enabled", True)), severity=severity)

        return cls(policy_name=str(d.get("policy_name", "default")), cops=cops)
