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
Centralized cop construction.

The CLI and :class:`FormulaAuditor` both build cops through
:func:`build_cops` so that policy toggles and severities apply everywhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..cops import COP_CLASSES, FormulaCop
from .audit_policy import AuditPolicy

logger = logging.getLogger(__name__)


def build_cops(policy: AuditPolicy, *, only: Iterable[str] | None = None) -> list[FormulaCop]:
    """Build the enabled cops with the severities from *policy*.

    Args:
        policy: The active audit policy.
        only: Restrict the run to these cop names (``FormulaAudit/UsesFromMacos``
            or just ``UsesFromMacos``). Cops named here run even when the
            policy disables them.

    Returns:
        Cop instances in registration order.

    Raises:
        ValueError: If *only* names a cop that does not exist.
    """
    selected: set[str] | None = None
    if only is not None:
        selected = {_qualify(name) for name in only}
        unknown = selected - COP_CLASSES.keys()
        if unknown:
            raise ValueError(f"Unknown cop(s): {', '.join(sorted(unknown))}")

    cops: list[FormulaCop] = []
    for cop_name, cop_class in COP_CLASSES.items():
        if selected is not None:
            if cop_name not in selected:
                continue
        elif not policy.is_enabled(cop_name):
            logger.debug("Cop %s disabled by policy %s", cop_name, policy.policy_name)
            continue
        cops.append(cop_class(severity=policy.severity_for(cop_name)))

    return cops


def _qualify(name: str) -> str:
    if "/" in name:
        return name
    return f"FormulaAudit/{name}"
