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
Base cop interface for formula audits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ..core.models import Diagnostic, FormulaBody, Severity
from ..core.syntax.nodes import SyntaxNode


class FormulaCop(ABC):
    """Abstract base class for all formula cops.

    Cops hold no per-formula state: everything an evaluation needs lives on
    its call stack, so one instance can audit any number of files, from any
    number of threads.
    """

    cop_name: str = ""
    description: str = ""

    def __init__(self, severity: Severity = Severity.CONVENTION):
        """
        Initialize cop.

        Args:
            severity: Severity attached to every diagnostic this cop emits
        """
        self.severity = severity

    def evaluate(self, formula: FormulaBody) -> list[Diagnostic]:
        """
        Audit one formula.

        Args:
            formula: The parsed formula

        Returns:
            Diagnostics in source order; empty when the formula passes
        """
        if formula.body_node is None:
            return []
        return list(self.audit_formula(formula, formula.body_node))

    @abstractmethod
    def audit_formula(self, formula: FormulaBody, body_node: SyntaxNode) -> Iterator[Diagnostic]:
        """Yield a diagnostic for each offense in ``body_node``."""
        pass

    def problem(self, message: str, node: SyntaxNode, formula: FormulaBody) -> Diagnostic:
        return Diagnostic(
            cop_name=self.cop_name,
            message=message,
            location=node.location,
            severity=self.severity,
            formula_name=formula.formula_name,
        )

    def get_name(self) -> str:
        """Get the cop name."""
        return self.cop_name
