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
Cops for dependencies that macOS already provides.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from ..core.allowlists import PROVIDED_BY_MACOS_FORMULAE, is_provided_by_macos
from ..core.arguments import extract_dependency
from ..core.dependencies import DeclaredDependencies, DependencyGraph
from ..core.exceptions import UnsupportedArgumentShape
from ..core.models import Diagnostic, FormulaBody, Severity
from ..core.node_finder import find_method_with_args
from ..core.syntax.nodes import SyntaxNode
from .base import FormulaCop

logger = logging.getLogger(__name__)

QUOTED_DEPENDENCY = re.compile(r'^"(.+)"')


class ProvidedByMacos(FormulaCop):
    """Audits formulae that are keg-only because they are provided by macOS."""

    cop_name = "FormulaAudit/ProvidedByMacos"
    description = "Formulae that are `keg_only :provided_by_macos` must be registered as provided by macOS"

    MESSAGE = (
        "Formulae that are `keg_only :provided_by_macos` should be "
        "added to the `PROVIDED_BY_MACOS_FORMULAE` list (in the Homebrew/brew repository)"
    )

    def audit_formula(self, formula: FormulaBody, body_node: SyntaxNode) -> Iterator[Diagnostic]:
        for call in find_method_with_args(body_node, "keg_only", ":provided_by_macos"):
            if formula.formula_name in PROVIDED_BY_MACOS_FORMULAE:
                return
            yield self.problem(self.MESSAGE, call, formula)


class UsesFromMacos(FormulaCop):
    """Audits ``uses_from_macos`` dependencies in formulae."""

    cop_name = "FormulaAudit/UsesFromMacos"
    description = "`uses_from_macos` may only name dependencies that macOS provides"

    LINUX_REQUIRED_MESSAGE = "`uses_from_macos` should not be used when Linux is required."
    NOT_MACOS_MESSAGE = "`uses_from_macos` should only be used for macOS dependencies, not '{name}'."

    def __init__(
        self,
        severity: Severity = Severity.CONVENTION,
        dependency_graph: Callable[[FormulaBody], DependencyGraph] | None = None,
    ):
        """
        Initialize cop.

        Args:
            severity: Severity attached to every diagnostic this cop emits
            dependency_graph: Builds the dependency query for a formula.
                Defaults to the formula's own unconditional ``depends_on`` calls.
        """
        super().__init__(severity)
        self._dependency_graph = dependency_graph or (lambda formula: DeclaredDependencies(formula.body_node))

    def audit_formula(self, formula: FormulaBody, body_node: SyntaxNode) -> Iterator[Diagnostic]:
        requires_linux = self._dependency_graph(formula).has_dependency("linux")

        for call in find_method_with_args(body_node, "uses_from_macos", QUOTED_DEPENDENCY):
            if requires_linux:
                yield self.problem(self.LINUX_REQUIRED_MESSAGE, call, formula)

            try:
                dependency = extract_dependency(call)
            except UnsupportedArgumentShape as e:
                logger.debug("Skipping uses_from_macos at %s: %s", call.location, e)
                continue

            if is_provided_by_macos(dependency.name):
                continue

            yield self.problem(self.NOT_MACOS_MESSAGE.format(name=dependency.name), call, formula)
