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
Dependency declarations of a formula.

Answers "does this formula always depend on X?" from the ``depends_on``
calls in its body. Declarations inside ``on_*`` blocks (``on_macos``,
``on_linux``, ``on_arm``, ...) only apply on some systems and are ignored.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ..config.constants import FormulaCopsConstants
from .arguments import dependency_name
from .exceptions import UnsupportedArgumentShape
from .node_finder import walk_with_ancestors
from .syntax.nodes import SyntaxNode

logger = logging.getLogger(__name__)


class DependencyGraph(Protocol):
    """Anything that can answer dependency membership queries for one formula."""

    def has_dependency(self, name: str) -> bool: ...


class DeclaredDependencies:
    """Unconditional ``depends_on`` declarations found in a formula body."""

    def __init__(self, body_node: SyntaxNode | None):
        self._names = tuple(self._collect(body_node))

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def has_dependency(self, name: str) -> bool:
        return name.removeprefix(":") in self._names

    @staticmethod
    def _collect(body_node: SyntaxNode | None) -> list[str]:
        names: list[str] = []
        for node, ancestors in walk_with_ancestors(body_node):
            if not node.is_call or node.name != "depends_on":
                continue
            if _is_conditional(ancestors):
                continue
            if not node.arguments:
                continue
            try:
                names.append(dependency_name(node.arguments[0]))
            except UnsupportedArgumentShape as e:
                logger.debug("Ignoring depends_on at %s: %s", node.location, e)
        return names


def _is_conditional(ancestors: tuple[SyntaxNode, ...]) -> bool:
    prefix = FormulaCopsConstants.CONDITIONAL_BLOCK_PREFIX
    return any(a.is_call and a.name is not None and a.name.startswith(prefix) for a in ancestors)
