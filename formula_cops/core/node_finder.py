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
Method call lookup over formula syntax trees.

Every finder is a generator that walks the tree afresh on each call, in
source order, so results are deterministic and can be re-requested at will.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .syntax.nodes import SyntaxNode

ArgumentPattern = re.Pattern[str] | str


def walk(root: SyntaxNode | None) -> Iterator[SyntaxNode]:
    """Yield ``root`` and all of its descendants, depth-first pre-order."""
    if root is None:
        return
    yield root
    yield from root.descendants()


def walk_with_ancestors(root: SyntaxNode | None) -> Iterator[tuple[SyntaxNode, tuple[SyntaxNode, ...]]]:
    """Like :func:`walk`, also yielding the chain of ancestors (outermost first)."""
    if root is None:
        return
    stack: list[tuple[SyntaxNode, tuple[SyntaxNode, ...]]] = [(root, ())]
    while stack:
        node, ancestors = stack.pop()
        yield node, ancestors
        lineage = (*ancestors, node)
        stack.extend((child, lineage) for child in reversed(node.children))


def find_every_method_call_by_name(root: SyntaxNode | None, method_name: str) -> Iterator[SyntaxNode]:
    """Yield every call to ``method_name`` regardless of its arguments."""
    for node in walk(root):
        if node.is_call and node.name == method_name:
            yield node


def find_method_with_args(
    root: SyntaxNode | None,
    method_name: str,
    *patterns: ArgumentPattern,
) -> Iterator[SyntaxNode]:
    """
    Yield calls to ``method_name`` whose arguments satisfy every pattern.

    A pattern is satisfied when at least one argument matches it, wherever
    that argument sits in the list:

    - a compiled regex is searched against the argument's source text
      (``re.compile(r'^"(.+)"')`` picks out double-quoted string arguments,
      including ``"dep" => [:build]`` hashes);
    - a string matches a symbol or string literal with that value
      (``":provided_by_macos"`` and ``"provided_by_macos"`` are equivalent).

    Args:
        root: Node to search from (``None`` yields nothing)
        method_name: Name of the method being called
        *patterns: Argument patterns; none means any call to ``method_name``

    Yields:
        Matching call nodes in source order
    """
    for call in find_every_method_call_by_name(root, method_name):
        if all(any(argument_matches(argument, pattern) for argument in call.arguments) for pattern in patterns):
            yield call


def argument_matches(argument: SyntaxNode, pattern: ArgumentPattern) -> bool:
    """Check a single argument node against a pattern."""
    if isinstance(pattern, re.Pattern):
        return pattern.search(argument.text) is not None
    if not argument.is_literal:
        return False
    return argument.value == pattern.removeprefix(":")

