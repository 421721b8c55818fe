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
Argument extraction for dependency-style calls.

Formula DSL methods take a dependency either as a bare literal
(``uses_from_macos "zlib"``) or as the first key of a hash mapping the
name to build-stage tags (``uses_from_macos "zlib" => [:build]``).
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import UnsupportedArgumentShape
from .syntax.nodes import NodeKind, SyntaxNode


@dataclass(frozen=True)
class DependencyReference:
    """A dependency name pulled out of one call."""

    name: str
    is_hash_form: bool
    source_node: SyntaxNode


def parameters(call: SyntaxNode) -> tuple[SyntaxNode, ...]:
    """Arguments passed to a call, trailing ``k => v`` pairs grouped into one hash."""
    return call.arguments


def first_argument(call: SyntaxNode) -> SyntaxNode | None:
    arguments = parameters(call)
    return arguments[0] if arguments else None


def string_content(node: SyntaxNode) -> str:
    """Literal value of a string/symbol node, or raw source for anything else."""
    if node.is_literal and node.value is not None:
        return node.value
    return node.text


def dependency_name(argument: SyntaxNode | None) -> str:
    """
    Dependency name carried by an argument node.

    Args:
        argument: A string literal, symbol literal or hash literal

    Returns:
        The literal text, or for a hash the text of its first key

    Raises:
        UnsupportedArgumentShape: If the argument has any other shape
    """
    if argument is None:
        raise UnsupportedArgumentShape("call has no arguments")

    if argument.kind in (NodeKind.STRING, NodeKind.SYMBOL):
        return string_content(argument)

    if argument.kind is NodeKind.HASH:
        keys = argument.keys
        if not keys:
            raise UnsupportedArgumentShape(f"empty hash argument at {argument.location}")
        first_key = keys[0]
        if not first_key.is_literal:
            raise UnsupportedArgumentShape(f"non-literal hash key {first_key.text!r} at {first_key.location}")
        return string_content(first_key)

    raise UnsupportedArgumentShape(f"unsupported {argument.kind.value} argument {argument.text!r} at {argument.location}")


def extract_dependency(call: SyntaxNode) -> DependencyReference:
    """Build a :class:`DependencyReference` from a call's first argument."""
    argument = first_argument(call)
    name = dependency_name(argument)
    assert argument is not None
    return DependencyReference(name=name, is_hash_form=argument.kind is NodeKind.HASH, source_node=argument)
