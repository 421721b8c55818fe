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
Read-only syntax tree exposed to formula cops.

The Ruby parser adapter converts tree-sitter nodes into these immutable
records so cops never touch the parser library directly.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Closed set of node kinds cops can match on."""

    CALL = "call"
    STRING = "string"
    SYMBOL = "symbol"
    HASH = "hash"
    PAIR = "pair"
    ARRAY = "array"
    CONSTANT = "constant"
    CLASS = "class"
    BLOCK = "block"
    OTHER = "other"


LITERAL_KINDS = frozenset({NodeKind.STRING, NodeKind.SYMBOL})


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node in its source file (1-based lines and columns)."""

    path: str | None
    line: int
    column: int
    end_line: int
    end_column: int
    start_offset: int = 0
    end_offset: int = 0

    def __str__(self) -> str:
        return f"{self.path or '<source>'}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """One parsed construct.

    ``children`` holds every child in source order and is what traversal
    walks. The remaining attributes are typed views onto those same
    children, populated depending on ``kind``:

    - CALL: ``name`` (method name), ``receiver``, ``arguments``
    - STRING / SYMBOL: ``value`` (literal content without delimiters)
    - PAIR: ``key``, ``value_node``
    - CONSTANT: ``name``
    - CLASS: ``name``, ``superclass``, ``body``
    - BLOCK: ``body``
    """

    kind: NodeKind
    type: str
    location: SourceLocation
    text: str
    children: tuple[SyntaxNode, ...] = ()
    name: str | None = None
    value: str | None = None
    receiver: SyntaxNode | None = None
    arguments: tuple[SyntaxNode, ...] = ()
    key: SyntaxNode | None = None
    value_node: SyntaxNode | None = None
    superclass: SyntaxNode | None = None
    body: SyntaxNode | None = None

    @property
    def is_call(self) -> bool:
        return self.kind is NodeKind.CALL

    @property
    def method_name(self) -> str | None:
        return self.name if self.kind is NodeKind.CALL else None

    @property
    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS

    @property
    def pairs(self) -> tuple[SyntaxNode, ...]:
        """Key/value pairs of a hash node, in declaration order."""
        return tuple(child for child in self.children if child.kind is NodeKind.PAIR)

    @property
    def keys(self) -> tuple[SyntaxNode, ...]:
        return tuple(pair.key for pair in self.pairs if pair.key is not None)

    def descendants(self) -> Iterator[SyntaxNode]:
        """Yield every node below this one, depth-first pre-order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        label = self.name or self.value
        suffix = f" {label!r}" if label is not None else ""
        return f"<SyntaxNode {self.kind.value}{suffix} at {self.location.line}:{self.location.column}>"
