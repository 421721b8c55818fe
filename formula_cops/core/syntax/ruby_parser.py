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
Ruby parser for formula files.

Parses Ruby source with tree-sitter and converts the concrete tree into
the immutable :class:`SyntaxNode` model.
"""

from __future__ import annotations

import logging

import tree_sitter_ruby
from tree_sitter import Language, Node, Parser

from ..exceptions import FormulaParseError
from .nodes import NodeKind, SourceLocation, SyntaxNode

logger = logging.getLogger(__name__)

RUBY_LANGUAGE = Language(tree_sitter_ruby.language())

# Older grammar releases emitted ``method_call`` for what is now ``call``.
CALL_TYPES = frozenset({"call", "method_call"})
STRING_TYPES = frozenset({"string"})
SYMBOL_TYPES = frozenset({"simple_symbol", "delimited_symbol", "hash_key_symbol", "symbol"})
HASH_TYPES = frozenset({"hash"})
ARRAY_TYPES = frozenset({"array"})
CONSTANT_TYPES = frozenset({"constant", "scope_resolution"})
BLOCK_TYPES = frozenset({"block", "do_block"})
IGNORED_TYPES = frozenset({"comment"})


class RubyParser:
    """Parse Ruby source code into a read-only syntax tree."""

    def parse(self, source: str, path: str | None = None) -> SyntaxNode:
        """
        Parse Ruby source.

        Args:
            source: Ruby source text
            path: File the source came from, recorded in node locations

        Returns:
            Root SyntaxNode of the program

        Raises:
            FormulaParseError: If the source contains syntax errors
        """
        data = source.encode("utf-8")
        # Parser instances are not thread-safe; one per call keeps parse() reentrant.
        tree = Parser(RUBY_LANGUAGE).parse(data)
        root = tree.root_node

        if root.has_error:
            error_node = _first_error(root) or root
            line = error_node.start_point[0] + 1
            column = error_node.start_point[1] + 1
            where = f"{path or '<source>'}:{line}:{column}"
            raise FormulaParseError(f"Syntax error at {where}", path=path, line=line, column=column)

        return _TreeConverter(data, path).convert(root)


def _first_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(reversed(current.children))
    return None


def _same_node(a: Node | None, b: Node) -> bool:
    return a is not None and a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


class _TreeConverter:
    """Builds SyntaxNode trees from one tree-sitter parse."""

    def __init__(self, data: bytes, path: str | None):
        self.data = data
        self.path = path

    def convert(self, node: Node) -> SyntaxNode:
        node_type = node.type
        if node_type in CALL_TYPES:
            return self._convert_call(node)
        if node_type in STRING_TYPES:
            return self._leaf(node, NodeKind.STRING, value=self._delimited_content(node))
        if node_type in SYMBOL_TYPES:
            return self._leaf(node, NodeKind.SYMBOL, value=self._symbol_content(node))
        if node_type == "pair":
            return self._convert_pair(node)
        if node_type in HASH_TYPES:
            return self._build(node, NodeKind.HASH, self._convert_children(node))
        if node_type in ARRAY_TYPES:
            return self._build(node, NodeKind.ARRAY, self._convert_children(node))
        if node_type in CONSTANT_TYPES:
            return self._build(node, NodeKind.CONSTANT, self._convert_children(node), name=self._text(node))
        if node_type == "class":
            return self._convert_class(node)
        if node_type in BLOCK_TYPES:
            children = self._convert_children(node)
            body = self._find_child(children, ("block_body", "body_statement"))
            return self._build(node, NodeKind.BLOCK, children, body=body)
        return self._build(node, NodeKind.OTHER, self._convert_children(node))

    # ------------------------------------------------------------------
    # Node specific conversions
    # ------------------------------------------------------------------

    def _convert_call(self, node: Node) -> SyntaxNode:
        receiver_ts = node.child_by_field_name("receiver")
        method_ts = node.child_by_field_name("method")
        arguments_ts = node.child_by_field_name("arguments")
        block_ts = node.child_by_field_name("block")

        receiver = self.convert(receiver_ts) if receiver_ts is not None else None
        arguments = self._convert_arguments(arguments_ts) if arguments_ts is not None else ()
        block = self.convert(block_ts) if block_ts is not None else None

        children = tuple(child for child in (receiver, *arguments, block) if child is not None)
        return self._build(
            node,
            NodeKind.CALL,
            children,
            name=self._text(method_ts) if method_ts is not None else None,
            receiver=receiver,
            arguments=arguments,
        )

    def _convert_arguments(self, node: Node) -> tuple[SyntaxNode, ...]:
        """Convert an argument list, folding bare ``k => v`` pairs into one hash."""
        arguments: list[SyntaxNode] = []
        pending_pairs: list[SyntaxNode] = []

        for child in node.named_children:
            if child.type in IGNORED_TYPES:
                continue
            converted = self.convert(child)
            if converted.kind is NodeKind.PAIR:
                pending_pairs.append(converted)
                continue
            if pending_pairs:
                arguments.append(self._implicit_hash(pending_pairs))
                pending_pairs = []
            arguments.append(converted)

        if pending_pairs:
            arguments.append(self._implicit_hash(pending_pairs))
        return tuple(arguments)

    def _implicit_hash(self, pairs: list[SyntaxNode]) -> SyntaxNode:
        first, last = pairs[0].location, pairs[-1].location
        location = SourceLocation(
            path=self.path,
            line=first.line,
            column=first.column,
            end_line=last.end_line,
            end_column=last.end_column,
            start_offset=first.start_offset,
            end_offset=last.end_offset,
        )
        text = self.data[first.start_offset : last.end_offset].decode("utf-8", errors="replace")
        return SyntaxNode(kind=NodeKind.HASH, type="hash", location=location, text=text, children=tuple(pairs))

    def _convert_pair(self, node: Node) -> SyntaxNode:
        key_ts = node.child_by_field_name("key")
        value_ts = node.child_by_field_name("value")
        key = self.convert(key_ts) if key_ts is not None else None
        value = self.convert(value_ts) if value_ts is not None else None
        children = tuple(child for child in (key, value) if child is not None)
        return self._build(node, NodeKind.PAIR, children, key=key, value_node=value)

    def _convert_class(self, node: Node) -> SyntaxNode:
        name_ts = node.child_by_field_name("name")
        superclass_ts = node.child_by_field_name("superclass")

        superclass = None
        if superclass_ts is not None:
            expressions = [c for c in superclass_ts.named_children if c.type not in IGNORED_TYPES]
            if expressions:
                superclass = self.convert(expressions[0])

        statements = [
            child
            for child in node.named_children
            if child.type not in IGNORED_TYPES
            and not _same_node(name_ts, child)
            and not _same_node(superclass_ts, child)
        ]
        body = None
        if len(statements) == 1 and statements[0].type == "body_statement":
            body = self.convert(statements[0])
        elif statements:
            body = self._synthetic_body(statements)

        children = tuple(child for child in (superclass, body) if child is not None)
        return self._build(
            node,
            NodeKind.CLASS,
            children,
            name=self._text(name_ts) if name_ts is not None else None,
            superclass=superclass,
            body=body,
        )

    def _synthetic_body(self, statements: list[Node]) -> SyntaxNode:
        converted = tuple(self.convert(statement) for statement in statements)
        first, last = converted[0].location, converted[-1].location
        location = SourceLocation(
            path=self.path,
            line=first.line,
            column=first.column,
            end_line=last.end_line,
            end_column=last.end_column,
            start_offset=first.start_offset,
            end_offset=last.end_offset,
        )
        text = self.data[first.start_offset : last.end_offset].decode("utf-8", errors="replace")
        return SyntaxNode(kind=NodeKind.OTHER, type="body_statement", location=location, text=text, children=converted)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _convert_children(self, node: Node) -> tuple[SyntaxNode, ...]:
        return tuple(self.convert(child) for child in node.named_children if child.type not in IGNORED_TYPES)

    @staticmethod
    def _find_child(children: tuple[SyntaxNode, ...], types: tuple[str, ...]) -> SyntaxNode | None:
        for child in children:
            if child.type in types:
                return child
        return None

    def _leaf(self, node: Node, kind: NodeKind, value: str) -> SyntaxNode:
        return self._build(node, kind, self._convert_children(node), value=value)

    def _build(self, node: Node, kind: NodeKind, children: tuple[SyntaxNode, ...], **attrs) -> SyntaxNode:
        return SyntaxNode(
            kind=kind,
            type=node.type,
            location=self._location(node),
            text=self._text(node),
            children=children,
            **attrs,
        )

    def _location(self, node: Node) -> SourceLocation:
        return SourceLocation(
            path=self.path,
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
            start_offset=node.start_byte,
            end_offset=node.end_byte,
        )

    def _text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _delimited_content(self, node: Node) -> str:
        """Source between the opening and closing delimiter tokens."""
        children = node.children
        if len(children) >= 2 and not children[0].is_named and not children[-1].is_named:
            return self.data[children[0].end_byte : children[-1].start_byte].decode("utf-8", errors="replace")
        return self._text(node)

    def _symbol_content(self, node: Node) -> str:
        if node.type == "delimited_symbol":
            return self._delimited_content(node)
        text = self._text(node)
        if node.type == "hash_key_symbol":
            return text
        return text[1:] if text.startswith(":") else text
