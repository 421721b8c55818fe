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
Formula file loader.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ..config.constants import FormulaCopsConstants
from .exceptions import FormulaLoadError
from .models import FormulaBody
from .node_finder import walk
from .syntax.nodes import NodeKind, SyntaxNode
from .syntax.ruby_parser import RubyParser

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_VERSIONED_SUFFIX = re.compile(r"AT(?=\d)")


class FormulaLoader:
    """Loads formula files and locates the formula class body.

    A formula file defines ``class Foo < Formula``; the statements inside
    that class are what the cops audit. Files without such a class (casks,
    shared library code) load fine but carry no body.
    """

    def __init__(self, max_file_size_kb: int = FormulaCopsConstants.DEFAULT_MAX_FILE_SIZE_KB):
        """
        Initialize formula loader.

        Args:
            max_file_size_kb: Maximum formula file size to read in KB
        """
        self.max_file_size_bytes = max_file_size_kb * 1024
        self.parser = RubyParser()

    def load_formula(self, path: str | Path) -> FormulaBody:
        """
        Load and parse a formula file.

        The formula name is the file name without its ``.rb`` extension,
        the way Homebrew names formulae.

        Raises:
            FormulaLoadError: If the file cannot be read
            FormulaParseError: If the file is not valid Ruby
        """
        if not isinstance(path, Path):
            path = Path(path)

        if not path.is_file():
            raise FormulaLoadError(f"Formula file does not exist: {path}")

        size = path.stat().st_size
        if size > self.max_file_size_bytes:
            raise FormulaLoadError(f"Formula file too large ({size} bytes): {path}")

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FormulaLoadError(f"Failed to read {path}: {e}") from e

        return self.load_source(source, path=str(path), formula_name=path.stem)

    def load_source(self, source: str, path: str | None = None, formula_name: str | None = None) -> FormulaBody:
        """
        Parse formula source held in memory.

        Args:
            source: Ruby source of the formula
            path: Where the source came from, used in diagnostic locations
            formula_name: Explicit formula name; derived from ``path`` or
                from the class name when omitted

        Raises:
            FormulaParseError: If the source is not valid Ruby
        """
        root = self.parser.parse(source, path=path)
        class_node = find_formula_class(root)

        if formula_name is None:
            if path is not None:
                formula_name = Path(path).stem
            elif class_node is not None and class_node.name:
                formula_name = formula_name_from_class(class_node.name)
            else:
                formula_name = "<unknown>"

        if class_node is None:
            logger.debug("No formula class found in %s", path or "<source>")

        return FormulaBody(
            formula_name=formula_name,
            body_node=class_node.body if class_node is not None else None,
            class_node=class_node,
            path=path,
            root=root,
        )

    @staticmethod
    def discover(paths: Iterable[str | Path], recursive: bool = False) -> list[Path]:
        """
        Expand files and directories into a sorted list of ``.rb`` files.

        Args:
            paths: Files or directories to audit
            recursive: Descend into subdirectories

        Raises:
            FormulaLoadError: If a path does not exist
        """
        found: list[Path] = []
        pattern = f"*{FormulaCopsConstants.FORMULA_EXTENSION}"
        for entry in paths:
            entry = Path(entry)
            if entry.is_dir():
                matches = entry.rglob(pattern) if recursive else entry.glob(pattern)
                found.extend(sorted(p for p in matches if p.is_file()))
            elif entry.is_file():
                found.append(entry)
            else:
                raise FormulaLoadError(f"Path does not exist: {entry}")
        return found


def find_formula_class(root: SyntaxNode | None) -> SyntaxNode | None:
    """First class in the tree that inherits from a formula base class."""
    for node in walk(root):
        if node.kind is not NodeKind.CLASS or node.superclass is None:
            continue
        superclass = node.superclass.text.removeprefix("::")
        if superclass in FormulaCopsConstants.FORMULA_BASE_CLASSES:
            return node
    return None


def formula_name_from_class(class_name: str) -> str:
    """Turn a formula class name back into a formula name.

    ``BerkeleyDb`` becomes ``berkeley-db`` and ``PythonAT3`` becomes
    ``python@3``.
    """
    name = _VERSIONED_SUFFIX.sub("@", class_name.split("::")[-1])
    return _CAMEL_BOUNDARY.sub("-", name).lower()
