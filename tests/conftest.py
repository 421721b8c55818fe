# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from dotenv import load_dotenv

from formula_cops.core.audit_policy import AuditPolicy
from formula_cops.core.loader import FormulaLoader
from formula_cops.core.models import FormulaBody
from formula_cops.core.syntax.ruby_parser import RubyParser

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

project_root = Path(__file__).parent.parent
env_file = project_root / ".env"

if env_file.exists():
    load_dotenv(env_file)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Fixture file paths
# ---------------------------------------------------------------------------


@pytest.fixture
def formulae_dir() -> Path:
    """Directory of sample formula files."""
    return FIXTURES_DIR / "formulae"


@pytest.fixture
def cask_file() -> Path:
    """A cask definition, which is not a formula."""
    return FIXTURES_DIR / "casks" / "with-shellcompletion.rb"


@pytest.fixture
def broken_formula_file() -> Path:
    """A formula file with a missing ``end``."""
    return FIXTURES_DIR / "broken" / "broken.rb"


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def parser() -> RubyParser:
    return RubyParser()


@pytest.fixture
def loader() -> FormulaLoader:
    return FormulaLoader()


@pytest.fixture
def make_formula(loader: FormulaLoader):
    """Factory fixture for building a :class:`FormulaBody` from body lines.

    Usage::

        formula = make_formula('''
            keg_only :provided_by_macos
            uses_from_macos "zlib"
        ''', name="foo")

    The lines are wrapped in ``class Foo < Formula ... end``; the formula
    name defaults to ``foo``.
    """

    def _make(body: str, name: str = "foo", class_name: str = "Foo") -> FormulaBody:
        lines = [f"  {line.strip()}" if line.strip() else "" for line in body.strip("\n").splitlines()]
        source = f"class {class_name} < Formula\n" + "\n".join(lines) + "\nend\n"
        return loader.load_source(source, formula_name=name)

    return _make


@pytest.fixture
def make_policy(tmp_path: Path):
    """Factory fixture for creating :class:`AuditPolicy` from a YAML string."""
    _counter = [0]

    def _make(yaml_str: str) -> AuditPolicy:
        _counter[0] += 1
        p = tmp_path / f"policy-{_counter[0]}.yaml"
        p.write_text(textwrap.dedent(yaml_str), encoding="utf-8")
        return AuditPolicy.from_yaml(p)

    return _make
