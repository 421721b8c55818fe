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
Tests for the ProvidedByMacos cop.
"""

import pytest

from formula_cops.core.allowlists import PROVIDED_BY_MACOS_FORMULAE
from formula_cops.core.models import Severity
from formula_cops.cops import ProvidedByMacos

MESSAGE = (
    "Formulae that are `keg_only :provided_by_macos` should be added to the "
    "`PROVIDED_BY_MACOS_FORMULAE` list (in the Homebrew/brew repository)"
)


@pytest.fixture
def cop():
    return ProvidedByMacos()


class TestProvidedByMacos:
    def test_unlisted_formula_is_reported(self, cop, make_formula):
        formula = make_formula(
            """
            url "https://brew.sh/foo-1.0.tgz"
            homepage "https://brew.sh"

            keg_only :provided_by_macos
            """,
            name="foo",
        )

        diagnostics = cop.evaluate(formula)

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.message == MESSAGE
        assert diagnostic.cop_name == "FormulaAudit/ProvidedByMacos"
        assert diagnostic.location.line == 5
        assert diagnostic.location.column == 3
        assert diagnostic.formula_name == "foo"
        assert diagnostic.severity is Severity.CONVENTION

    @pytest.mark.parametrize("name", ["ruby", "zlib", "bc-gh", "berkeley-db"])
    def test_listed_formula_passes(self, cop, make_formula, name):
        formula = make_formula("keg_only :provided_by_macos", name=name)

        assert cop.evaluate(formula) == []

    def test_other_keg_only_reasons_pass(self, cop, make_formula):
        formula = make_formula(
            """
            keg_only :versioned_formula
            keg_only "it conflicts with something"
            """
        )

        assert cop.evaluate(formula) == []

    def test_no_keg_only(self, cop, make_formula):
        assert cop.evaluate(make_formula('url "https://brew.sh/foo-1.0.tgz"')) == []

    def test_every_call_is_reported(self, cop, make_formula):
        formula = make_formula(
            """
            keg_only :provided_by_macos
            keg_only :provided_by_macos
            """
        )

        assert [d.location.line for d in cop.evaluate(formula)] == [2, 3]

    def test_missing_body(self, cop, make_formula):
        formula = make_formula("")

        assert formula.body_node is None
        assert cop.evaluate(formula) == []

    def test_evaluate_is_idempotent(self, cop, make_formula):
        formula = make_formula("keg_only :provided_by_macos")

        assert [d.to_dict() for d in cop.evaluate(formula)] == [d.to_dict() for d in cop.evaluate(formula)]

    def test_configured_severity(self, make_formula):
        cop = ProvidedByMacos(severity=Severity.WARNING)

        assert cop.evaluate(make_formula("keg_only :provided_by_macos"))[0].severity is Severity.WARNING


class TestAllowList:
    def test_list_is_frozen(self):
        assert isinstance(PROVIDED_BY_MACOS_FORMULAE, frozenset)

    def test_known_members(self):
        assert {"apr", "icu4c", "tcl-tk", "zlib"} <= PROVIDED_BY_MACOS_FORMULAE
        assert len(PROVIDED_BY_MACOS_FORMULAE) == 47
