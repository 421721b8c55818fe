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
Tests for report output formats.
"""

import json

import pytest

from formula_cops.core.auditor import FormulaAuditor
from formula_cops.core.reporters.json_reporter import JSONReporter
from formula_cops.core.reporters.sarif_reporter import SARIFReporter


@pytest.fixture
def report(formulae_dir, broken_formula_file):
    return FormulaAuditor().audit_paths([formulae_dir, broken_formula_file])


class TestJSONReporter:
    def test_report_structure(self, report):
        data = json.loads(JSONReporter().generate_report(report))

        assert data["summary"]["total_files_audited"] == 4
        assert data["summary"]["total_diagnostics"] == 3
        assert data["summary"]["failed_files"] == 1
        assert len(data["results"]) == 4
        assert data["errors"][0]["path"].endswith("broken.rb")

    def test_diagnostic_fields(self, report):
        data = json.loads(JSONReporter().generate_report(report))
        foo = next(r for r in data["results"] if r["formula_name"] == "foo")

        diagnostic = foo["diagnostics"][0]
        assert diagnostic["cop_name"] == "FormulaAudit/ProvidedByMacos"
        assert diagnostic["severity"] == "convention"
        assert diagnostic["location"]["line"] == 5
        assert diagnostic["location"]["column"] == 3

    def test_single_result(self, formulae_dir):
        result = FormulaAuditor().audit_file(formulae_dir / "foo.rb")

        data = json.loads(JSONReporter(pretty=False).generate_report(result))

        assert data["formula_name"] == "foo"
        assert data["passed"] is False

    def test_compact_output(self, report):
        assert "\n" not in JSONReporter(pretty=False).generate_report(report)


class TestSARIFReporter:
    def test_sarif_envelope(self, report):
        sarif = json.loads(SARIFReporter().generate_report(report))

        assert sarif["version"] == "2.1.0"
        run = sarif["runs"][0]
        assert run["tool"]["driver"]["name"] == "formula-cops"
        assert {rule["id"] for rule in run["tool"]["driver"]["rules"]} == {
            "FormulaAudit/ProvidedByMacos",
            "FormulaAudit/UsesFromMacos",
        }
        assert len(run["results"]) == 3

    def test_result_location(self, formulae_dir):
        result = FormulaAuditor().audit_file(formulae_dir / "linux-only.rb")

        sarif = json.loads(SARIFReporter().generate_report(result))
        sarif_result = sarif["runs"][0]["results"][0]

        assert sarif_result["ruleId"] == "FormulaAudit/UsesFromMacos"
        assert sarif_result["level"] == "note"
        physical = sarif_result["locations"][0]["physicalLocation"]
        assert physical["artifactLocation"]["uri"].endswith("linux-only.rb")
        assert physical["region"]["startLine"] == 7

    def test_location_uses_diagnostic_path_and_line(self, formulae_dir):
        result = FormulaAuditor().audit_file(formulae_dir / "foo.rb")
        diagnostic = result.diagnostics[0]

        sarif = json.loads(SARIFReporter().generate_report(result))
        physical = sarif["runs"][0]["results"][0]["locations"][0]["physicalLocation"]

        assert physical["artifactLocation"]["uri"] == diagnostic.path
        assert physical["region"]["startLine"] == diagnostic.line == 5

    def test_in_memory_source_falls_back_to_formula_file_name(self):
        result = FormulaAuditor().audit_source('class Foo < Formula\n  keg_only :provided_by_macos\nend\n')

        sarif = json.loads(SARIFReporter().generate_report(result))
        physical = sarif["runs"][0]["results"][0]["locations"][0]["physicalLocation"]

        assert physical["artifactLocation"]["uri"] == "foo.rb"

    def test_save_report(self, report, tmp_path):
        out = tmp_path / "audit.sarif"

        SARIFReporter().save_report(report, str(out))

        assert json.loads(out.read_text())["runs"][0]["results"]
