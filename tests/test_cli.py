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
Tests for the command-line interface.
"""

import json
import os
from unittest.mock import patch

import pytest

from formula_cops.cli.cli import main


@pytest.fixture(autouse=True)
def clean_env():
    env = {k: v for k, v in os.environ.items() if not k.startswith("FORMULA_COPS_")}
    with patch.dict("os.environ", env, clear=True):
        yield


class TestAuditCommand:
    def test_summary_output(self, formulae_dir, capsys):
        exit_code = main(["audit", str(formulae_dir / "foo.rb")])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "foo.rb:5:3: C: FormulaAudit/ProvidedByMacos: Formulae that are" in out
        assert "foo.rb:8:3: C: FormulaAudit/UsesFromMacos:" in out
        assert "1 file inspected, 2 offenses detected" in out

    def test_clean_summary(self, formulae_dir, capsys):
        assert main(["audit", str(formulae_dir / "clean.rb")]) == 0
        assert "1 file inspected, no offenses detected" in capsys.readouterr().out

    def test_fail_on_diagnostics(self, formulae_dir):
        assert main(["audit", str(formulae_dir / "foo.rb"), "--fail-on-diagnostics"]) == 1
        assert main(["audit", str(formulae_dir / "clean.rb"), "--fail-on-diagnostics"]) == 0

    def test_parse_error_reported(self, broken_formula_file, formulae_dir, capsys):
        exit_code = main(["audit", str(broken_formula_file), str(formulae_dir / "clean.rb")])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "F: Lint/Syntax:" in out
        assert "1 file could not be audited" in out

    def test_json_format(self, formulae_dir, capsys):
        assert main(["audit", str(formulae_dir), "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["total_files_audited"] == 4

    def test_format_from_env(self, formulae_dir, capsys):
        with patch.dict("os.environ", {"FORMULA_COPS_OUTPUT_FORMAT": "sarif"}):
            assert main(["audit", str(formulae_dir / "foo.rb")]) == 0

        assert json.loads(capsys.readouterr().out)["version"] == "2.1.0"

    def test_output_file(self, formulae_dir, tmp_path):
        out = tmp_path / "report.json"

        assert main(["audit", str(formulae_dir), "--format", "json", "-o", str(out)]) == 0
        assert json.loads(out.read_text())["summary"]["total_diagnostics"] == 3

    def test_only(self, formulae_dir, capsys):
        main(["audit", str(formulae_dir / "foo.rb"), "--only", "UsesFromMacos"])

        out = capsys.readouterr().out
        assert "ProvidedByMacos" not in out
        assert "1 offense detected" in out

    def test_unknown_only(self, formulae_dir, capsys):
        assert main(["audit", str(formulae_dir), "--only", "Bogus"]) == 1
        assert "Unknown cop" in capsys.readouterr().err

    def test_policy_file(self, formulae_dir, tmp_path, capsys):
        policy = tmp_path / "policy.yaml"
        policy.write_text("cops:\n  FormulaAudit/UsesFromMacos:\n    severity: error\n")

        main(["audit", str(formulae_dir / "foo.rb"), "--policy", str(policy)])

        assert ": E: FormulaAudit/UsesFromMacos:" in capsys.readouterr().out

    def test_missing_policy_file(self, formulae_dir, tmp_path, capsys):
        assert main(["audit", str(formulae_dir), "--policy", str(tmp_path / "nope.yaml")]) == 1
        assert "Policy file not found" in capsys.readouterr().err

    def test_missing_path(self, tmp_path, capsys):
        assert main(["audit", str(tmp_path / "nope.rb")]) == 1
        assert "does not exist" in capsys.readouterr().err


class TestListCops:
    def test_lists_every_cop(self, capsys):
        assert main(["list-cops"]) == 0

        out = capsys.readouterr().out
        assert "FormulaAudit/ProvidedByMacos" in out
        assert "FormulaAudit/UsesFromMacos" in out


class TestMain:
    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "formula-cops" in capsys.readouterr().out
