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
SARIF format reporter for GitHub Code Scanning integration.

Implements SARIF 2.1.0 specification for formula audit results.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import json
from typing import Any

from ...config.constants import FormulaCopsConstants
from ...cops import COP_CLASSES
from ...core.models import AuditResult, Diagnostic, Report, Severity


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports for GitHub Code Scanning."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    # RuboCop severities onto SARIF levels
    SEVERITY_TO_LEVEL = {
        Severity.FATAL: "error",
        Severity.ERROR: "error",
        Severity.WARNING: "warning",
        Severity.CONVENTION: "note",
        Severity.REFACTOR: "note",
        Severity.INFO: "note",
    }

    def __init__(
        self,
        tool_name: str = FormulaCopsConstants.TOOL_NAME,
        tool_version: str = FormulaCopsConstants.VERSION,
    ):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the auditing tool
            tool_version: Version of the auditing tool
        """
        self.tool_name = tool_name
        self.tool_version = tool_version

    def generate_report(self, data: AuditResult | Report) -> str:
        """
        Generate SARIF report.

        Args:
            data: AuditResult or Report object

        Returns:
            SARIF JSON string
        """
        if isinstance(data, AuditResult):
            return json.dumps(self._build_log([data], data.timestamp.isoformat()), indent=2, default=str)
        return json.dumps(self._build_log(data.audit_results, data.timestamp.isoformat()), indent=2, default=str)

    def _build_log(self, results: list[AuditResult], end_time: str) -> dict[str, Any]:
        diagnostics = [d for result in results for d in result.diagnostics]

        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": self.tool_name,
                            "version": self.tool_version,
                            "rules": self._extract_rules(diagnostics),
                        }
                    },
                    "results": [self._convert_diagnostic(d) for d in diagnostics],
                    "invocations": [
                        {
                            "executionSuccessful": True,
                            "endTimeUtc": end_time + "Z",
                        }
                    ],
                }
            ],
        }

    def _extract_rules(self, diagnostics: list[Diagnostic]) -> list[dict[str, Any]]:
        """Extract unique rules from diagnostics."""
        seen_rules: set[str] = set()
        rules = []

        for diagnostic in diagnostics:
            if diagnostic.cop_name in seen_rules:
                continue
            seen_rules.add(diagnostic.cop_name)

            cop_class = COP_CLASSES.get(diagnostic.cop_name)
            description = cop_class.description if cop_class else diagnostic.cop_name
            rules.append(
                {
                    "id": diagnostic.cop_name,
                    "name": diagnostic.cop_name.split("/")[-1],
                    "shortDescription": {"text": description},
                    "defaultConfiguration": {
                        "level": self.SEVERITY_TO_LEVEL.get(diagnostic.severity, "warning"),
                    },
                }
            )

        return rules

    def _convert_diagnostic(self, diagnostic: Diagnostic) -> dict[str, Any]:
        location = diagnostic.location
        return {
            "ruleId": diagnostic.cop_name,
            "level": self.SEVERITY_TO_LEVEL.get(diagnostic.severity, "warning"),
            "message": {"text": diagnostic.message},
            "properties": {
                "severity": diagnostic.severity.value,
                "formula": diagnostic.formula_name,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": diagnostic.path or f"{diagnostic.formula_name}.rb",
                            "uriBaseId": "%SRCROOT%",
                        },
                        "region": {
                            "startLine": diagnostic.line,
                            "startColumn": location.column,
                            "endLine": location.end_line,
                            "endColumn": location.end_column,
                        },
                    }
                }
            ],
        }

    def save_report(self, data: AuditResult | Report, output_path: str):
        """
        Save SARIF report to file.

        Args:
            data: AuditResult or Report object
            output_path: Path to save file
        """
        report_json = self.generate_report(data)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_json)
