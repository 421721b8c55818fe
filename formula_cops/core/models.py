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
Data models for audited formulae and cop diagnostics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .syntax.nodes import SourceLocation, SyntaxNode


class Severity(str, Enum):
    """Severity levels for diagnostics, in increasing order of importance."""

    INFO = "info"
    REFACTOR = "refactor"
    CONVENTION = "convention"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def code(self) -> str:
        """Single-letter code used in summary output (``C`` for convention, ...)."""
        return self.value[0].upper()

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


@dataclass(frozen=True)
class FormulaBody:
    """One parsed formula file.

    ``body_node`` is the executable body of the formula class. It is None
    when the file declares no formula class (a cask, a library file) or the
    class is empty; cops have nothing to audit in either case.
    """

    formula_name: str
    body_node: SyntaxNode | None
    class_node: SyntaxNode | None = None
    path: str | None = None
    root: SyntaxNode | None = None

    @property
    def is_formula(self) -> bool:
        return self.class_node is not None


@dataclass
class Diagnostic:
    """A rule violation reported by a cop."""

    cop_name: str
    message: str
    location: SourceLocation
    severity: Severity = Severity.CONVENTION
    formula_name: str | None = None

    @property
    def path(self) -> str | None:
        return self.location.path

    @property
    def line(self) -> int:
        return self.location.line

    def to_dict(self) -> dict[str, Any]:
        """Convert diagnostic to dictionary."""
        return {
            "cop_name": self.cop_name,
            "message": self.message,
            "severity": self.severity.value,
            "formula_name": self.formula_name,
            "location": self.location.to_dict(),
        }


@dataclass
class AuditResult:
    """Results from auditing a single formula file."""

    formula_name: str
    path: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    cops_used: list[str] = field(default_factory=list)
    audit_duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def passed(self) -> bool:
        """True when no cop reported anything."""
        return not self.diagnostics

    @property
    def max_severity(self) -> Severity | None:
        if not self.diagnostics:
            return None
        return max((d.severity for d in self.diagnostics), key=lambda s: s.rank)

    def get_diagnostics_by_cop(self, cop_name: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.cop_name == cop_name]

    def to_dict(self) -> dict[str, Any]:
        """Convert audit result to dictionary."""
        return {
            "formula_name": self.formula_name,
            "path": self.path,
            "passed": self.passed,
            "diagnostics_count": len(self.diagnostics),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "cops_used": self.cops_used,
            "duration_ms": int(self.audit_duration_seconds * 1000),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class AuditError:
    """A file whose audit was aborted."""

    path: str
    message: str
    line: int | None = None
    column: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "message": self.message, "line": self.line, "column": self.column}


@dataclass
class Report:
    """Aggregated report from auditing one or more formula files."""

    audit_results: list[AuditResult] = field(default_factory=list)
    errors: list[AuditError] = field(default_factory=list)
    total_files_audited: int = 0
    total_diagnostics: int = 0
    passed_count: int = 0
    counts_by_cop: dict[str, int] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def add_audit_result(self, result: AuditResult):
        """Add an audit result and update counters."""
        self.audit_results.append(result)
        self.total_files_audited += 1
        self.total_diagnostics += len(result.diagnostics)

        for diagnostic in result.diagnostics:
            self.counts_by_cop[diagnostic.cop_name] = self.counts_by_cop.get(diagnostic.cop_name, 0) + 1

        if result.passed:
            self.passed_count += 1

    def add_error(self, error: AuditError):
        self.errors.append(error)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for result in self.audit_results for d in result.diagnostics]

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "summary": {
                "total_files_audited": self.total_files_audited,
                "total_diagnostics": self.total_diagnostics,
                "passed_files": self.passed_count,
                "failed_files": len(self.errors),
                "diagnostics_by_cop": dict(self.counts_by_cop),
                "timestamp": self.timestamp.isoformat(),
            },
            "results": [result.to_dict() for result in self.audit_results],
            "errors": [error.to_dict() for error in self.errors],
        }
