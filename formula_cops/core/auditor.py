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
Core audit engine that runs formula cops over formula files.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from collections.abc import Iterable
from pathlib import Path

from ..cops.base import FormulaCop
from .audit_policy import AuditPolicy
from .cop_factory import build_cops
from .exceptions import FormulaLoadError, FormulaParseError
from .loader import FormulaLoader
from .models import AuditError, AuditResult, FormulaBody, Report

logger = logging.getLogger(__name__)


class FormulaAuditor:
    """Runs every configured cop over formula files."""

    def __init__(
        self,
        cops: list[FormulaCop] | None = None,
        policy: AuditPolicy | None = None,
        loader: FormulaLoader | None = None,
        max_workers: int = 1,
    ):
        """
        Initialize auditor.

        Args:
            cops: Cops to run. If None, builds the cops enabled by ``policy``.
            policy: Audit policy. If None, loads built-in defaults.
            loader: Formula loader. If None, uses a default loader.
            max_workers: Number of files audited concurrently by ``audit_paths``
        """
        self.policy = policy or AuditPolicy.default()
        self.cops: list[FormulaCop] = cops if cops is not None else build_cops(self.policy)
        self.loader = loader or FormulaLoader()
        self.max_workers = max(1, max_workers)

    def audit_formula(self, formula: FormulaBody) -> AuditResult:
        """Run every cop over an already-parsed formula."""
        start_time = time.time()
        diagnostics = []
        for cop in self.cops:
            diagnostics.extend(cop.evaluate(formula))
        diagnostics.sort(key=lambda d: (d.location.start_offset, d.cop_name))

        return AuditResult(
            formula_name=formula.formula_name,
            path=formula.path,
            diagnostics=diagnostics,
            cops_used=[cop.get_name() for cop in self.cops],
            audit_duration_seconds=time.time() - start_time,
        )

    def audit_file(self, path: str | Path) -> AuditResult:
        """
        Audit a single formula file.

        Raises:
            FormulaLoadError: If the file cannot be read
            FormulaParseError: If the file is not valid Ruby
        """
        formula = self.loader.load_formula(path)
        if not formula.is_formula:
            logger.debug("%s does not define a formula class; nothing to audit", path)
        result = self.audit_formula(formula)
        logger.info("Audited %s: %d diagnostic(s)", path, len(result.diagnostics))
        return result

    def audit_source(self, source: str, formula_name: str | None = None, path: str | None = None) -> AuditResult:
        """Audit formula source held in memory."""
        return self.audit_formula(self.loader.load_source(source, path=path, formula_name=formula_name))

    def audit_paths(self, paths: Iterable[str | Path], recursive: bool = False) -> Report:
        """
        Audit formula files and directories of formula files.

        A file that cannot be read or parsed is recorded in
        ``Report.errors``; the remaining files are still audited.

        Args:
            paths: Files and/or directories
            recursive: Descend into subdirectories

        Returns:
            Report with one AuditResult per successfully audited file,
            in discovery order
        """
        files = self.loader.discover(paths, recursive=recursive)
        report = Report()

        if self.max_workers > 1 and len(files) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._audit_or_error, files))
        else:
            outcomes = [self._audit_or_error(path) for path in files]

        for outcome in outcomes:
            if isinstance(outcome, AuditError):
                report.add_error(outcome)
            else:
                report.add_audit_result(outcome)

        return report

    def _audit_or_error(self, path: Path) -> AuditResult | AuditError:
        try:
            return self.audit_file(path)
        except FormulaParseError as e:
            logger.error("Failed to parse %s: %s", path, e)
            return AuditError(path=str(path), message=str(e), line=e.line, column=e.column)
        except FormulaLoadError as e:
            logger.warning("Failed to load %s: %s", path, e)
            return AuditError(path=str(path), message=str(e))


def audit_file(path: str | Path, policy: AuditPolicy | None = None) -> AuditResult:
    """Convenience function to audit a single formula file."""
    return FormulaAuditor(policy=policy).audit_file(path)


def audit_paths(paths: Iterable[str | Path], recursive: bool = False, policy: AuditPolicy | None = None) -> Report:
    """Convenience function to audit several formula files."""
    return FormulaAuditor(policy=policy).audit_paths(paths, recursive=recursive)
