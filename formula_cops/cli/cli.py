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

"""Command-line interface for Formula Cops."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from ..config.config import Config
from ..config.constants import FormulaCopsConstants
from ..core.audit_policy import AuditPolicy
from ..core.auditor import FormulaAuditor
from ..core.cop_factory import build_cops
from ..core.exceptions import AuditPolicyError, FormulaLoadError
from ..core.loader import FormulaLoader
from ..core.models import Report
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.sarif_reporter import SARIFReporter
from ..cops import COP_CLASSES

logger = logging.getLogger("formula_cops.cli")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(args: argparse.Namespace, config: Config) -> None:
    """Attach a stderr handler to the package logger at the requested level."""
    if getattr(args, "debug", False):
        level = logging.DEBUG
    elif getattr(args, "verbose", False):
        level = logging.INFO
    else:
        level = logging.getLevelName(config.log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger("formula_cops")
    root.setLevel(level)
    # main() may run more than once per process; keep a single handler on the current stderr
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)


def _load_policy(policy_path: str | None) -> AuditPolicy | None:
    """Load the audit policy from ``--policy`` or return the default.

    Returns None when the policy file cannot be used; the error is printed.
    """
    if not policy_path:
        return AuditPolicy.default()
    try:
        policy = AuditPolicy.from_yaml(policy_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None
    except AuditPolicyError as e:
        print(f"Error loading policy: {e}", file=sys.stderr)
        return None
    logger.info("Using audit policy %s", policy.policy_name)
    return policy


def _format_output(fmt: str, report: Report) -> str:
    """Generate the formatted output string for a report."""
    if fmt == "json":
        return JSONReporter().generate_report(report)
    if fmt == "sarif":
        return SARIFReporter().generate_report(report)
    return _generate_summary(report)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def audit_command(args: argparse.Namespace) -> int:
    """Handle the ``audit`` command."""
    config = Config.from_env()
    _configure_logging(args, config)

    policy = _load_policy(args.policy or config.policy_path)
    if policy is None:
        return 1

    try:
        cops = build_cops(policy, only=args.only)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    fmt = args.format or config.output_format
    if fmt not in OUTPUT_FORMATS:
        print(f"Error: Unknown output format: {fmt}", file=sys.stderr)
        return 1

    auditor = FormulaAuditor(
        cops=cops,
        policy=policy,
        loader=FormulaLoader(max_file_size_kb=config.max_file_size_kb),
        max_workers=config.max_workers,
    )

    try:
        report = auditor.audit_paths(args.paths, recursive=args.recursive)
    except FormulaLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write_output(args, _format_output(fmt, report))

    if args.fail_on_diagnostics and (report.total_diagnostics or report.errors):
        return 1
    return 0


def list_cops_command(args: argparse.Namespace) -> int:
    """Handle the ``list-cops`` command."""
    policy = _load_policy(getattr(args, "policy", None))
    if policy is None:
        return 1

    print("Available Cops:\n")
    for i, (name, cop_class) in enumerate(sorted(COP_CLASSES.items()), 1):
        state = "[OK] Enabled" if policy.is_enabled(name) else "[OFF] Disabled"
        print(f"  {i}. {name} {state} ({policy.severity_for(name).value})")
        print(f"     {cop_class.description}")
        print()

    return 0


def _generate_summary(report: Report) -> str:
    lines = []
    for result in report.audit_results:
        for d in result.diagnostics:
            lines.append(f"{d.location}: {d.severity.code}: {d.cop_name}: {d.message}")
    for error in report.errors:
        position = f"{error.path}:{error.line}:{error.column}" if error.line else error.path
        lines.append(f"{position}: F: Lint/Syntax: {error.message}")

    if lines:
        lines.append("")
    offenses = report.total_diagnostics
    lines.append(
        f"{report.total_files_audited} file{'s' if report.total_files_audited != 1 else ''} inspected, "
        f"{offenses or 'no'} offense{'s' if offenses != 1 else ''} detected"
    )
    if report.errors:
        lines.append(f"{len(report.errors)} file{'s' if len(report.errors) != 1 else ''} could not be audited")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

OUTPUT_FORMATS = ("summary", "json", "sarif")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog=FormulaCopsConstants.TOOL_NAME,
        description="Formula Cops - audits Homebrew formulae for macOS-provided dependencies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  formula-cops audit Formula/zlib.rb
  formula-cops audit Formula --recursive --format json
  formula-cops audit Formula --only UsesFromMacos --fail-on-diagnostics
  formula-cops audit Formula --policy my_policy.yaml --format sarif -o audit.sarif
  formula-cops list-cops
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {FormulaCopsConstants.VERSION}")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- audit -------------------------------------------------------------
    audit_p = subparsers.add_parser("audit", help="Audit formula files")
    audit_p.add_argument("paths", nargs="+", help="Formula files or directories of formulae")
    audit_p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: summary, or FORMULA_COPS_OUTPUT_FORMAT). Use 'sarif' for GitHub Code Scanning.",
    )
    audit_p.add_argument("--output", "-o", help="Output file path")
    audit_p.add_argument("--policy", metavar="PATH", help="Path to audit policy YAML (or set FORMULA_COPS_POLICY)")
    audit_p.add_argument(
        "--only",
        action="append",
        metavar="COP",
        help="Run only this cop (repeatable); 'UsesFromMacos' and 'FormulaAudit/UsesFromMacos' both work",
    )
    audit_p.add_argument("--recursive", "-r", action="store_true", help="Recursively search directories for formulae")
    audit_p.add_argument(
        "--fail-on-diagnostics",
        action="store_true",
        help="Exit with error if any diagnostic is reported or any file fails to parse",
    )
    verbosity = audit_p.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log each audited file")
    verbosity.add_argument("--debug", action="store_true", help="Log skipped calls and other debug detail")

    # -- list-cops ---------------------------------------------------------
    list_p = subparsers.add_parser("list-cops", help="List available cops")
    list_p.add_argument("--policy", metavar="PATH", help="Show enablement and severity from this policy")

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    dispatch: dict[str, Callable[[argparse.Namespace], int]] = {
        "audit": audit_command,
        "list-cops": list_cops_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
