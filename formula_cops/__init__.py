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
Formula Cops - audits for Homebrew formulae that lean on macOS-provided software.
"""

__version__ = "0.1.0"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``import formula_cops`` from loading the tree-sitter grammar until
    something actually parses a formula.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "FormulaCopsConstants": (".config.constants", "FormulaCopsConstants"),
        "FormulaLoader": (".core.loader", "FormulaLoader"),
        "FormulaAuditor": (".core.auditor", "FormulaAuditor"),
        "audit_file": (".core.auditor", "audit_file"),
        "audit_paths": (".core.auditor", "audit_paths"),
        "AuditPolicy": (".core.audit_policy", "AuditPolicy"),
        "AuditResult": (".core.models", "AuditResult"),
        "Diagnostic": (".core.models", "Diagnostic"),
        "FormulaBody": (".core.models", "FormulaBody"),
        "Report": (".core.models", "Report"),
        "Severity": (".core.models", "Severity"),
        "ProvidedByMacos": (".cops.uses_from_macos", "ProvidedByMacos"),
        "UsesFromMacos": (".cops.uses_from_macos", "UsesFromMacos"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "FormulaAuditor",
    "audit_file",
    "audit_paths",
    "FormulaLoader",
    "FormulaBody",
    "Diagnostic",
    "AuditResult",
    "Report",
    "Severity",
    "ProvidedByMacos",
    "UsesFromMacos",
    "AuditPolicy",
    "Config",
    "FormulaCopsConstants",
]
