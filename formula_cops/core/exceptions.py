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

"""Formula Cops exceptions.

This module defines custom exceptions for formula auditing.
All exceptions inherit from FormulaCopsError for easy catching.

Example:
    >>> from formula_cops.core.auditor import FormulaAuditor
    >>> from formula_cops.core.exceptions import FormulaLoadError, FormulaParseError
    >>>
    >>> auditor = FormulaAuditor()
    >>>
    >>> try:
    ...     result = auditor.audit_file("Formula/foo.rb")
    ... except FormulaLoadError as e:
    ...     print(f"Failed to load formula: {e}")
    ... except FormulaParseError as e:
    ...     print(f"Syntax error at line {e.line}: {e}")
"""


class FormulaCopsError(Exception):
    """Base exception for all Formula Cops errors."""

    pass


class FormulaLoadError(FormulaCopsError):
    """Raised when unable to read a formula file.

    This can indicate:
    - Missing file
    - File larger than the configured limit
    - Undecodable (non UTF-8) content
    """

    pass


class FormulaParseError(FormulaCopsError):
    """Raised when a formula file is not valid Ruby.

    The audit of the offending file is aborted; other files are unaffected.
    """

    def __init__(self, message: str, path: str | None = None, line: int = 0, column: int = 0):
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column


class UnsupportedArgumentShape(FormulaCopsError):
    """Raised when a call argument is neither a literal nor a hash.

    Cops treat this as "no dependency name" and skip the call.
    """

    pass


class AuditPolicyError(FormulaCopsError):
    """Raised when an audit policy file references unknown cops or severities."""

    pass
