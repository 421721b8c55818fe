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
Formula cops for auditing macOS-provided dependency declarations.
"""

from .base import FormulaCop
from .uses_from_macos import ProvidedByMacos, UsesFromMacos

# Every cop shipped with the package, keyed by its qualified name.
COP_CLASSES: dict[str, type[FormulaCop]] = {
    ProvidedByMacos.cop_name: ProvidedByMacos,
    UsesFromMacos.cop_name: UsesFromMacos,
}

__all__ = ["COP_CLASSES", "FormulaCop", "ProvidedByMacos", "UsesFromMacos"]
