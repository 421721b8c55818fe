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
Tests for dependency argument extraction.
"""

import pytest

from formula_cops.core.arguments import dependency_name, extract_dependency, first_argument, parameters
from formula_cops.core.exceptions import UnsupportedArgumentShape
from formula_cops.core.node_finder import find_every_method_call_by_name


@pytest.fixture
def call_of(parser):
    """Parse one line and return its first ``uses_from_macos`` call."""

    def _call(line: str):
        return next(find_every_method_call_by_name(parser.parse(line + "\n"), "uses_from_macos"))

    return _call


class TestExtractDependency:
    def test_string_form(self, call_of):
        dep = extract_dependency(call_of('uses_from_macos "zlib"'))

        assert dep.name == "zlib"
        assert not dep.is_hash_form

    def test_hash_form(self, call_of):
        dep = extract_dependency(call_of('uses_from_macos "postgresql" => :build'))

        assert dep.name == "postgresql"
        assert dep.is_hash_form

    def test_hash_with_array_value(self, call_of):
        dep = extract_dependency(call_of('uses_from_macos "m4" => [:build, :test]'))

        assert dep.name == "m4"

    def test_symbol_form(self, call_of):
        assert extract_dependency(call_of("uses_from_macos :ncurses")).name == "ncurses"

    def test_trailing_options_do_not_change_name(self, call_of):
        dep = extract_dependency(call_of('uses_from_macos "perl", since: :big_sur'))

        assert dep.name == "perl"
        assert not dep.is_hash_form

    def test_first_key_wins(self, call_of):
        assert extract_dependency(call_of('uses_from_macos "a" => :build, "b" => :test')).name == "a"

    def test_source_node_is_first_argument(self, call_of):
        call = call_of('uses_from_macos "zlib"')

        assert extract_dependency(call).source_node is first_argument(call)


class TestUnsupportedShapes:
    def test_no_arguments(self, call_of):
        with pytest.raises(UnsupportedArgumentShape):
            extract_dependency(call_of("uses_from_macos()"))

    def test_interpolated_string_keeps_its_source(self, call_of):
        assert extract_dependency(call_of('uses_from_macos "lib#{x}"')).name == "lib#{x}"

    def test_constant_argument(self, call_of):
        with pytest.raises(UnsupportedArgumentShape):
            extract_dependency(call_of("uses_from_macos DEPENDENCY"))

    def test_none(self):
        with pytest.raises(UnsupportedArgumentShape):
            dependency_name(None)


class TestParameters:
    def test_parameters_in_order(self, call_of):
        call = call_of('uses_from_macos "perl", since: :big_sur')

        assert [p.text for p in parameters(call)] == ['"perl"', "since: :big_sur"]
