# Copyright 2026 The Pigweed Authors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.
"""Tests for the generated file buffer."""

import unittest

from pw_jspb.errors import GeneratorFailure
from pw_jspb.output_file import OutputFile, format_value


class TestFormatValue(unittest.TestCase):
    """Tests for format_value."""

    def test_values(self) -> None:
        self.assertEqual(format_value('text'), 'text')
        self.assertEqual(format_value(True), 'true')
        self.assertEqual(format_value(False), 'false')
        self.assertEqual(format_value(42), '42')
        self.assertEqual(format_value(0.5), '0.5')

    def test_unknown_type(self) -> None:
        with self.assertRaises(GeneratorFailure):
            format_value(None)


class TestOutputFile(unittest.TestCase):
    """Tests for OutputFile."""

    def setUp(self) -> None:
        self.output = OutputFile('test.pb.js')

    def test_indentation(self) -> None:
        self.output.write_line('a = function() {')
        with self.output.indent():
            self.output.write_line('return ', 42, ';')
            self.output.write_line()
        self.output.write_line('};')
        self.assertEqual(
            self.output.content(), 'a = function() {\n  return 42;\n\n};\n'
        )
        self.assertEqual(self.output.name(), 'test.pb.js')

    def test_slot_is_filled_later(self) -> None:
        self.output.write_line('/**')
        with self.output.indent():
            self.output.slot('types')
        self.output.write_line(' */')
        self.output.fill('types', ' * A', ' * B')
        self.assertEqual(
            self.output.content(), '/**\n   * A\n   * B\n */\n'
        )

    def test_unfilled_slot_is_empty(self) -> None:
        self.output.write_line('x')
        self.output.slot('empty')
        self.output.write_line('y')
        self.assertEqual(self.output.content(), 'x\ny\n')

    def test_slot_errors(self) -> None:
        self.output.slot('once')
        with self.assertRaises(GeneratorFailure):
            self.output.slot('once')
        with self.assertRaises(GeneratorFailure):
            self.output.fill('missing', 'line')

    def test_prepend(self) -> None:
        self.output.write_line('body')
        header = OutputFile('test.pb.js')
        header.write_line('header')
        self.output.prepend(header)
        self.assertEqual(self.output.content(), 'header\nbody\n')


if __name__ == '__main__':
    unittest.main()
