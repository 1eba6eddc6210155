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
"""Tests for parsing the plugin parameter string."""

import logging
import unittest

from pw_jspb.errors import GeneratorError, GeneratorFailure
from pw_jspb.options import (
    GeneratorOptions,
    log_level,
    parse_parameter_options,
    split_parameter,
)


class TestSplitParameter(unittest.TestCase):
    """Tests for split_parameter."""

    def test_empty(self) -> None:
        self.assertEqual(split_parameter(''), {})

    def test_keys_and_values(self) -> None:
        self.assertEqual(
            split_parameter('pkg_prefix=jspb,flag'),
            {'pkg_prefix': 'jspb', 'flag': ''},
        )

    def test_quoted_commas(self) -> None:
        self.assertEqual(split_parameter("key='a,b'"), {'key': 'a,b'})
        self.assertEqual(
            split_parameter('pkg_prefix="x,y",flag'),
            {'pkg_prefix': 'x,y', 'flag': ''},
        )

    def test_unbalanced_quote(self) -> None:
        with self.assertRaises(GeneratorError):
            split_parameter("key='a,b")


class TestParseParameterOptions(unittest.TestCase):
    """Tests for parse_parameter_options."""

    def test_defaults(self) -> None:
        self.assertEqual(parse_parameter_options(''), GeneratorOptions())
        self.assertEqual(GeneratorOptions().pkg_prefix, '')
        self.assertEqual(GeneratorOptions().log_level, logging.WARNING)

    def test_pkg_prefix(self) -> None:
        options = parse_parameter_options('pkg_prefix=my.prefix')
        self.assertEqual(options.pkg_prefix, 'my.prefix')

    def test_log_level(self) -> None:
        options = parse_parameter_options('log_level=debug')
        self.assertEqual(options.log_level, logging.DEBUG)

    def test_unknown_keys_are_ignored(self) -> None:
        options = parse_parameter_options('unknown=1,pkg_prefix=p')
        self.assertEqual(options, GeneratorOptions(pkg_prefix='p'))

    def test_invalid_log_level(self) -> None:
        with self.assertRaises(GeneratorFailure):
            log_level('loud')
        with self.assertRaises(GeneratorFailure):
            parse_parameter_options('log_level=getLogger')


if __name__ == '__main__':
    unittest.main()
