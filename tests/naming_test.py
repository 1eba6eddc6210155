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
"""Tests for the identifier casing and naming helpers."""

import unittest

from pw_jspb import naming


class TestCamelCase(unittest.TestCase):
    """Tests for camel_case."""

    def test_underscored_words(self) -> None:
        self.assertEqual(naming.camel_case('my_field_name'), 'MyFieldName')

    def test_already_camel_case(self) -> None:
        self.assertEqual(naming.camel_case('FooBar'), 'FooBar')
        self.assertEqual(naming.camel_case('fooBar'), 'FooBar')

    def test_leading_underscore(self) -> None:
        self.assertEqual(naming.camel_case('_my_field'), 'XMyField')

    def test_digits_keep_underscore(self) -> None:
        self.assertEqual(naming.camel_case('field_2'), 'Field_2')
        self.assertEqual(naming.camel_case('field2x'), 'Field2X')

    def test_underscore_before_upper_case_is_kept(self) -> None:
        self.assertEqual(naming.camel_case('Foo_Bar'), 'Foo_Bar')

    def test_empty(self) -> None:
        self.assertEqual(naming.camel_case(''), '')

    def test_value_collides_with_upper_case_value(self) -> None:
        self.assertEqual(
            naming.camel_case('value'), naming.camel_case('Value')
        )


class TestNames(unittest.TestCase):
    """Tests for the remaining naming helpers."""

    def test_camel_case_slice(self) -> None:
        self.assertEqual(
            naming.camel_case_slice(['Outer', 'Inner']), 'Outer_Inner'
        )
        self.assertEqual(
            naming.camel_case_slice(['Outer', 'inner_msg']), 'OuterInnerMsg'
        )

    def test_dotted_slice(self) -> None:
        self.assertEqual(naming.dotted_slice(['Outer', 'Inner']), 'Outer.Inner')

    def test_join_namespace_skips_empty_parts(self) -> None:
        self.assertEqual(naming.join_namespace('', 'pkg', 'Msg'), 'pkg.Msg')
        self.assertEqual(
            naming.join_namespace('jspb', 'pkg', 'Msg'), 'jspb.pkg.Msg'
        )
        self.assertEqual(naming.join_namespace('', ''), '')

    def test_bad_to_underscore(self) -> None:
        self.assertEqual(
            naming.bad_to_underscore('foo.bar-baz/1'), 'foo_bar_baz_1'
        )

    def test_base_name(self) -> None:
        self.assertEqual(naming.base_name('a/b/c.proto'), 'c')
        self.assertEqual(naming.base_name('c'), 'c')

    def test_js_file_name(self) -> None:
        self.assertEqual(naming.js_file_name('a/point.proto'), 'a/point.pb.js')
        self.assertEqual(naming.js_file_name('x.protodevel'), 'x.pb.js')
        self.assertEqual(naming.js_file_name('x.txt'), 'x.txt.pb.js')

    def test_parameter_name(self) -> None:
        self.assertEqual(naming.parameter_name('default'), 'default_')
        self.assertEqual(naming.parameter_name('type'), 'type_')
        self.assertEqual(naming.parameter_name('value'), 'value')

    def test_lower_first(self) -> None:
        self.assertEqual(naming.lower_first('FooBar'), 'fooBar')
        self.assertEqual(naming.lower_first(''), '')


if __name__ == '__main__':
    unittest.main()
