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
"""Tests for mapping field types to Closure types."""

from types import SimpleNamespace
import unittest

from google.protobuf import descriptor_pb2, text_format

from pw_jspb.errors import GeneratorFailure
from pw_jspb.packages import PackageRegistry
from pw_jspb.proto_tree import SchemaFile
from pw_jspb.resolver import TypeNameMap
from pw_jspb.types import TypeMapper, is_message, is_repeated

_BASE = """
name: "base.proto"
package: "base"
message_type { name: "Base" }
"""

_HOLDER = """
name: "holder.proto"
package: "examples"
syntax: "proto3"
dependency: "base.proto"
message_type {
  name: "Holder"
  field { name: "count" number: 1 label: LABEL_OPTIONAL type: TYPE_INT32 }
  field { name: "flag" number: 2 label: LABEL_OPTIONAL type: TYPE_BOOL }
  field { name: "data" number: 3 label: LABEL_OPTIONAL type: TYPE_BYTES }
  field { name: "ratio" number: 4 label: LABEL_OPTIONAL type: TYPE_DOUBLE }
  field { name: "delta" number: 5 label: LABEL_OPTIONAL type: TYPE_SINT64 }
  field {
    name: "child" number: 6 label: LABEL_OPTIONAL type: TYPE_MESSAGE
    type_name: ".examples.Holder"
  }
  field {
    name: "children" number: 7 label: LABEL_REPEATED type: TYPE_MESSAGE
    type_name: ".examples.Holder"
  }
  field { name: "numbers" number: 8 label: LABEL_REPEATED type: TYPE_INT32 }
  field {
    name: "kind" number: 9 label: LABEL_OPTIONAL type: TYPE_ENUM
    type_name: ".examples.Holder.Kind"
  }
  field {
    name: "kinds" number: 10 label: LABEL_REPEATED type: TYPE_ENUM
    type_name: ".examples.Holder.Kind"
  }
  field {
    name: "by_name" number: 11 label: LABEL_REPEATED type: TYPE_MESSAGE
    type_name: ".examples.Holder.ByNameEntry"
  }
  field {
    name: "counts" number: 12 label: LABEL_REPEATED type: TYPE_MESSAGE
    type_name: ".examples.Holder.CountsEntry"
  }
  field {
    name: "base" number: 13 label: LABEL_OPTIONAL type: TYPE_MESSAGE
    type_name: ".base.Base"
  }
  nested_type {
    name: "ByNameEntry"
    field { name: "key" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING }
    field {
      name: "value" number: 2 label: LABEL_OPTIONAL type: TYPE_MESSAGE
      type_name: ".examples.Holder"
    }
    options { map_entry: true }
  }
  nested_type {
    name: "CountsEntry"
    field { name: "key" number: 1 label: LABEL_OPTIONAL type: TYPE_STRING }
    field { name: "value" number: 2 label: LABEL_OPTIONAL type: TYPE_INT32 }
    options { map_entry: true }
  }
  enum_type { name: "Kind" value { name: "NONE" number: 0 } }
}
"""


class TestTypeMapper(unittest.TestCase):
    """Tests for TypeMapper."""

    def setUp(self) -> None:
        self.base = SchemaFile(
            text_format.Parse(_BASE, descriptor_pb2.FileDescriptorProto())
        )
        self.holder_file = SchemaFile(
            text_format.Parse(_HOLDER, descriptor_pb2.FileDescriptorProto())
        )
        self.packages = PackageRegistry()
        self.packages.register('examples', self.holder_file)
        self.packages.register('base', self.base)
        self.type_names = TypeNameMap([self.base, self.holder_file])

        self.holder = self.holder_file.messages()[0]
        self.fields = {field.name: field for field in self.holder.fields()}

    def _js_type(self, field_name: str, pkg_prefix: str = ''):
        mapper = TypeMapper(
            self.type_names, self.packages, self.holder_file, pkg_prefix
        )
        return mapper.js_type(self.holder, self.fields[field_name])

    def test_scalars(self) -> None:
        self.assertEqual(self._js_type('count')[:3], ('number', '', 'varint'))
        self.assertEqual(self._js_type('flag')[:3], ('boolean', '', 'varint'))
        self.assertEqual(self._js_type('data')[:3], ('string', '', 'bytes'))
        self.assertEqual(self._js_type('ratio')[:3], ('number', '', 'fixed64'))
        self.assertEqual(
            self._js_type('delta')[:3], ('number', '', 'zigzag64')
        )
        self.assertIsNone(self._js_type('count').target)

    def test_message(self) -> None:
        js_type = self._js_type('child')
        self.assertEqual(js_type.typ, 'examples.Holder')
        self.assertEqual(js_type.wire, 'bytes')
        self.assertIs(js_type.target, self.holder)

    def test_repeated_message(self) -> None:
        js_type = self._js_type('children')
        self.assertEqual(js_type.typ, 'Array.<examples.Holder>')
        self.assertEqual(js_type.element_type, 'examples.Holder')

    def test_repeated_scalar(self) -> None:
        self.assertEqual(self._js_type('numbers').typ, 'Array.<number>')

    def test_enum(self) -> None:
        js_type = self._js_type('kind')
        self.assertEqual(js_type.typ, 'examples.Holder_Kind')
        self.assertEqual(js_type.wire, 'varint')
        self.assertEqual(self._js_type('kinds').typ, 'Array.<number>')

    def test_map_with_message_values(self) -> None:
        js_type = self._js_type('by_name')
        self.assertTrue(js_type.is_map)
        self.assertEqual(js_type.typ, 'Object.<string, examples.Holder>')
        self.assertEqual(js_type.element_type, 'examples.Holder')
        self.assertIs(js_type.target, self.holder)

    def test_map_with_scalar_values(self) -> None:
        js_type = self._js_type('counts')
        self.assertTrue(js_type.is_map)
        self.assertEqual(js_type.typ, 'Object.<string, number>')
        self.assertEqual(js_type.element_type, '')
        self.assertIsNone(js_type.target)

    def test_other_namespace(self) -> None:
        self.assertEqual(self._js_type('base').typ, 'base.Base')

    def test_prefix(self) -> None:
        self.assertEqual(
            self._js_type('child', 'jspb').typ, 'jspb.examples.Holder'
        )
        self.assertEqual(self._js_type('base', 'jspb').typ, 'jspb.base.Base')

    def test_unknown_type(self) -> None:
        mapper = TypeMapper(self.type_names, self.packages, self.holder_file)
        broken = SimpleNamespace(name='broken', type=99)
        with self.assertRaises(GeneratorFailure) as context:
            mapper.js_type(self.holder, broken)  # type: ignore[arg-type]
        self.assertIn('Holder.broken', str(context.exception))

    def test_field_predicates(self) -> None:
        self.assertTrue(is_repeated(self.fields['numbers']))
        self.assertFalse(is_repeated(self.fields['count']))
        self.assertTrue(is_message(self.fields['child']))
        self.assertFalse(is_message(self.fields['kind']))


if __name__ == '__main__':
    unittest.main()
