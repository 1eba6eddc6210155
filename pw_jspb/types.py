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
"""Mapping of proto field types to Closure type annotations and wire types."""

from typing import NamedTuple

from google.protobuf import descriptor_pb2

from pw_jspb.errors import GeneratorFailure
from pw_jspb.naming import camel_case_slice, join_namespace
from pw_jspb.packages import PackageRegistry
from pw_jspb.proto_tree import MessageNode, ProtoNode, SchemaFile
from pw_jspb.resolver import TypeNameMap

_FieldDescriptor = descriptor_pb2.FieldDescriptorProto

# Closure type and wire type of each scalar field type.
_SCALAR_TYPES: dict[int, tuple[str, str]] = {
    _FieldDescriptor.TYPE_DOUBLE: ('number', 'fixed64'),
    _FieldDescriptor.TYPE_FLOAT: ('number', 'fixed32'),
    _FieldDescriptor.TYPE_INT64: ('number', 'varint'),
    _FieldDescriptor.TYPE_UINT64: ('number', 'varint'),
    _FieldDescriptor.TYPE_INT32: ('number', 'varint'),
    _FieldDescriptor.TYPE_UINT32: ('number', 'varint'),
    _FieldDescriptor.TYPE_FIXED64: ('number', 'fixed64'),
    _FieldDescriptor.TYPE_FIXED32: ('number', 'fixed32'),
    _FieldDescriptor.TYPE_BOOL: ('boolean', 'varint'),
    _FieldDescriptor.TYPE_STRING: ('string', 'bytes'),
    _FieldDescriptor.TYPE_BYTES: ('string', 'bytes'),
    _FieldDescriptor.TYPE_SFIXED32: ('number', 'fixed32'),
    _FieldDescriptor.TYPE_SFIXED64: ('number', 'fixed64'),
    _FieldDescriptor.TYPE_SINT32: ('number', 'zigzag32'),
    _FieldDescriptor.TYPE_SINT64: ('number', 'zigzag64'),
}  # yapf: disable

_MESSAGE_TYPES = (_FieldDescriptor.TYPE_MESSAGE, _FieldDescriptor.TYPE_GROUP)


class JsType(NamedTuple):
    """The Closure type of a field.

    Attributes:
      typ: the type annotation of the field's getter and setter
      element_type: the wrapper type of each element, for repeated message
          fields and maps with message values; empty otherwise
      wire: the wire type of the field's values
      target: the resolved message or enum node, for non-scalar fields; the
          value type's node for maps
      is_map: whether the field is a map field
    """

    typ: str
    element_type: str
    wire: str
    target: ProtoNode | None = None
    is_map: bool = False


def is_repeated(field: descriptor_pb2.FieldDescriptorProto) -> bool:
    return field.label == _FieldDescriptor.LABEL_REPEATED


def is_message(field: descriptor_pb2.FieldDescriptorProto) -> bool:
    """True for fields holding messages, including legacy groups."""
    return field.type in _MESSAGE_TYPES


class TypeMapper:
    """Describes the generated types of fields referenced from one file."""

    def __init__(
        self,
        type_names: TypeNameMap,
        packages: PackageRegistry,
        current: SchemaFile,
        pkg_prefix: str = '',
    ):
        self._type_names = type_names
        self._packages = packages
        self._current = current
        self._namespace = packages.package_of(current)
        self._pkg_prefix = pkg_prefix

    def namespace(self) -> str:
        return self._namespace

    def object_named(self, type_name: str) -> ProtoNode:
        return self._type_names.object_named(type_name, self._current)

    def type_name(self, node: ProtoNode) -> str:
        """The printed name of a type relative to the current namespace.

        Types in the current namespace are named by their CamelCased type path
        alone; others are prefixed by their own namespace.
        """
        name = camel_case_slice(node.type_name())
        package = node.package_name(self._packages)
        if package == self._namespace:
            return name
        return f'{package}.{name}'

    def qualified_name(self, node: ProtoNode) -> str:
        """The fully-qualified Closure name of a type."""
        name = self.type_name(node)
        if node.package_name(self._packages) == self._namespace:
            return join_namespace(self._pkg_prefix, self._namespace, name)
        return join_namespace(self._pkg_prefix, name)

    def js_type(
        self,
        message: MessageNode,
        field: descriptor_pb2.FieldDescriptorProto,
    ) -> JsType:
        """Returns the Closure type of a field of a message.

        Raises:
          GeneratorFailure: the field's type is unknown.
        """
        target: ProtoNode | None = None

        if field.type in _SCALAR_TYPES:
            typ, wire = _SCALAR_TYPES[field.type]
        elif is_message(field):
            target = self.object_named(field.type_name)
            if _is_map_entry(target):
                return self._map_type(target)
            typ = self.qualified_name(target)
            if field.type == _FieldDescriptor.TYPE_GROUP:
                wire = 'group'
            else:
                wire = 'bytes'
        elif field.type == _FieldDescriptor.TYPE_ENUM:
            target = self.object_named(field.type_name)
            typ, wire = self.qualified_name(target), 'varint'
        else:
            raise GeneratorFailure(
                'unknown type for', f'{message.name()}.{field.name}'
            )

        if not is_repeated(field):
            return JsType(typ, '', wire, target)

        if is_message(field):
            return JsType(f'Array.<{typ}>', typ, wire, target)
        if field.type == _FieldDescriptor.TYPE_ENUM:
            return JsType('Array.<number>', '', wire, target)
        return JsType(f'Array.<{typ}>', '', wire, target)

    def _map_type(self, entry: MessageNode) -> JsType:
        key_field, value_field = entry.fields()[:2]
        key_type = self.js_type(entry, key_field)
        value_type = self.js_type(entry, value_field)

        element_type = value_type.typ if is_message(value_field) else ''
        return JsType(
            f'Object.<{key_type.typ}, {value_type.typ}>',
            element_type,
            'bytes',
            value_type.target,
            is_map=True,
        )


def _is_map_entry(node: ProtoNode) -> bool:
    return isinstance(node, MessageNode) and node.is_map_entry()
