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
"""This module defines the generated code for jspb JavaScript classes.

Every message becomes a Closure constructor wrapping a JSON object, with a
getter and setter for each of its fields, and every enum becomes an object
mapping constant names to numbers. The header of each file provides the types
defined in it and requires the types it uses from other files; as both are
only known after the rest of the file has been generated, the header is
generated last and prepended to the file.
"""

import json
import logging
from typing import Iterable

from google.protobuf import descriptor_pb2

from pw_jspb import comments
from pw_jspb.errors import PLUGIN_NAME, GeneratorFailure
from pw_jspb.identifiers import NameAllocator
from pw_jspb.naming import (
    base_name,
    camel_case,
    join_namespace,
    js_file_name,
    lower_first,
    parameter_name,
)
from pw_jspb.oneof import OneofSynthesizer
from pw_jspb.options import GeneratorOptions
from pw_jspb.output_file import OutputFile
from pw_jspb.packages import PackageRegistry
from pw_jspb.proto_tree import (
    EnumNode,
    ImportedNode,
    MessageNode,
    ProtoNode,
    SchemaFile,
)
from pw_jspb.resolver import TypeNameMap
from pw_jspb.types import JsType, TypeMapper, is_message, is_repeated

_LOG = logging.getLogger(__name__)

_FieldDescriptor = descriptor_pb2.FieldDescriptorProto

# Closure library namespaces used by generated iteration code.
GOOG_ARRAY = 'goog.array'
GOOG_OBJECT = 'goog.object'

# Members every generated message defines for itself. Fields are renamed
# rather than shadow them.
_RESERVED_MEMBERS = ('JsonData', 'getJsonData', 'setJsonData')

_FLOAT_DEFAULTS = {
    'inf': 'Infinity',
    '-inf': '-Infinity',
    'nan': 'NaN',
}


def _declared_package(schema_file: SchemaFile) -> str:
    if not schema_file.package():
        raise GeneratorFailure(
            'no package clause in proto file:', schema_file.name()
        )
    return schema_file.package()


def _defining_node(node: ProtoNode) -> ProtoNode:
    if isinstance(node, ImportedNode):
        return node.target()
    return node


def _enum_node(
    field: descriptor_pb2.FieldDescriptorProto, js_type: JsType
) -> EnumNode:
    node = None if js_type.target is None else _defining_node(js_type.target)
    if not isinstance(node, EnumNode):
        raise GeneratorFailure(
            'enum field', field.name, 'refers to non-enum type', field.type_name
        )
    return node


class Generator:
    """Generates jspb code for the files of one protoc invocation.

    The files pass through a fixed sequence of phases. Every input file is
    wrapped into a node graph, assigned a namespace and entered into the type
    name map by link(). generate_all_files() then generates code for every
    file, so that inconsistencies in dependencies are detected too, but only
    keeps the output of the files to generate.
    """

    def __init__(
        self,
        proto_files: Iterable[descriptor_pb2.FileDescriptorProto],
        files_to_generate: Iterable[str],
        options: GeneratorOptions,
    ):
        self._proto_files = list(proto_files)
        self._files_to_generate = list(files_to_generate)
        self._options = options

        self._files: list[SchemaFile] = []
        self._gen_files: list[SchemaFile] = []
        self._packages = PackageRegistry()
        self._type_names: TypeNameMap | None = None
        self._package_name = ''

    def packages(self) -> PackageRegistry:
        return self._packages

    def type_names(self) -> TypeNameMap:
        if self._type_names is None:
            raise GeneratorFailure('internal error: types are not linked')
        return self._type_names

    def package_name(self) -> str:
        """The namespace shared by all of the files to generate."""
        return self._package_name

    def files(self) -> list[SchemaFile]:
        return list(self._files)

    def link(self) -> None:
        """Builds the node graph, namespaces and type name map."""
        self.wrap_types()
        self.set_package_names()
        self.build_type_name_map()

    def wrap_types(self) -> None:
        """Wraps every input file and finds the files to generate."""
        if not self._files_to_generate:
            raise GeneratorFailure('no files to generate')

        self._files = [SchemaFile(proto) for proto in self._proto_files]

        files_by_name = {f.name(): f for f in self._files}
        for schema_file in self._files:
            schema_file.link_imported(files_by_name)

        self._gen_files = []
        for i, file_name in enumerate(self._files_to_generate):
            schema_file = files_by_name.get(file_name)
            if schema_file is None:
                raise GeneratorFailure('could not find file named', file_name)
            schema_file.set_index(i)
            self._gen_files.append(schema_file)

    def set_package_names(self) -> None:
        """Assigns a unique namespace to every input file.

        The files to generate must all declare the same package, which they
        share as their namespace. Every other file is named after its package,
        or after its file name if it has none.
        """
        package = _declared_package(self._gen_files[0])
        for schema_file in self._gen_files:
            this_package = _declared_package(schema_file)
            if this_package != package:
                raise GeneratorFailure(
                    'inconsistent package names:', this_package, package
                )

        self._package_name = self._packages.register(
            package, self._gen_files[0]
        )

        for schema_file in self._files:
            if schema_file in self._gen_files:
                self._packages.assign(schema_file, self._package_name)
                continue

            # Files without a package are named after their file.
            dependency_package = schema_file.package() or base_name(
                schema_file.name()
            )
            self._packages.register(dependency_package, schema_file)

    def build_type_name_map(self) -> None:
        self._type_names = TypeNameMap(self._files)
        _LOG.debug('Indexed %d types', len(self._type_names))

    def generate_all_files(self) -> list[OutputFile]:
        """Generates code for every file; returns the files to generate."""
        outputs = []
        for schema_file in self._files:
            output = FileGenerator(
                schema_file, self.type_names(), self._packages, self._options
            ).generate()

            if schema_file.index() is None:
                continue

            _LOG.debug('Generated %s', output.name())
            outputs.append(output)
        return outputs


class FileGenerator:
    """Generates the JavaScript code for a single .proto file."""

    def __init__(
        self,
        schema_file: SchemaFile,
        type_names: TypeNameMap,
        packages: PackageRegistry,
        options: GeneratorOptions,
    ):
        self._file = schema_file
        self._types = TypeMapper(
            type_names, packages, schema_file, options.pkg_prefix
        )
        self._namespace = join_namespace(
            options.pkg_prefix, self._types.namespace()
        )
        self._output = OutputFile(js_file_name(schema_file.name()))

        self._provides: list[str] = []
        # Used as an insertion-ordered set.
        self._requires: dict[str, None] = {}
        self._utilities: set[str] = set()

    def generate(self) -> OutputFile:
        """Generates the file's body, then prepends its header."""
        for proto_enum in self._file.enums():
            self._generate_enum(proto_enum)

        for message in self._file.messages():
            # Map entries are represented as plain objects.
            if message.is_map_entry():
                continue
            self._generate_message(message)

        for imported in self._file.imported():
            self._generate_alias(imported)

        header = OutputFile(self._output.name())
        self._generate_header(header)
        self._generate_provides(header)
        header.write_line()
        self._generate_requires(header)

        self._output.prepend(header)
        return self._output

    def _print_comments(self, path: str) -> None:
        """Writes the source comments at path into a JSDoc block."""
        for line in self._file.comments().lines(path):
            self._output.write_line(' * ', line)

    def _require(self, node: ProtoNode) -> None:
        if node.file() is not self._file:
            self._requires.setdefault(self._types.qualified_name(node))

    def _generate_header(self, header: OutputFile) -> None:
        header.write_line('// Code generated by ', PLUGIN_NAME, '.')
        header.write_line('// source: ', self._file.name())
        header.write_line('// DO NOT EDIT!')
        header.write_line()

        if self._file.index() == 0:
            header.write_line('/**')
            header.write_line(
                ' * @fileoverview Generated protocol buffers in Javascript.'
            )
            header.write_line(' */')
            header.write_line()

    def _generate_provides(self, header: OutputFile) -> None:
        for name in self._provides:
            header.write_line(f"goog.provide('{name}');")

    def _generate_requires(self, header: OutputFile) -> None:
        names = [*self._requires, *sorted(self._utilities)]
        if not names:
            return

        for name in names:
            header.write_line(f"goog.require('{name}');")
        header.write_line()

    def _generate_alias(self, imported: ImportedNode) -> None:
        """Re-exports a publicly imported type under this file's namespace.

        Files referring to the type through this file's public import require
        it by the alias name.
        """
        alias = self._types.qualified_name(imported)
        if alias in self._provides:
            return
        self._provides.append(alias)

        target = imported.target()
        self._require(target)

        self._output.write_line('/** @const */')
        self._output.write_line(
            alias, ' = ', self._types.qualified_name(target), ';'
        )
        self._output.write_line()

    def _generate_enum(self, proto_enum: EnumNode) -> None:
        name = self._types.qualified_name(proto_enum)
        self._provides.append(name)

        self._output.write_line('/**')
        self._print_comments(proto_enum.path())
        self._output.write_line(' * @enum {number}')
        self._output.write_line(' */')
        self._output.write_line(name, ' = {')

        values = proto_enum.values()
        with self._output.indent():
            for i, (value_name, number) in enumerate(values):
                separator = ',' if i < len(values) - 1 else ''
                self._output.write_line(
                    proto_enum.prefix(), value_name, ': ', number, separator
                )
        self._output.write_line('};')
        self._output.write_line()

    def _generate_message(self, message: MessageNode) -> None:
        name = self._types.qualified_name(message)
        self._provides.append(name)
        _LOG.debug('Generating message %s', name)

        names = NameAllocator(_RESERVED_MEMBERS)
        oneofs = OneofSynthesizer(
            message, name, self._namespace, names, self._output
        )

        self._output.write_line('/**')
        self._print_comments(message.path())
        if message.is_group():
            self._output.write_line(' * Encoded as a group on the wire.')
        self._output.write_line(' * @param {Object} jsonData The JSON data.')
        self._output.write_line(' * @constructor')
        if message.is_deprecated():
            self._output.write_line(' * @deprecated')
        self._output.write_line(' */')
        self._output.write_line(name, ' = function(jsonData) {')
        with self._output.indent():
            self._output.write_line('/**')
            self._output.write_line(' * @private {Object}')
            self._output.write_line(' */')
            self._output.write_line('this.jsonData_ = jsonData || {};')
        self._output.write_line('};')
        self._output.write_line()

        self._output.write_line('/**')
        self._output.write_line(' * @return {Object} The JSON data.')
        self._output.write_line(' */')
        self._output.write_line(name, '.prototype.getJsonData = function() {')
        with self._output.indent():
            self._output.write_line('return this.jsonData_;')
        self._output.write_line('};')
        self._output.write_line()

        for i, field in enumerate(message.fields()):
            # The field, getter and setter names are allocated together so
            # that a collision renames all three consistently.
            base = camel_case(field.name)
            field_name, getter, setter = names.alloc(
                base, 'get' + base, 'set' + base
            )
            js_type = self._types.js_type(message, field)
            if js_type.target is not None:
                self._require(js_type.target)

            if self._in_oneof(field):
                oneofs.add_member(field, field_name, js_type)
                continue

            # field_name is never JsonData; caches can't alias jsonData_.
            accessor = _FieldAccessor(
                message_name=name,
                field=field,
                path=comments.join_path(
                    message.path(), comments.MESSAGE_FIELD_PATH, i
                ),
                getter=getter,
                setter=setter,
                cache=f'this.{lower_first(field_name)}_',
                js_type=js_type,
                default=self._default_value(field, js_type),
            )
            self._generate_getter(accessor)
            self._generate_setter(accessor)

        oneofs.finish()
        self._provides.extend(oneofs.wrapper_names())

    def _in_oneof(self, field: descriptor_pb2.FieldDescriptorProto) -> bool:
        # proto3 optional fields are placed in a synthetic oneof of their own,
        # but are generated like any other field.
        if self._file.proto3() and field.proto3_optional:
            return False
        return field.HasField('oneof_index')

    def _default_value(
        self, field: descriptor_pb2.FieldDescriptorProto, js_type: JsType
    ) -> str:
        """Returns the JavaScript value a getter returns for an unset field."""
        if field.HasField('default_value'):
            return self._explicit_default(field, js_type)

        if js_type.is_map:
            return '{}'
        if js_type.typ == 'boolean':
            return 'false'
        if js_type.typ == 'string':
            return "''"
        if js_type.typ == 'number':
            return '0'
        if js_type.typ.startswith('Array.'):
            return '[]'
        if field.type == _FieldDescriptor.TYPE_ENUM:
            return str(self._first_enum_value(field, js_type))
        return 'undefined'

    def _first_enum_value(
        self, field: descriptor_pb2.FieldDescriptorProto, js_type: JsType
    ) -> int:
        # proto3 enums always start at zero; proto2 fields default to the first
        # declared value.
        if self._file.proto3():
            return 0
        values = _enum_node(field, js_type).values()
        return values[0][1] if values else 0

    def _explicit_default(
        self, field: descriptor_pb2.FieldDescriptorProto, js_type: JsType
    ) -> str:
        value = field.default_value

        if field.type == _FieldDescriptor.TYPE_ENUM:
            return str(_enum_node(field, js_type).integer_value(value))
        if field.type in (
            _FieldDescriptor.TYPE_STRING,
            _FieldDescriptor.TYPE_BYTES,
        ):
            return json.dumps(value)
        if field.type in (
            _FieldDescriptor.TYPE_FLOAT,
            _FieldDescriptor.TYPE_DOUBLE,
        ):
            return _FLOAT_DEFAULTS.get(value, value)
        return value

    def _write_doc(self, accessor: '_FieldAccessor', *lines: str) -> None:
        self._output.write_line('/**')
        self._print_comments(accessor.path)
        for line in lines:
            self._output.write_line(line)
        if accessor.field.options.deprecated:
            self._output.write_line(' * @deprecated')
        self._output.write_line(' */')

    def _generate_getter(self, accessor: '_FieldAccessor') -> None:
        field = accessor.field
        js_type = accessor.js_type

        self._write_doc(
            accessor,
            f' * @return {{{js_type.typ}}} The {field.name} field '
            f'({field.number}, {js_type.wire}).',
        )
        self._output.write_line(
            accessor.message_name,
            '.prototype.',
            accessor.getter,
            ' = function() {',
        )
        with self._output.indent():
            if js_type.is_map and js_type.element_type:
                self._generate_map_getter_body(accessor)
            elif not js_type.is_map and is_message(field):
                self._generate_message_getter_body(accessor)
            else:
                self._output.write_line(
                    f'var v = this.jsonData_["{field.name}"];'
                )
                self._output.write_line(
                    f'return v != null ? v : {accessor.default};'
                )
        self._output.write_line('};')
        self._output.write_line()

    def _generate_message_getter_body(self, accessor: '_FieldAccessor') -> None:
        field = accessor.field
        js_type = accessor.js_type
        cache = accessor.cache

        self._output.write_line(f'if ({cache}) {{')
        with self._output.indent():
            self._output.write_line(f'return {cache};')
        self._output.write_line('}')
        self._output.write_line(f'var v = this.jsonData_["{field.name}"];')
        self._output.write_line('if (v) {')
        with self._output.indent():
            self._output.write_line(f'/** @private {{{js_type.typ}}} */')
            if is_repeated(field):
                self._utilities.add(GOOG_ARRAY)
                self._output.write_line(f'{cache} = [];')
                self._output.write_line(
                    'goog.array.forEach(v, function(__item, __index) {'
                )
                with self._output.indent():
                    self._output.write_line(
                        f'{cache}.push(new {js_type.element_type}(__item));'
                    )
                self._output.write_line('}, this);')
            else:
                self._output.write_line(f'{cache} = new {js_type.typ}(v);')
            self._output.write_line(f'return {cache};')
        self._output.write_line('}')
        self._output.write_line(f'return {accessor.default};')

    def _generate_map_getter_body(self, accessor: '_FieldAccessor') -> None:
        field = accessor.field
        js_type = accessor.js_type
        cache = accessor.cache
        self._utilities.add(GOOG_OBJECT)

        self._output.write_line(f'if ({cache}) {{')
        with self._output.indent():
            self._output.write_line(f'return {cache};')
        self._output.write_line('}')
        self._output.write_line(f'var v = this.jsonData_["{field.name}"];')
        self._output.write_line('if (v) {')
        with self._output.indent():
            self._output.write_line(f'/** @private {{{js_type.typ}}} */')
            self._output.write_line(f'{cache} = {{}};')
            self._output.write_line(
                'goog.object.forEach(v, function(__value, __key) {'
            )
            with self._output.indent():
                self._output.write_line(
                    f'{cache}[__key] = new {js_type.element_type}(__value);'
                )
            self._output.write_line('}, this);')
            self._output.write_line(f'return {cache};')
        self._output.write_line('}')
        self._output.write_line(f'return {accessor.default};')

    def _generate_setter(self, accessor: '_FieldAccessor') -> None:
        field = accessor.field
        js_type = accessor.js_type
        param = parameter_name(field.name)
        key = f'this.jsonData_["{field.name}"]'

        self._write_doc(
            accessor, f' * @param {{{js_type.typ}}} {param} The {field.name}.'
        )
        self._output.write_line(
            accessor.message_name,
            '.prototype.',
            accessor.setter,
            ' = function(',
            param,
            ') {',
        )
        with self._output.indent():
            if js_type.is_map and js_type.element_type:
                self._utilities.add(GOOG_OBJECT)
                self._output.write_line('var __map = {};')
                self._output.write_line(
                    f'goog.object.forEach({param}, '
                    'function(__value, __key) {'
                )
                with self._output.indent():
                    self._output.write_line(
                        '__map[__key] = __value.getJsonData();'
                    )
                self._output.write_line('}, this);')
                self._output.write_line(f'{key} = __map;')
                self._output.write_line(f'{accessor.cache} = undefined;')
            elif not js_type.is_map and is_message(field):
                if is_repeated(field):
                    self._generate_array_setter_body(param, key)
                else:
                    self._output.write_line(f'{key} = {param}.getJsonData();')
                self._output.write_line(f'{accessor.cache} = undefined;')
            else:
                self._output.write_line(f'{key} = {param};')
        self._output.write_line('};')
        self._output.write_line()

    def _generate_array_setter_body(self, param: str, key: str) -> None:
        self._utilities.add(GOOG_ARRAY)

        self._output.write_line(f'if ({param}) {{')
        with self._output.indent():
            self._output.write_line('var __array = [];')
            self._output.write_line(
                f'goog.array.forEach({param}, function(__item, __index) {{'
            )
            with self._output.indent():
                self._output.write_line('__array.push(__item.getJsonData());')
            self._output.write_line('}, this);')
            self._output.write_line(f'{key} = __array;')
        self._output.write_line('} else {')
        with self._output.indent():
            self._output.write_line(f'{key} = [];')
        self._output.write_line('}')


class _FieldAccessor:
    """The names and types used by the getter and setter of a field."""

    def __init__(
        self,
        message_name: str,
        field: descriptor_pb2.FieldDescriptorProto,
        path: str,
        getter: str,
        setter: str,
        cache: str,
        js_type: JsType,
        default: str,
    ):
        self.message_name = message_name
        self.field = field
        self.path = path
        self.getter = getter
        self.setter = setter
        self.cache = cache
        self.js_type = js_type
        self.default = default


def generate(
    proto_files: Iterable[descriptor_pb2.FileDescriptorProto],
    files_to_generate: Iterable[str],
    options: GeneratorOptions,
) -> list[OutputFile]:
    """Generates jspb code for the requested files.

    Raises:
      CodegenError: the input is inconsistent.
    """
    generator = Generator(proto_files, files_to_generate, options)
    generator.link()
    return generator.generate_all_files()
