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
"""Generation of the accessors of oneof groups in a message.

Fields of a oneof share a single accessor pair in the generated message
instead of a getter and setter each. For every member field a small wrapper
type is generated; the oneof's getter returns the wrapper of the member present
in the message's JSON data, and its setter accepts any of the wrappers.

The union type listing the wrappers is declared where the oneof's first member
is declared, but the wrapper names are only known once every member has been
seen, so the listing is written to a slot and filled in by finish().
"""

from dataclasses import dataclass, field as dataclass_field

from google.protobuf import descriptor_pb2

from pw_jspb import comments
from pw_jspb.identifiers import COLLISION_SUFFIX, NameAllocator
from pw_jspb.naming import (
    camel_case,
    camel_case_slice,
    join_namespace,
    parameter_name,
)
from pw_jspb.output_file import OutputFile
from pw_jspb.proto_tree import MessageNode
from pw_jspb.types import JsType, is_message


@dataclass
class OneofMember:
    field: descriptor_pb2.FieldDescriptorProto
    field_name: str
    wrapper_name: str
    js_type: JsType


@dataclass
class OneofGroup:
    """A oneof declared in a message, and the members seen so far."""

    index: int
    proto_name: str
    name: str
    getter_name: str
    setter_name: str
    members: list[OneofMember] = dataclass_field(default_factory=list)

    def slot_name(self) -> str:
        return f'oneof {self.index}'


class OneofSynthesizer:
    """Collects the oneof members of one message and generates their code."""

    def __init__(
        self,
        message: MessageNode,
        message_name: str,
        namespace: str,
        names: NameAllocator,
        output: OutputFile,
    ):
        """Creates a synthesizer for a message's oneofs.

        Args:
          message: the message whose fields are generated
          message_name: fully-qualified Closure name of the message
          namespace: the qualified namespace of the generated types
          names: the member names allocated so far for the message
          output: the file the message is written to
        """
        self._message = message
        self._message_name = message_name
        self._namespace = namespace
        self._names = names
        self._output = output
        self._groups: dict[int, OneofGroup] = {}
        self._members: list[OneofMember] = []

    def groups(self) -> list[OneofGroup]:
        return [self._groups[index] for index in sorted(self._groups)]

    def wrapper_names(self) -> list[str]:
        """Fully-qualified names of all wrapper types, in field order."""
        return [self._qualified(m.wrapper_name) for m in self._members]

    def add_member(
        self,
        field: descriptor_pb2.FieldDescriptorProto,
        field_name: str,
        js_type: JsType,
    ) -> None:
        """Records a oneof member, declaring its oneof on first encounter."""
        group = self._groups.get(field.oneof_index)
        if group is None:
            group = self._declare_group(field.oneof_index)

        member = OneofMember(
            field, field_name, self._wrapper_name(field_name), js_type
        )
        group.members.append(member)
        self._members.append(member)

    def _declare_group(self, index: int) -> OneofGroup:
        proto_name = self._message.proto().oneof_decl[index].name
        name, getter, setter = self._names.alloc(
            camel_case(proto_name),
            'get' + camel_case(proto_name),
            'set' + camel_case(proto_name),
        )
        group = OneofGroup(index, proto_name, name, getter, setter)
        self._groups[index] = group

        self._output.write_line('/**')
        path = comments.join_path(
            self._message.path(), comments.MESSAGE_ONEOF_PATH, index
        )
        comment_lines = self._message.file().comments().lines(path)
        for line in comment_lines:
            self._output.write_line(' * ', line)
        if comment_lines:
            self._output.write_line(' *')
        self._output.write_line(
            ' * Types that are valid to be assigned to ', name, ':'
        )
        self._output.slot(group.slot_name())
        self._output.write_line(' */')
        self._output.write_line(self._union_name(group), ';')
        self._output.write_line()
        return group

    def _wrapper_name(self, field_name: str) -> str:
        """Returns the wrapper type name of a member field.

        The name may collide with a message or enum nested in this message, in
        which case it is suffixed until it no longer does.
        """
        nested_names = {
            camel_case_slice(node.type_name())
            for node in [*self._message.nested(), *self._message.enums()]
        }
        name = camel_case_slice(self._message.type_name()) + '_' + field_name
        while name in nested_names:
            name += COLLISION_SUFFIX
        return name

    def _qualified(self, name: str) -> str:
        return join_namespace(self._namespace, name)

    def _union_name(self, group: OneofGroup) -> str:
        return f'{self._message_name}.{group.name}'

    def finish(self) -> None:
        """Fills in the union listings and generates the oneof accessors."""
        for group in self.groups():
            wrappers = [self._qualified(m.wrapper_name) for m in group.members]
            self._output.fill(
                group.slot_name(),
                *(f' *   {wrapper}' for wrapper in wrappers),
                f' * @typedef {{{"|".join(wrappers)}}}',
            )

        for group in self.groups():
            for member in group.members:
                self._generate_wrapper(member)

        for group in self.groups():
            self._generate_getter(group)
            self._generate_setter(group)

    def _generate_wrapper(self, member: OneofMember) -> None:
        name = member.field.name
        param = parameter_name(name)

        self._output.write_line('/**')
        self._output.write_line(
            f' * @param {{{member.js_type.typ}}} {param} The {name}.'
        )
        self._output.write_line(' * @constructor')
        self._output.write_line(' */')
        self._output.write_line(
            f'{self._qualified(member.wrapper_name)} = function({param}) {{'
        )
        with self._output.indent():
            self._output.write_line(f'/** @type {{{member.js_type.typ}}} */')
            self._output.write_line(f'this.{name} = {param};')
        self._output.write_line('};')
        self._output.write_line()

    def _generate_getter(self, group: OneofGroup) -> None:
        self._output.write_line('/**')
        self._output.write_line(
            f' * @return {{{self._union_name(group)}|undefined}} '
            f'The member of {group.proto_name} that is set.'
        )
        self._output.write_line(' */')
        self._output.write_line(
            f'{self._message_name}.prototype.{group.getter_name} = '
            'function() {'
        )
        with self._output.indent():
            self._output.write_line('var v;')
            for member in group.members:
                value = 'v'
                if is_message(member.field):
                    value = f'new {member.js_type.typ}(v)'

                self._output.write_line(
                    f'v = this.jsonData_["{member.field.name}"];'
                )
                self._output.write_line('if (v != null) {')
                with self._output.indent():
                    self._output.write_line(
                        f'return new {self._qualified(member.wrapper_name)}'
                        f'({value});'
                    )
                self._output.write_line('}')
            self._output.write_line('return undefined;')
        self._output.write_line('};')
        self._output.write_line()

    def _generate_setter(self, group: OneofGroup) -> None:
        self._output.write_line('/**')
        self._output.write_line(
            f' * @param {{{self._union_name(group)}|undefined}} value '
            f'The member of {group.proto_name} to set.'
        )
        self._output.write_line(' */')
        self._output.write_line(
            f'{self._message_name}.prototype.{group.setter_name} = '
            'function(value) {'
        )
        with self._output.indent():
            for member in group.members:
                self._output.write_line(
                    f'delete this.jsonData_["{member.field.name}"];'
                )

            for i, member in enumerate(group.members):
                name = member.field.name
                value = f'value.{name}'
                if is_message(member.field):
                    value += '.getJsonData()'

                keyword = 'if' if i == 0 else '} else if'
                self._output.write_line(
                    f'{keyword} (value instanceof '
                    f'{self._qualified(member.wrapper_name)}) {{'
                )
                with self._output.indent():
                    self._output.write_line(
                        f'this.jsonData_["{name}"] = {value};'
                    )
            if group.members:
                self._output.write_line('}')
        self._output.write_line('};')
        self._output.write_line()
