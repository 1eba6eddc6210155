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
"""In-memory object graph of the messages and enums in .proto files.

Every message and enum in a FileDescriptorProto is wrapped in a node that knows
its parent, its children, the file that defines it and its location within
that file. Types that a file makes visible through a public import are
represented by ImportedNode proxies, so that all of them can be treated
uniformly when resolving type names.
"""

import abc
import enum
import logging
from typing import Iterable, Mapping

from google.protobuf import descriptor_pb2

from pw_jspb import comments
from pw_jspb.errors import GeneratorFailure
from pw_jspb.naming import camel_case, camel_case_slice

_LOG = logging.getLogger(__name__)

_FieldDescriptor = descriptor_pb2.FieldDescriptorProto


class ProtoNode(abc.ABC):
    """A message, enum or publicly imported type.

    The three node kinds share the contract used for type resolution: a type
    name, the file the name is visible in and that file's namespace.
    """

    class Type(enum.Enum):
        """The kind of a ProtoNode.

        MESSAGE is a message defined in its file.
        ENUM is an enum defined in its file.
        IMPORTED is a type defined elsewhere and re-exported by its file
        through a public import. It is referenced but never defined.
        """

        MESSAGE = 1
        ENUM = 2
        IMPORTED = 3

    @abc.abstractmethod
    def type(self) -> 'ProtoNode.Type':
        """The kind of the node."""

    @abc.abstractmethod
    def type_name(self) -> list[str]:
        """The elements of the dotted type name, without the package."""

    @abc.abstractmethod
    def file(self) -> 'SchemaFile':
        """The file in which this type is visible."""

    def package_name(self, packages) -> str:
        """The namespace identifier assigned to this node's file."""
        return packages.package_of(self.file())

    def qualified_name(self) -> str:
        """The fully-qualified name of the type as written in descriptors."""
        parts = self.type_name()
        package = self.file().package()
        if package:
            parts = [package, *parts]
        return '.' + '.'.join(parts)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.qualified_name()!r})'


class MessageNode(ProtoNode):
    """A message defined in a .proto file."""

    def __init__(
        self,
        proto: descriptor_pb2.DescriptorProto,
        parent: 'MessageNode | None',
        schema_file: 'SchemaFile',
        index: int,
    ):
        self._proto = proto
        self._parent = parent
        self._file = schema_file
        self._index = index
        self._nested: list[MessageNode] = []
        self._enums: list[EnumNode] = []
        self._type_name: list[str] | None = None

        if parent is None:
            self._path = comments.join_path(comments.MESSAGE_PATH, index)
        else:
            self._path = comments.join_path(
                parent.path(), comments.MESSAGE_MESSAGE_PATH, index
            )

        # A group is only distinguishable from a nested message by the
        # TYPE_GROUP field in the containing message that refers to it.
        self._group = parent is not None and any(
            field.type == _FieldDescriptor.TYPE_GROUP
            and field.type_name == self.qualified_name()
            for field in parent.fields()
        )

    def type(self) -> ProtoNode.Type:
        return ProtoNode.Type.MESSAGE

    def proto(self) -> descriptor_pb2.DescriptorProto:
        return self._proto

    def name(self) -> str:
        return self._proto.name

    def type_name(self) -> list[str]:
        if self._type_name is None:
            names = []
            node: MessageNode | None = self
            while node is not None:
                names.append(node.name())
                node = node.parent()
            self._type_name = list(reversed(names))
        return list(self._type_name)

    def file(self) -> 'SchemaFile':
        return self._file

    def parent(self) -> 'MessageNode | None':
        return self._parent

    def nested(self) -> list['MessageNode']:
        return list(self._nested)

    def enums(self) -> list['EnumNode']:
        return list(self._enums)

    def index(self) -> int:
        return self._index

    def path(self) -> str:
        """The SourceCodeInfo path of the message."""
        return self._path

    def fields(self) -> list[descriptor_pb2.FieldDescriptorProto]:
        return list(self._proto.field)

    def is_group(self) -> bool:
        return self._group

    def is_map_entry(self) -> bool:
        return self._proto.options.map_entry

    def is_deprecated(self) -> bool:
        return self._proto.options.deprecated


class EnumNode(ProtoNode):
    """An enum defined at the top level of a file or within a message."""

    def __init__(
        self,
        proto: descriptor_pb2.EnumDescriptorProto,
        parent: MessageNode | None,
        schema_file: 'SchemaFile',
        index: int,
    ):
        self._proto = proto
        self._parent = parent
        self._file = schema_file
        self._index = index

        if parent is None:
            self._path = comments.join_path(comments.ENUM_PATH, index)
        else:
            self._path = comments.join_path(
                parent.path(), comments.MESSAGE_ENUM_PATH, index
            )

    def type(self) -> ProtoNode.Type:
        return ProtoNode.Type.ENUM

    def proto(self) -> descriptor_pb2.EnumDescriptorProto:
        return self._proto

    def name(self) -> str:
        return self._proto.name

    def type_name(self) -> list[str]:
        if self._parent is None:
            return [self.name()]
        return [*self._parent.type_name(), self.name()]

    def file(self) -> 'SchemaFile':
        return self._file

    def parent(self) -> MessageNode | None:
        return self._parent

    def index(self) -> int:
        return self._index

    def path(self) -> str:
        return self._path

    def values(self) -> list[tuple[str, int]]:
        return [(value.name, value.number) for value in self._proto.value]

    def prefix(self) -> str:
        """The prefix of the generated constant names of this enum's values.

        Values are namespaced by the enum's container rather than the enum
        itself: the values of Foo.Bar are named Foo_VALUE, not Foo_Bar_VALUE.
        """
        if self._parent is None:
            return camel_case(self.name()) + '_'
        return camel_case_slice(self.type_name()[:-1]) + '_'

    def integer_value(self, name: str) -> int:
        for value_name, number in self.values():
            if value_name == name:
                return number
        raise GeneratorFailure(
            'cannot find value for enum constant', name, 'in', self.name()
        )


class ImportedNode(ProtoNode):
    """A type made visible in a file through a public import."""

    def __init__(self, schema_file: 'SchemaFile', target: ProtoNode):
        self._file = schema_file
        self._target = target

    def type(self) -> ProtoNode.Type:
        return ProtoNode.Type.IMPORTED

    def type_name(self) -> list[str]:
        return self._target.type_name()

    def file(self) -> 'SchemaFile':
        return self._file

    def target(self) -> ProtoNode:
        """The node that actually defines the type."""
        return self._target

    def qualified_name(self) -> str:
        return self._target.qualified_name()

    def __repr__(self) -> str:
        return (
            f'ImportedNode({self.qualified_name()!r}, '
            f'via {self._file.name()!r})'
        )


class SchemaFile:
    """A .proto file and every message and enum defined within it."""

    def __init__(self, proto: descriptor_pb2.FileDescriptorProto):
        self._proto = proto
        self._messages: list[MessageNode] = []
        self._enums: list[EnumNode] = []
        self._imported: list[ImportedNode] = []
        self._comments = comments.CommentIndex(proto)
        self._index: int | None = None

        # Messages must be wrapped before enums, which refer to their parents.
        for i, message in enumerate(proto.message_type):
            self._wrap_message(message, None, i)
        _link_nested_messages(self._messages)

        for i, proto_enum in enumerate(proto.enum_type):
            self._enums.append(EnumNode(proto_enum, None, self, i))
        # Enums within nested messages are listed after the top-level enums,
        # in the order of their containing messages.
        for message in self._messages:
            for i, proto_enum in enumerate(message.proto().enum_type):
                self._enums.append(EnumNode(proto_enum, message, self, i))
        _link_nested_enums(self._messages, self._enums)

    def _wrap_message(
        self,
        proto: descriptor_pb2.DescriptorProto,
        parent: MessageNode | None,
        index: int,
    ) -> None:
        node = MessageNode(proto, parent, self, index)
        self._messages.append(node)
        for i, nested in enumerate(proto.nested_type):
            self._wrap_message(nested, node, i)

    def proto(self) -> descriptor_pb2.FileDescriptorProto:
        return self._proto

    def name(self) -> str:
        return self._proto.name

    def package(self) -> str:
        return self._proto.package

    def dependencies(self) -> list[str]:
        return list(self._proto.dependency)

    def public_dependencies(self) -> list[str]:
        dependencies = self._proto.dependency
        return [dependencies[i] for i in self._proto.public_dependency]

    def proto3(self) -> bool:
        return self._proto.syntax == 'proto3'

    def messages(self) -> list[MessageNode]:
        """All messages in the file, nested messages included, in pre-order."""
        return list(self._messages)

    def enums(self) -> list[EnumNode]:
        """All enums in the file, top-level enums first."""
        return list(self._enums)

    def imported(self) -> list[ImportedNode]:
        """Types made visible in this file through its public imports."""
        return list(self._imported)

    def comments(self) -> comments.CommentIndex:
        return self._comments

    def index(self) -> int | None:
        """The position of this file among the files to generate, if any."""
        return self._index

    def set_index(self, index: int) -> None:
        self._index = index

    def link_imported(self, files_by_name: Mapping[str, 'SchemaFile']) -> None:
        """Creates proxies for every type this file publicly re-exports."""
        self._imported = [
            ImportedNode(self, node)
            for node in _publicly_imported(self, files_by_name, set())
        ]

    def __repr__(self) -> str:
        return f'SchemaFile({self.name()!r})'


def _link_nested_messages(messages: list[MessageNode]) -> None:
    # pylint: disable=protected-access
    for message in messages:
        message._nested = [
            nested for nested in messages if nested.parent() is message
        ]
        if len(message._nested) != len(message.proto().nested_type):
            raise GeneratorFailure(
                'internal error: nesting failure for', message.name()
            )
    # pylint: enable=protected-access


def _link_nested_enums(
    messages: list[MessageNode], enums: list[EnumNode]
) -> None:
    # pylint: disable=protected-access
    for message in messages:
        message._enums = [
            proto_enum for proto_enum in enums if proto_enum.parent() is message
        ]
        if len(message._enums) != len(message.proto().enum_type):
            raise GeneratorFailure(
                'internal error: enum nesting failure for', message.name()
            )
    # pylint: enable=protected-access


def _publicly_imported(
    schema_file: SchemaFile,
    files_by_name: Mapping[str, SchemaFile],
    visited: set[str],
) -> Iterable[ProtoNode]:
    """Yields the defining nodes of all types publicly imported by a file.

    Public imports are followed transitively, so a file publicly importing a
    file that itself publicly imports another re-exports both.
    """
    visited.add(schema_file.name())

    for dependency_name in schema_file.public_dependencies():
        dependency = files_by_name.get(dependency_name)
        if dependency is None:
            raise GeneratorFailure(
                'could not find file named', dependency_name
            )
        if dependency.name() in visited:
            continue

        _LOG.debug(
            '%s publicly imports %s', schema_file.name(), dependency.name()
        )
        for message in dependency.messages():
            # Map entries are an implementation detail of map fields.
            if not message.is_map_entry():
                yield message
        yield from dependency.enums()
        yield from _publicly_imported(dependency, files_by_name, visited)
