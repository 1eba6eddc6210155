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
"""Resolution of fully-qualified type names across all input files."""

import logging
from typing import Iterable

from pw_jspb.errors import GeneratorFailure
from pw_jspb.naming import dotted_slice
from pw_jspb.proto_tree import ProtoNode, SchemaFile

_LOG = logging.getLogger(__name__)


class TypeNameMap:
    """Maps the fully-qualified names used in descriptors to their nodes.

    The keys are names as they appear in the input data, with a leading period:
    '.pkg.Outer.Inner', or '.Outer.Inner' for a file without a package. The map
    covers every input file, not only the ones being generated, as a generated
    file may refer to a type defined in any of its transitive dependencies.
    """

    def __init__(self, files: Iterable[SchemaFile]):
        self._files_by_name: dict[str, SchemaFile] = {}
        self._objects: dict[str, ProtoNode] = {}

        for schema_file in files:
            self._files_by_name[schema_file.name()] = schema_file

            dotted_package = '.' + schema_file.package()
            if dotted_package != '.':
                dotted_package += '.'

            for proto_enum in schema_file.enums():
                name = dotted_package + dotted_slice(proto_enum.type_name())
                self._objects[name] = proto_enum
            for message in schema_file.messages():
                name = dotted_package + dotted_slice(message.type_name())
                self._objects[name] = message

    def __contains__(self, name: str) -> bool:
        return name in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def file_named(self, file_name: str) -> SchemaFile:
        try:
            return self._files_by_name[file_name]
        except KeyError:
            raise GeneratorFailure(
                'could not find file named', file_name
            ) from None

    def object_named(self, type_name: str, current: SchemaFile) -> ProtoNode:
        """Returns the node for a type name referenced from a file.

        If the type is defined neither in the current file nor in one of its
        direct dependencies, it was made visible by a public import in one of
        those dependencies, and the ImportedNode for it is returned instead.
        Failing to find that proxy is only a warning; the defining node is
        returned in that case.

        Raises:
          GeneratorFailure: no type with the given name exists.
        """
        node = self._objects.get(type_name)
        if node is None:
            raise GeneratorFailure("can't find object with type", type_name)

        defining_file = node.file().name()
        direct = defining_file == current.name() or any(
            self.file_named(dependency).name() == defining_file
            for dependency in current.dependencies()
        )
        if direct:
            return node

        for dependency in current.dependencies():
            for imported in self.file_named(dependency).imported():
                if imported.target() is node:
                    return imported

        _LOG.warning(
            'failed finding publicly imported dependency for %s, used in %s',
            type_name,
            current.name(),
        )
        return node
