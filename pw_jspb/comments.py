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
"""Lookup of source comments by their location within a .proto file.

A SourceCodeInfo location is described by a "path", a sequence of integers
alternating between the field number of a repeated field in a descriptor and
an index into that repeated field. Paths are stored here as comma-separated
strings, e.g. '4,0,2,1' is the second field of the first message.
"""

from google.protobuf import descriptor_pb2

# Field numbers in FileDescriptorProto.
MESSAGE_PATH = 4
ENUM_PATH = 5

# Field numbers in DescriptorProto.
MESSAGE_FIELD_PATH = 2
MESSAGE_MESSAGE_PATH = 3
MESSAGE_ENUM_PATH = 4
MESSAGE_ONEOF_PATH = 8


def join_path(*elements) -> str:
    return ','.join(str(element) for element in elements)


class CommentIndex:
    """Leading comments of a file, keyed by comma-separated location path."""

    def __init__(self, file_proto: descriptor_pb2.FileDescriptorProto):
        self._comments: dict[str, str] = {}

        for location in file_proto.source_code_info.location:
            if not location.HasField('leading_comments'):
                continue
            self._comments[join_path(*location.path)] = (
                location.leading_comments
            )

    def __contains__(self, path: str) -> bool:
        return path in self._comments

    def __len__(self) -> int:
        return len(self._comments)

    def lines(self, path: str) -> list[str]:
        """Returns the comment at path split into lines.

        The trailing newline protoc leaves on every comment is dropped, as is a
        single leading space on each line.
        """
        comment = self._comments.get(path)
        if comment is None:
            return []

        return [
            line[1:] if line.startswith(' ') else line
            for line in comment.removesuffix('\n').split('\n')
        ]
