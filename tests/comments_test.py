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
"""Tests for the source comment index."""

import unittest

from google.protobuf import descriptor_pb2, text_format

from pw_jspb import comments

_FILE = """
name: "commented.proto"
package: "examples"
message_type { name: "Point" }
source_code_info {
  location { path: 4 path: 0 leading_comments: " A point.\\n In 2D.\\n" }
  location { path: 4 path: 0 path: 2 path: 0 trailing_comments: " x\\n" }
  location { path: 5 path: 0 leading_comments: "No space\\n" }
}
"""


def _file_proto() -> descriptor_pb2.FileDescriptorProto:
    return text_format.Parse(_FILE, descriptor_pb2.FileDescriptorProto())


class TestCommentIndex(unittest.TestCase):
    """Tests for CommentIndex."""

    def setUp(self) -> None:
        self.index = comments.CommentIndex(_file_proto())

    def test_only_leading_comments_are_kept(self) -> None:
        self.assertEqual(len(self.index), 2)
        self.assertIn('4,0', self.index)
        self.assertNotIn('4,0,2,0', self.index)

    def test_lines_strip_one_leading_space(self) -> None:
        self.assertEqual(self.index.lines('4,0'), ['A point.', 'In 2D.'])
        self.assertEqual(self.index.lines('5,0'), ['No space'])

    def test_missing_path_has_no_lines(self) -> None:
        self.assertEqual(self.index.lines('4,1'), [])

    def test_join_path(self) -> None:
        self.assertEqual(
            comments.join_path(
                comments.MESSAGE_PATH, 0, comments.MESSAGE_FIELD_PATH, 3
            ),
            '4,0,2,3',
        )


if __name__ == '__main__':
    unittest.main()
