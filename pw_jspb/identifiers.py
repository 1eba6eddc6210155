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
"""Allocation of conflict-free member names within a generated message."""

from typing import Iterable

COLLISION_SUFFIX = '_'


class NameAllocator:
    """Tracks the member names used by one generated message.

    Names that belong together, such as a field and its getter and setter, are
    allocated as a group and renamed as a group, so a collision never leaves a
    getter and setter with inconsistent names. Allocation happens in the
    declared field order, so reordering the fields of a message can change the
    generated names.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        """Creates an allocator for which the reserved names are taken."""
        self._used: set[str] = set(reserved)

    def alloc(self, *names: str) -> list[str]:
        """Finds a conflict-free variation of names and marks it as used.

        Returns:
          The names, each suffixed with the same number of underscores.
        """
        candidates = list(names)
        while any(name in self._used for name in candidates):
            candidates = [name + COLLISION_SUFFIX for name in candidates]

        self._used.update(candidates)
        return candidates
