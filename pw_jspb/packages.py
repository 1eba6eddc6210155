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
"""Assignment of unique output namespaces to .proto files."""

import logging

from pw_jspb.errors import GeneratorFailure
from pw_jspb.naming import bad_to_underscore

_LOG = logging.getLogger(__name__)


class PackageRegistry:
    """Chooses a unique namespace identifier for every input file.

    Every namespace used in generated code must be unique, so names are chosen
    across the whole run: the files being generated share one namespace and
    every other file gets one that does not conflict with it. Assignments are
    never changed once made.
    """

    def __init__(self) -> None:
        self._names_in_use: set[str] = set()
        self._package_by_file: dict[str, str] = {}

    def register(self, candidate: str, schema_file=None) -> str:
        """Registers and returns a unique namespace derived from candidate.

        Characters other than letters, digits and underscores are replaced
        with underscores. If the result is taken, an increasing integer suffix
        is appended to it until the name is unique.

        Args:
          candidate: the desired name, typically a dotted proto package
          schema_file: the file the name is for, if any
        """
        original = bad_to_underscore(candidate)
        name = original
        suffix = 1
        while name in self._names_in_use:
            name = f'{original}{suffix}'
            suffix += 1

        self._names_in_use.add(name)
        if schema_file is not None:
            self.assign(schema_file, name)

        if name != original:
            _LOG.debug('Renamed package %s to %s', original, name)

        return name

    def assign(self, schema_file, name: str) -> None:
        """Records an already registered namespace as a file's namespace."""
        self._package_by_file[schema_file.name()] = name

    def package_of(self, schema_file) -> str:
        try:
            return self._package_by_file[schema_file.name()]
        except KeyError:
            raise GeneratorFailure(
                'internal error: no package name defined for',
                schema_file.name(),
            ) from None

    def __contains__(self, name: str) -> bool:
        return name in self._names_in_use
