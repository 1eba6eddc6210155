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
"""Defines a class for writing generated code to a file."""

from pw_jspb.errors import GeneratorFailure


def format_value(value) -> str:
    """Formats a value written to an OutputFile as JavaScript source text.

    Raises:
      GeneratorFailure: the value is not a string, boolean or number.
    """
    if isinstance(value, str):
        return value
    # bool is checked before int, which it subclasses.
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f'{value:g}'

    raise GeneratorFailure(f'unknown type in printer: {type(value).__name__}')


class OutputFile:
    """A buffer to which data is written.

    Example:

    ```
    output = OutputFile('hello.pb.js')
    output.write_line('hello.greet = function() {')
    with output.indent():
        output.write_line('return ', 42, ';')
    output.write_line('};')

    print(output.content())
    ```

    Produces:
    ```
    hello.greet = function() {
      return 42;
    };
    ```

    Text that can only be computed once later output has been generated is
    written through a named slot, which reserves its position in the file
    until it is filled.
    """

    INDENT_WIDTH = 2

    def __init__(self, filename: str):
        self._filename: str = filename
        self._content: list['str | OutputFile._Slot'] = []
        self._slots: dict[str, OutputFile._Slot] = {}
        self._indentation: int = 0

    def write_line(self, *parts) -> None:
        """Writes a line built from parts at the current indentation."""
        line = ''.join(format_value(part) for part in parts)
        if line:
            self._content.append(' ' * self._indentation)
            self._content.append(line)
        self._content.append('\n')

    def indent(self) -> 'OutputFile._IndentationContext':
        """Increases the indentation level of the output."""
        return self._IndentationContext(self)

    def slot(self, name: str) -> None:
        """Reserves a named position for lines written later with fill()."""
        if name in self._slots:
            raise GeneratorFailure(f'internal error: duplicate slot {name}')
        slot = self._Slot(self._indentation)
        self._slots[name] = slot
        self._content.append(slot)

    def fill(self, name: str, *lines: str) -> None:
        """Writes lines at a slot, indented as the output was at the slot."""
        try:
            self._slots[name].lines.extend(lines)
        except KeyError:
            raise GeneratorFailure(f'internal error: no slot {name}') from None

    def prepend(self, other: 'OutputFile') -> None:
        """Inserts the content of another output before this one's."""
        # pylint: disable=protected-access
        self._content[:0] = other._content
        self._slots.update(other._slots)
        # pylint: enable=protected-access

    def name(self) -> str:
        return self._filename

    def content(self) -> str:
        return ''.join(str(item) for item in self._content)

    class _Slot:
        """Lines inserted at a reserved position of an output file."""

        def __init__(self, indentation: int):
            self.indentation = indentation
            self.lines: list[str] = []

        def __str__(self) -> str:
            return ''.join(
                f'{" " * self.indentation}{line}\n' if line else '\n'
                for line in self.lines
            )

    class _IndentationContext:
        """Context that increases the output's indentation when it is active."""

        def __init__(self, output: 'OutputFile'):
            self._output = output

        def __enter__(self):
            self._output._indentation += OutputFile.INDENT_WIDTH

        def __exit__(self, typ, value, traceback):
            self._output._indentation -= OutputFile.INDENT_WIDTH
