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
"""Identifier casing and name joining helpers for generated JavaScript."""

import os

JS_FILE_EXTENSION = '.pb.js'

_PROTO_EXTENSIONS = ('.proto', '.protodevel')

JS_KEYWORDS = frozenset([
    'break',
    'case',
    'continue',
    'default',
    'else',
    'for',
    'function',
    'goto',
    'if',
    'new',
    'return',
    'switch',
    'type',
    'var',
])  # yapf: disable


def _is_ascii_lower(char: str) -> bool:
    return 'a' <= char <= 'z'


def _is_ascii_digit(char: str) -> bool:
    return '0' <= char <= '9'


def camel_case(name: str) -> str:
    """Converts an underscored proto name to CamelCase.

    An interior underscore followed by a lower case letter is dropped and the
    letter is capitalized. A leading underscore becomes an 'X', and digits are
    treated as words of their own, so '_my_field_name_2' becomes
    'XMyFieldName_2'.
    """
    if not name:
        return ''

    result = []
    i = 0
    if name[0] == '_':
        result.append('X')
        i += 1

    while i < len(name):
        char = name[i]
        if char == '_' and i + 1 < len(name) and _is_ascii_lower(name[i + 1]):
            i += 1
            continue

        if _is_ascii_digit(char):
            result.append(char)
            i += 1
            continue

        # Each word starts upper case, followed by its lower case run.
        result.append(char.upper() if _is_ascii_lower(char) else char)
        while i + 1 < len(name) and _is_ascii_lower(name[i + 1]):
            i += 1
            result.append(name[i])
        i += 1

    return ''.join(result)


def camel_case_slice(parts: list[str]) -> str:
    """CamelCases a type name path, joining the parts with underscores."""
    return camel_case('_'.join(parts))


def dotted_slice(parts: list[str]) -> str:
    return '.'.join(parts)


def join_namespace(*parts: str) -> str:
    """Joins the non-empty parts of a Closure namespace with dots."""
    return '.'.join(part for part in parts if part)


def bad_to_underscore(name: str) -> str:
    """Replaces every character that can't appear in an identifier with '_'."""
    return ''.join(
        char if char.isalpha() or char.isdecimal() or char == '_' else '_'
        for char in name
    )


def base_name(file_name: str) -> str:
    """Returns the last path element of a file name without its extension."""
    name = file_name.rsplit('/', 1)[-1]
    if '.' in name:
        name = name[: name.rindex('.')]
    return name


def js_file_name(proto_file_name: str) -> str:
    """Returns the name of the generated JavaScript file for a .proto file."""
    root, ext = os.path.splitext(proto_file_name)
    if ext in _PROTO_EXTENSIONS:
        proto_file_name = root
    return proto_file_name + JS_FILE_EXTENSION


def parameter_name(field_name: str) -> str:
    """Returns a JavaScript-safe function parameter name for a field."""
    if field_name in JS_KEYWORDS:
        return field_name + '_'
    return field_name


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]
