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
"""Tools for configuring the plugin's logging.

protoc reads the generated files from the plugin's standard output, so all
diagnostics are written to stderr.
"""

import logging
import os
import sys
from typing import Callable, NamedTuple


class _LogLevel(NamedTuple):
    level: int
    color: str
    ascii: str


# Shorten all the log levels to 3 characters for column-aligned logs.
# Color the logs using ANSI codes.
_LOG_LEVELS = (
    _LogLevel(logging.CRITICAL, 'bold_red', 'CRT'),
    _LogLevel(logging.ERROR,    'red',      'ERR'),
    _LogLevel(logging.WARNING,  'yellow',   'WRN'),
    _LogLevel(logging.INFO,     'magenta',  'INF'),
    _LogLevel(logging.DEBUG,    'blue',     'DBG'),
)  # yapf: disable

_STDERR_HANDLER = logging.StreamHandler()


def _make_color(*codes: int) -> Callable[[str], str]:
    # Apply all the requested ANSI color codes. Note that this is unbalanced
    # with respect to the reset, which only requires a '0' to erase all codes.
    start = ''.join(f'\033[{code}m' for code in codes)
    reset = '\033[0m'

    return lambda msg: f'{start}{msg}{reset}'


class _Color:
    """Helpers to surround text with ASCII color escapes"""

    # Static, so lookups through an instance return the plain helpers.
    red = staticmethod(_make_color(31, 1))
    bold_red = staticmethod(_make_color(30, 41))
    yellow = staticmethod(_make_color(33, 1))
    blue = staticmethod(_make_color(34, 1))
    magenta = staticmethod(_make_color(35, 1))


class _NoColor:
    """Fake version of the _Color class that doesn't colorize."""

    def __getattr__(self, _):
        return str


def colors(enabled: bool | None = None) -> _Color | _NoColor:
    """Returns an object for colorizing strings.

    By default, the object only colorizes if stderr is a terminal and the
    NO_COLOR environment variable is unset.
    """
    if enabled is None:
        enabled = sys.stderr.isatty() and 'NO_COLOR' not in os.environ

    return _Color() if enabled else _NoColor()


def install(
    level: int = logging.WARNING,
    use_color: bool | None = None,
) -> None:
    """Configures the system logger to print the plugin's logs to stderr."""

    color = colors(use_color)

    formatter = logging.Formatter('%(levelname)s %(message)s')

    # Set the log level on the root logger to 1, so logs that all logs
    # propagated from child loggers are handled.
    logging.getLogger().setLevel(1)

    _STDERR_HANDLER.setLevel(level)
    _STDERR_HANDLER.setFormatter(formatter)
    logging.getLogger().addHandler(_STDERR_HANDLER)

    for log_level in _LOG_LEVELS:
        colorize = getattr(color, log_level.color)
        logging.addLevelName(log_level.level, colorize(log_level.ascii))
