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
"""Parsing of the parameter string passed to the plugin by protoc."""

from dataclasses import dataclass
import logging
from shlex import shlex

from pw_jspb.errors import GeneratorError, GeneratorFailure

_LOG = logging.getLogger(__name__)


@dataclass
class GeneratorOptions:
    """Options controlling the generated code.

    Attributes:
      pkg_prefix: dotted prefix of every generated namespace declaration and
          reference, e.g. 'jspb' generates 'jspb.examples.Point'
      log_level: minimum level of the plugin's own diagnostics
    """

    pkg_prefix: str = ''
    log_level: int = logging.WARNING


def split_parameter(parameter: str) -> dict[str, str]:
    """Breaks the comma-separated key=value list protoc passes into a dict.

    A key without a value maps to the empty string. Values may be quoted to
    contain commas.
    """
    # protoc passes the parameters in shell quoted form, separated by commas.
    # Use shlex to split them, correctly handling quoted sections, with
    # equivalent options to IFS=","
    lex = shlex(parameter, posix=True)
    lex.whitespace_split = True
    lex.whitespace = ','
    lex.commenters = ''

    try:
        tokens = list(lex)
    except ValueError as err:
        raise GeneratorError(err, 'malformed parameter', parameter) from err

    params: dict[str, str] = {}
    for token in tokens:
        key, _, value = token.partition('=')
        params[key] = value
    return params


def log_level(arg: str) -> int:
    level = getattr(logging, arg.upper(), None)
    if not isinstance(level, int):
        raise GeneratorFailure(f'"{arg.upper()}" is not a valid log level')
    return level


def parse_parameter_options(parameter: str) -> GeneratorOptions:
    """Parses the parameter string of a CodeGeneratorRequest.

    Recognized keys are pkg_prefix and log_level; any other key is ignored.
    """
    options = GeneratorOptions()

    for key, value in split_parameter(parameter).items():
        if key == 'pkg_prefix':
            options.pkg_prefix = value
        elif key == 'log_level':
            options.log_level = log_level(value)
        else:
            _LOG.debug('Ignoring unrecognized parameter %s', key)

    return options
