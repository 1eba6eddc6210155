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
"""Fatal error kinds raised while generating jspb code."""

PLUGIN_NAME = 'protoc-gen-jspb'


class CodegenError(Exception):
    """Base class for errors that abort a code generation run."""

    def __init__(self, *msgs: str):
        self.error_message = ' '.join(msgs)
        super().__init__(f'{PLUGIN_NAME}: error: {self.error_message}')

    def formatted_message(self) -> str:
        return str(self)


class GeneratorError(CodegenError):
    """A failure caused by an underlying exception.

    Raise it from the original exception so the cause stays attached:

      raise GeneratorError(err, 'parsing input proto') from err
    """

    def __init__(self, cause: BaseException, *msgs: str):
        self.cause = cause
        super().__init__(*msgs)

    def formatted_message(self) -> str:
        return f'{self}:{self.cause}'


class GeneratorFailure(CodegenError):
    """An inconsistency detected while processing, with no underlying cause."""
