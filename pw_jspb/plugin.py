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
"""pw_jspb compiler plugin.

This file implements a protobuf compiler plugin which generates Closure
JavaScript wrappers for protobuf messages in their JSON form.
"""

import logging
import sys

from google.protobuf import message
from google.protobuf.compiler import plugin_pb2

from pw_jspb import codegen_jspb, log
from pw_jspb.errors import CodegenError, GeneratorError
from pw_jspb.options import GeneratorOptions, parse_parameter_options

_LOG = logging.getLogger(__name__)


def process_proto_request(
    req: plugin_pb2.CodeGeneratorRequest,
    res: plugin_pb2.CodeGeneratorResponse,
    codegen_options: GeneratorOptions | None = None,
) -> None:
    """Handles a protoc CodeGeneratorRequest message.

    Generates code for the files in the request and writes the output to the
    specified CodeGeneratorResponse message.

    Args:
      req: A CodeGeneratorRequest for a proto compilation.
      res: A CodeGeneratorResponse to populate with the plugin's output.
      codegen_options: Options to generate with; parsed from the request's
          parameter if not provided.

    Raises:
      CodegenError: code could not be generated for the request.
    """
    if codegen_options is None:
        codegen_options = parse_parameter_options(req.parameter)

    output_files = codegen_jspb.generate(
        req.proto_file, req.file_to_generate, codegen_options
    )

    for output_file in output_files:
        fd = res.file.add()
        fd.name = output_file.name()
        fd.content = output_file.content()


def _read_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    try:
        return plugin_pb2.CodeGeneratorRequest.FromString(data)
    except message.DecodeError as err:
        raise GeneratorError(err, 'failed to parse input proto') from err


def main() -> int:
    """Protobuf compiler plugin entrypoint.

    Reads a CodeGeneratorRequest proto from stdin and writes a
    CodeGeneratorResponse to stdout.
    """
    response = plugin_pb2.CodeGeneratorResponse()

    # Declare that this plugin supports optional fields in proto3.
    response.supported_features |= (  # type: ignore[attr-defined]
        response.FEATURE_PROTO3_OPTIONAL
    )  # type: ignore[attr-defined]

    try:
        try:
            data = sys.stdin.buffer.read()
        except OSError as err:
            raise GeneratorError(err, 'reading input') from err

        request = _read_request(data)
        codegen_options = parse_parameter_options(request.parameter)
        log.install(codegen_options.log_level)

        process_proto_request(request, response, codegen_options)

        try:
            output = response.SerializeToString()
        except message.EncodeError as err:
            raise GeneratorError(err, 'failed to marshal output proto') from err
    except CodegenError as err:
        print(err.formatted_message(), file=sys.stderr)
        return 1

    _LOG.debug('Generated %d files', len(response.file))
    sys.stdout.buffer.write(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
