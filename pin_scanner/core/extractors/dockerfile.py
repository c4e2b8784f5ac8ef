# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Dockerfile fragment extractor.

Yields the body of every ``RUN`` instruction at the line where it starts.
Continuation lines are joined, build flags such as ``--mount=type=cache`` are
dropped, exec form (``RUN ["npm", "ci"]``) is decoded into a shell line and
heredoc script bodies (``RUN <<EOF``) are yielded line by line.
"""

import json
import logging
import re
import shlex
from collections.abc import Iterator
from pathlib import PurePath

from ...config.constants import PinScannerConstants
from ..models import FileType, SourceFragment
from .base import FragmentExtractor, as_posix_path, heredoc_end, heredoc_start, iter_script_lines, join_continued

logger = logging.getLogger(__name__)

_RUN_RE = re.compile(r"^\s*RUN(?:\s+(?P<body>.*)|\s*)$", re.IGNORECASE)
_RUN_FLAG_RE = re.compile(r"^--[A-Za-z][\w-]*(?:=\S*)?\s*")


class DockerfileExtractor(FragmentExtractor):
    """Extracts ``RUN`` instruction bodies from Dockerfiles."""

    file_type = FileType.DOCKERFILE

    def __init__(self):
        super().__init__("dockerfile")

    def matches(self, path: PurePath) -> bool:
        name = as_posix_path(path).name
        return name.startswith(PinScannerConstants.DOCKERFILE_PREFIX) or name.lower().endswith(
            PinScannerConstants.DOCKERFILE_SUFFIX
        )

    def extract(self, content: str, file_path: str) -> Iterator[SourceFragment]:
        lines = content.splitlines()
        i = 0
        while i < len(lines):
            line_number = i + 1
            text, i = join_continued(lines, i, drop_comment_lines=True)
            match = _RUN_RE.match(text)
            if match is None:
                continue
            body = _strip_run_flags(match.group("body") or "")
            body = _decode_exec_form(body)
            if body:
                yield SourceFragment(file_path=file_path, line_number=line_number, raw_text=body)

            heredoc = heredoc_start(body)
            if heredoc is None:
                continue
            delimiter, strip_tabs, body_is_script = heredoc
            end = heredoc_end(lines, i, delimiter, strip_tabs)
            if body_is_script:
                yield from iter_script_lines(lines[i:end], file_path, i + 1)
            else:
                logger.debug("%s:%d: heredoc %s is data, not scanned", file_path, line_number, delimiter)
            i = end + 1


def _strip_run_flags(body: str) -> str:
    while True:
        match = _RUN_FLAG_RE.match(body)
        if match is None:
            return body.strip()
        body = body[match.end() :]


def _decode_exec_form(body: str) -> str:
    """Turn ``["npm", "ci"]`` into ``npm ci``; other bodies pass through."""
    if not body.startswith("["):
        return body
    try:
        argv = json.loads(body)
    except json.JSONDecodeError:
        return body
    if not isinstance(argv, list) or not all(isinstance(arg, str) for arg in argv):
        return body
    # ["sh", "-c", "npm install"] runs its third element as a script
    if len(argv) >= 3 and argv[0].rsplit("/", 1)[-1] in ("sh", "bash") and argv[1] == "-c":
        return argv[2]
    return shlex.join(argv)
