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
GitHub Actions workflow fragment extractor.

Recognises ``run:`` keys line by line instead of loading the YAML document,
so that line numbers survive and malformed workflows are still scanned.
Inline values yield one fragment; block scalars (``|``, ``>`` and their
chomping variants) and plain multi-line values yield one fragment per
logical line of the script.
"""

import re
from collections.abc import Iterator
from pathlib import PurePath

from ...config.constants import PinScannerConstants
from ..models import FileType, SourceFragment
from .base import FragmentExtractor, as_posix_path, iter_script_lines

_RUN_KEY_RE = re.compile(r"^(?P<lead>\s*(?:-\s+)?)run\s*:(?:\s+(?P<value>.*?))?\s*$")
_BLOCK_INDICATOR_RE = re.compile(r"^[|>][+-]?\d?[+-]?(?:\s+#.*)?$")


class WorkflowExtractor(FragmentExtractor):
    """Extracts ``run:`` step scripts from ``.github/workflows`` YAML files."""

    file_type = FileType.WORKFLOW

    def __init__(self):
        super().__init__("workflow")

    def matches(self, path: PurePath) -> bool:
        posix = as_posix_path(path)
        if posix.suffix.lower() not in PinScannerConstants.WORKFLOW_SUFFIXES:
            return False
        parts = posix.parent.parts
        return any(parts[j : j + 2] == PinScannerConstants.WORKFLOW_DIR_PARTS for j in range(len(parts) - 1))

    def extract(self, content: str, file_path: str) -> Iterator[SourceFragment]:
        lines = content.splitlines()
        i = 0
        while i < len(lines):
            match = _RUN_KEY_RE.match(lines[i])
            if match is None:
                i += 1
                continue

            key_column = len(match.group("lead"))
            value = match.group("value") or ""
            if value and not _BLOCK_INDICATOR_RE.match(value):
                text = _unquote(value)
                if text:
                    yield SourceFragment(file_path=file_path, line_number=i + 1, raw_text=text)
                i += 1
                continue

            end = _block_end(lines, i + 1, key_column)
            yield from iter_script_lines(lines[i + 1 : end], file_path, i + 2)
            i = end


def _block_end(lines: list[str], start: int, key_column: int) -> int:
    """First line after *start* indented at or left of the ``run`` key."""
    for i in range(start, len(lines)):
        line = lines[i]
        if not line.strip():
            continue
        if len(line) - len(line.lstrip()) <= key_column:
            return i
    return len(lines)


def _unquote(value: str) -> str:
    """Strip YAML flow-scalar quotes from an inline value."""
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1].replace("''", "'")
    return value
