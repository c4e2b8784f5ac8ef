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
Markdown fragment extractor.

Every line inside a fenced code block (backtick or tilde fence, any info
string) is a fragment, with a leading ``$ `` or ``> `` prompt removed.
Outside fences, each inline code span of more than one word is a fragment
of its own. Prose is never scanned.
"""

import re
from collections.abc import Iterator
from pathlib import PurePath

from ...config.constants import PinScannerConstants
from ..models import FileType, SourceFragment
from .base import FragmentExtractor, as_posix_path, join_continued

_FENCE_OPEN_RE = re.compile(r"^\s*(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_INLINE_CODE_RE = re.compile(r"(?<!`)(?P<ticks>`+)(?!`)(?P<code>.+?)(?<!`)(?P=ticks)(?!`)")
_PROMPT_RE = re.compile(r"^\s*[$>]\s+")


class MarkdownExtractor(FragmentExtractor):
    """Extracts code blocks and inline code spans from Markdown."""

    file_type = FileType.MARKDOWN

    def __init__(self):
        super().__init__("markdown")

    def matches(self, path: PurePath) -> bool:
        return as_posix_path(path).suffix.lower() == PinScannerConstants.MARKDOWN_SUFFIX

    def extract(self, content: str, file_path: str) -> Iterator[SourceFragment]:
        lines = content.splitlines()
        i = 0
        while i < len(lines):
            opening = _FENCE_OPEN_RE.match(lines[i])
            # A backtick fence's info string may not contain backticks
            if opening and not (opening.group("fence")[0] == "`" and "`" in opening.group("info")):
                fence = opening.group("fence")
                end = _find_fence_close(lines, i + 1, fence)
                yield from self._block_fragments(lines[i + 1 : end], file_path, i + 2)
                i = end + 1
                continue

            for span in _INLINE_CODE_RE.finditer(lines[i]):
                code = span.group("code").strip()
                # A single word in prose names a tool rather than running it
                if code and len(code.split()) > 1:
                    yield SourceFragment(file_path=file_path, line_number=i + 1, raw_text=code)
            i += 1

    def _block_fragments(self, block: list[str], file_path: str, first_line_number: int) -> Iterator[SourceFragment]:
        block = [_PROMPT_RE.sub("", line, count=1) for line in block]
        i = 0
        while i < len(block):
            line_number = first_line_number + i
            text, i = join_continued(block, i)
            if text:
                yield SourceFragment(file_path=file_path, line_number=line_number, raw_text=text)


def _find_fence_close(lines: list[str], start: int, fence: str) -> int:
    """Index of the closing fence, or ``len(lines)`` for an unclosed block.

    The closing fence uses the same character and is at least as long as the
    opening one.
    """
    char = fence[0]
    for i in range(start, len(lines)):
        stripped = lines[i].strip()
        if len(stripped) >= len(fence) and stripped == char * len(stripped):
            return i
    return len(lines)
