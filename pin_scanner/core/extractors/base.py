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
Base fragment extractor interface and shared line helpers.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import PurePath, PurePosixPath

from ..models import FileType, SourceFragment

# <<EOF, <<-EOF, <<'EOF', <<"EOF" (but not the <<< here-string)
_HEREDOC_RE = re.compile(r"(?<!<)<<(?!<)(-?)\s*([\"']?)([A-Za-z_][A-Za-z0-9_]*)\2")

# Programs whose heredoc body is a script rather than data
_SHELL_PROGRAMS = frozenset({"sh", "bash", "ash", "dash", "zsh"})


class FragmentExtractor(ABC):
    """Abstract base class for per-format fragment extractors.

    Extractors are stateless and line-oriented: they recognise where commands
    sit inside a host document without parsing the document's full grammar.
    """

    file_type: FileType

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def matches(self, path: PurePath) -> bool:
        """Return True if this extractor handles the file at *path*."""
        pass

    @abstractmethod
    def extract(self, content: str, file_path: str) -> Iterator[SourceFragment]:
        """
        Lazily yield candidate command fragments from *content*.

        Args:
            content: Raw text of the file
            file_path: Path recorded on every fragment

        Returns:
            Iterator of fragments in file order
        """
        pass

    def get_name(self) -> str:
        """Get the extractor name."""
        return self.name


def as_posix_path(path: str | PurePath) -> PurePosixPath:
    """Normalise *path* to forward slashes for pattern checks."""
    return PurePosixPath(str(path).replace("\\", "/"))


def join_continued(lines: list[str], index: int, drop_comment_lines: bool = False) -> tuple[str, int]:
    """Join ``lines[index]`` with the lines that follow a trailing backslash.

    Args:
        lines: All lines of the block
        index: Index of the first physical line
        drop_comment_lines: Ignore ``#`` lines inside the continuation
            (Dockerfile semantics)

    Returns:
        (joined text, index of the next unconsumed line)
    """
    parts: list[str] = []
    i = index
    while i < len(lines):
        stripped = lines[i].rstrip()
        i += 1
        if not stripped.endswith("\\"):
            parts.append(stripped.strip())
            break
        parts.append(stripped[:-1].strip())
        while drop_comment_lines and i < len(lines) and lines[i].lstrip().startswith("#"):
            i += 1
    return " ".join(p for p in parts if p), i


def heredoc_start(text: str) -> tuple[str, bool, bool] | None:
    """Find a heredoc opened on *text*.

    Returns (delimiter, strip_tabs, body_is_script) or ``None``. The body is a
    script when the heredoc feeds a shell or stands alone (``RUN <<EOF``).
    """
    match = _HEREDOC_RE.search(text)
    if match is None:
        return None
    before = text[: match.start()].split()
    program = ""
    for word in before:
        if not word.startswith("-"):
            program = word.rsplit("/", 1)[-1]
            break
    body_is_script = not before or program in _SHELL_PROGRAMS
    return match.group(3), match.group(1) == "-", body_is_script


def heredoc_end(lines: list[str], start: int, delimiter: str, strip_tabs: bool) -> int:
    """Index of the line closing a heredoc whose body starts at *start*.

    Returns ``len(lines)`` when the heredoc is never closed.
    """
    for i in range(start, len(lines)):
        line = lines[i].lstrip("\t") if strip_tabs else lines[i]
        if line.rstrip() == delimiter:
            return i
    return len(lines)


def iter_script_lines(
    lines: list[str],
    file_path: str,
    first_line_number: int = 1,
    drop_comment_lines: bool = False,
) -> Iterator[SourceFragment]:
    """Yield one fragment per logical shell line.

    Blank lines and ``#`` comment lines are skipped, backslash continuations
    are joined onto their first line, and heredoc bodies are either scanned
    as script lines or skipped as data.
    """
    i = 0
    while i < len(lines):
        if not lines[i].strip() or lines[i].lstrip().startswith("#"):
            i += 1
            continue
        line_number = first_line_number + i
        text, i = join_continued(lines, i, drop_comment_lines)
        if text:
            yield SourceFragment(file_path=file_path, line_number=line_number, raw_text=text)

        heredoc = heredoc_start(text)
        if heredoc is None:
            continue
        delimiter, strip_tabs, body_is_script = heredoc
        end = heredoc_end(lines, i, delimiter, strip_tabs)
        if body_is_script:
            yield from iter_script_lines(lines[i:end], file_path, first_line_number + i, drop_comment_lines)
        i = end + 1
