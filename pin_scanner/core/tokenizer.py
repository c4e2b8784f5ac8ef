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
Shell-style command tokenizer.

Splits one line of text into commands on the top-level separators
(``&&``, ``||``, ``;``, ``|``, ``&``) and each command into words:

  - whitespace outside quotes separates words
  - single- and double-quoted spans become part of one word, quotes stripped
  - a backslash-escaped quote inside a quoted span does not close it
  - an unquoted ``#`` at the start of a word starts a comment

Unterminated quotes are tolerated: the open span runs to the end of the line.
The tokenizer never raises on input text.
"""

import re

from .models import CommandTokens, Manager, SourceFragment

# Wrapper commands that may precede the real program
_PREFIX_WORDS = frozenset(
    {
        "sudo",
        "doas",
        "env",
        "nohup",
        "nice",
        "time",
        "timeout",
        "command",
        "exec",
        "builtin",
        "corepack",
        # Shell keywords that introduce a command
        "if",
        "elif",
        "then",
        "else",
        "do",
        "while",
        "until",
        "!",
        "{",
    }
)

# Wrapper options that consume the following word (sudo -u USER, nice -n 10)
_PREFIX_VALUE_OPTIONS = {
    "sudo": frozenset({"-u", "-g", "-C", "-D", "-p", "-r", "-t", "-U", "-T", "--user", "--group"}),
    "doas": frozenset({"-u", "-C"}),
    "env": frozenset({"-u", "-C", "--unset", "--chdir"}),
    "nice": frozenset({"-n", "--adjustment"}),
    "timeout": frozenset({"-s", "-k", "--signal", "--kill-after"}),
}

_ENV_ASSIGNMENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
_DURATION_RE = re.compile(r"^\d+(?:\.\d+)?[smhd]?$")

_MANAGER_NAMES = frozenset(m.value for m in Manager)


def split_commands(line: str) -> list[list[str]]:
    """Split *line* into commands, each a list of words.

    Separators inside quotes are inert. Empty commands are dropped.
    """
    commands: list[list[str]] = []
    words: list[str] = []
    buf: list[str] = []
    in_word = False
    quote: str | None = None
    i = 0
    n = len(line)

    def end_word() -> None:
        nonlocal buf, in_word
        if in_word:
            words.append("".join(buf))
        buf = []
        in_word = False

    def end_command() -> None:
        nonlocal words
        end_word()
        if words:
            commands.append(words)
        words = []

    while i < n:
        ch = line[i]

        if quote is not None:
            if ch == "\\" and i + 1 < n and line[i + 1] in (quote, "\\"):
                buf.append(line[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            else:
                buf.append(ch)
            i += 1
            continue

        if ch in ("'", '"'):
            quote = ch
            in_word = True
            i += 1
            continue

        if ch == "\\":
            if i + 1 < n:
                buf.append(line[i + 1])
                in_word = True
            i += 2
            continue

        if ch.isspace() or ch in "()`":
            end_word()
            i += 1
            continue

        if ch == "#" and not in_word:
            break

        if ch in "&|;":
            # Redirections such as 2>&1, >&2 and &>file are part of a word
            if ch == "&" and buf and buf[-1] in "<>":
                buf.append(ch)
                i += 1
                continue
            if ch == "&" and i + 1 < n and line[i + 1] == ">":
                buf.append(ch)
                in_word = True
                i += 1
                continue
            end_command()
            if ch in "&|" and i + 1 < n and line[i + 1] == ch:
                i += 2
            else:
                i += 1
            continue

        buf.append(ch)
        in_word = True
        i += 1

    end_command()
    return commands


def manager_for(word: str) -> Manager | None:
    """Return the package manager a program word names, if any."""
    name = word.rsplit("/", 1)[-1]
    if name in _MANAGER_NAMES:
        return Manager(name)
    return None


def strip_prefix(words: list[str]) -> list[str] | None:
    """Drop env assignments and wrapper commands in front of a package manager.

    Returns the words starting at the package-manager name, or ``None`` when
    the command does not invoke one.
    """
    i = 0
    wrapper: str | None = None
    while i < len(words):
        word = words[i]
        if _ENV_ASSIGNMENT_RE.match(word):
            i += 1
            continue
        if word in _PREFIX_WORDS:
            wrapper = word
            i += 1
            continue
        if wrapper is not None and word.startswith("-"):
            i += 2 if word in _PREFIX_VALUE_OPTIONS.get(wrapper, ()) else 1
            continue
        if wrapper is not None and _DURATION_RE.match(word):
            i += 1
            continue
        break

    if i < len(words) and manager_for(words[i]) is not None:
        return words[i:]
    return None


def tokenize(fragment: SourceFragment) -> list[CommandTokens]:
    """Tokenize a fragment into package-manager invocations.

    Commands that do not run npm, pnpm, yarn or bun are dropped here.
    """
    result: list[CommandTokens] = []
    for words in split_commands(fragment.raw_text):
        stripped = strip_prefix(words)
        if stripped:
            result.append(CommandTokens(tokens=tuple(stripped), fragment=fragment))
    return result
