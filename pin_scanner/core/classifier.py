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
Classify a tokenized command against the rule table.

The manager is taken from the first word, the subcommand from the first
positional word after any global options, and the remaining words are split
into flags and package arguments before the matching rule's predicate runs.
"""

import logging
import re

from .models import CommandTokens, Verdict, VerdictKind
from .rules import MANAGER_SPECS, Invocation, find_rule, unpinned_packages
from .tokenizer import manager_for

logger = logging.getLogger(__name__)

# Documentation placeholders such as <package> or <version>
_PLACEHOLDER_RE = re.compile(r"<[A-Za-z][\w .@/-]*>")

# Redirection operator on its own (">", "2>>", "<") or with its target attached
_REDIRECT_ALONE_RE = re.compile(r"^(?:\d*|&)(?:>>?|<)$")
_REDIRECT_ATTACHED_RE = re.compile(r"^(?:\d*|&)(?:>>?|<)")


def _drop_redirections(words: list[str]) -> list[str]:
    kept: list[str] = []
    skip_next = False
    for word in words:
        if skip_next:
            skip_next = False
            continue
        if _REDIRECT_ALONE_RE.match(word):
            skip_next = True
            continue
        if _REDIRECT_ATTACHED_RE.match(word):
            continue
        kept.append(word)
    return kept


def parse_invocation(command: CommandTokens) -> Invocation | None:
    """Break *command* into an :class:`Invocation`.

    Returns ``None`` when the command does not name a known manager and
    subcommand.
    """
    if not command.tokens:
        return None
    manager = manager_for(command.tokens[0])
    if manager is None:
        return None
    spec = MANAGER_SPECS[manager]

    flags: list[str] = []
    positionals: list[str] = []
    words = _drop_redirections(list(command.tokens[1:]))
    i = 0
    options_done = False
    while i < len(words):
        word = words[i]
        if not options_done and word == "--":
            options_done = True
        elif not options_done and word.startswith("-") and len(word) > 1:
            flags.append(word)
            if word in spec.value_flags and i + 1 < len(words):
                i += 1
        else:
            positionals.append(word)
        i += 1

    if positionals and positionals[0] in spec.passthrough:
        positionals.pop(0)

    if positionals:
        raw_subcommand = positionals.pop(0)
    elif spec.default_subcommand is not None:
        allowed = spec.default_flags | spec.value_flags
        if any(flag.split("=", 1)[0] not in allowed for flag in flags):
            return None
        raw_subcommand = spec.default_subcommand
    else:
        return None

    subcommand = spec.aliases.get(raw_subcommand)
    if subcommand is None:
        return None

    return Invocation(
        manager=manager,
        subcommand=subcommand,
        flags=tuple(flags),
        packages=tuple(positionals),
        command=command,
    )


def classify(command: CommandTokens) -> Verdict:
    """Classify one command as compliant, a violation, or not applicable."""
    if any(_PLACEHOLDER_RE.search(word) for word in command.tokens):
        logger.debug("Skipping placeholder example: %s", " ".join(command.tokens))
        return Verdict.not_applicable()

    invocation = parse_invocation(command)
    if invocation is None:
        return Verdict.not_applicable()

    rule = find_rule(invocation.manager, invocation.subcommand, bool(invocation.packages))
    if rule is None:
        return Verdict.not_applicable()

    if rule.predicate(invocation):
        return Verdict.compliant(invocation.manager, rule.rule_id)

    return Verdict(
        kind=VerdictKind.VIOLATION,
        message=rule.violation_message,
        rule_id=rule.rule_id,
        manager=invocation.manager,
        unpinned=tuple(unpinned_packages(invocation)),
    )
