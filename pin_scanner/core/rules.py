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
Compiled-in rule table for package-manager invocations.

Each rule is a plain record keyed by (manager, canonical subcommand, argument
shape) with a pure predicate deciding whether an invocation respects the
lockfile or pins every package it names. Manager + subcommand pairs that have
no rule are not applicable.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .models import CommandTokens, Manager


class ArgShape(str, Enum):
    """Which invocations a rule covers, by positional package arguments."""

    BARE = "bare"  # no package arguments
    PACKAGES = "packages"  # one or more package arguments
    ANY = "any"


@dataclass(frozen=True)
class Invocation:
    """A package-manager command broken into subcommand, flags and packages."""

    manager: Manager
    subcommand: str
    flags: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    command: CommandTokens | None = None

    def has_flag(self, *names: str) -> bool:
        """True if any of *names* is set (``--flag`` or ``--flag=<truthy>``)."""
        for flag in self.flags:
            name, sep, value = flag.partition("=")
            if name in names and (not sep or value.lower() not in ("false", "0", "no")):
                return True
        return False


@dataclass(frozen=True)
class Rule:
    """One row of the rule table."""

    rule_id: str
    manager: Manager
    subcommand: str
    shape: ArgShape
    predicate: Callable[[Invocation], bool]
    violation_message: str | None = None

    def applies_to(self, manager: Manager, subcommand: str, has_packages: bool) -> bool:
        if self.manager is not manager or self.subcommand != subcommand:
            return False
        if self.shape is ArgShape.ANY:
            return True
        return has_packages == (self.shape is ArgShape.PACKAGES)


@dataclass(frozen=True)
class ManagerSpec:
    """Command-line vocabulary of a package manager."""

    manager: Manager
    # Raw subcommand -> canonical subcommand
    aliases: dict[str, str]
    # Options whose value is the following word (``--prefix DIR``)
    value_flags: frozenset[str] = frozenset()
    # Subcommand assumed when only flags follow the program name
    default_subcommand: str | None = None
    # Flags allowed alongside the default subcommand; any other flag
    # (``yarn --version``) means the default does not apply
    default_flags: frozenset[str] = frozenset()
    # Words that are followed by the real subcommand (``yarn global add``)
    passthrough: frozenset[str] = frozenset()


# --------------------------------------------------------------------------- #
# Version specifiers
# --------------------------------------------------------------------------- #

# Local paths, URLs and protocol specs (file:, git+https:, github:), tarballs,
# GitHub shorthand (user/repo) and shell variables name no registry package.
_NON_REGISTRY_RE = re.compile(
    r"""
    ^(?:\.{1,2}(?:/|$) | / | ~ | [A-Za-z][\w+.-]*: )
    | \.(?:tgz|tar\.gz|tar)$
    | ^[\w.-]+/[\w.#-]+$
    | \$
    """,
    re.VERBOSE,
)


def is_registry_package(arg: str) -> bool:
    """True if *arg* names a package from the registry."""
    return bool(arg) and not _NON_REGISTRY_RE.search(arg)


def has_version_specifier(arg: str) -> bool:
    """True if *arg* carries ``@<version>`` after its name.

    A leading ``@`` belongs to a scope (``@scope/name``) and is not a version.
    """
    name = arg
    if name.startswith("@"):
        slash = name.find("/")
        if slash == -1:
            return False
        name = name[slash + 1 :]
    at = name.find("@")
    return 0 < at < len(name) - 1


def unpinned_packages(invocation: Invocation) -> list[str]:
    """Registry packages in *invocation* that lack a version specifier."""
    return [p for p in invocation.packages if is_registry_package(p) and not has_version_specifier(p)]


# --------------------------------------------------------------------------- #
# Predicates
# --------------------------------------------------------------------------- #


def _never(_invocation: Invocation) -> bool:
    return False


def _always(_invocation: Invocation) -> bool:
    return True


def _all_pinned(invocation: Invocation) -> bool:
    return not unpinned_packages(invocation)


def _frozen_lockfile(invocation: Invocation) -> bool:
    return invocation.has_flag("--frozen-lockfile")


def _frozen_or_immutable(invocation: Invocation) -> bool:
    return invocation.has_flag("--frozen-lockfile", "--immutable")


# --------------------------------------------------------------------------- #
# Tables
# --------------------------------------------------------------------------- #

MANAGER_SPECS: dict[Manager, ManagerSpec] = {
    Manager.NPM: ManagerSpec(
        manager=Manager.NPM,
        aliases={
            "install": "install",
            "i": "install",
            "in": "install",
            "add": "install",
            "ci": "ci",
            "clean-install": "ci",
            "ic": "ci",
            "install-clean": "ci",
            "install-ci-test": "ci",
            "cit": "ci",
        },
        value_flags=frozenset(
            {
                "--prefix",
                "--registry",
                "--tag",
                "--workspace",
                "-w",
                "--omit",
                "--include",
                "--cache",
                "--userconfig",
                "--install-strategy",
                "--loglevel",
            }
        ),
    ),
    Manager.PNPM: ManagerSpec(
        manager=Manager.PNPM,
        aliases={
            "install": "install",
            "i": "install",
            "add": "add",
        },
        value_flags=frozenset(
            {
                "--filter",
                "-F",
                "--dir",
                "-C",
                "--registry",
                "--store-dir",
                "--reporter",
                "--loglevel",
            }
        ),
    ),
    Manager.YARN: ManagerSpec(
        manager=Manager.YARN,
        aliases={
            "install": "install",
            "add": "add",
        },
        value_flags=frozenset(
            {
                "--cwd",
                "--registry",
                "--network-timeout",
                "--network-concurrency",
                "--modules-folder",
                "--cache-folder",
                "--mutex",
            }
        ),
        default_subcommand="install",
        default_flags=frozenset(
            {
                "--frozen-lockfile",
                "--immutable",
                "--immutable-cache",
                "--pure-lockfile",
                "--no-lockfile",
                "--production",
                "--prod",
                "--offline",
                "--prefer-offline",
                "--force",
                "--check-files",
                "--check-cache",
                "--ignore-scripts",
                "--ignore-engines",
                "--ignore-optional",
                "--ignore-platform",
                "--non-interactive",
                "--silent",
                "--verbose",
                "--no-progress",
                "--inline-builds",
                "--mode",
            }
        ),
        passthrough=frozenset({"global"}),
    ),
    Manager.BUN: ManagerSpec(
        manager=Manager.BUN,
        aliases={
            "install": "install",
            "i": "install",
            "add": "add",
            "a": "add",
        },
        value_flags=frozenset(
            {
                "--cwd",
                "--registry",
                "--cache-dir",
                "--backend",
                "--config",
                "-c",
                "--cafile",
            }
        ),
    ),
}


RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="NPM_INSTALL_BARE",
        manager=Manager.NPM,
        subcommand="install",
        shape=ArgShape.BARE,
        predicate=_never,
        violation_message="Use 'npm ci' instead of 'npm install' for lockfile-based installations",
    ),
    Rule(
        rule_id="NPM_INSTALL_UNPINNED",
        manager=Manager.NPM,
        subcommand="install",
        shape=ArgShape.PACKAGES,
        predicate=_all_pinned,
        violation_message="Specify an exact version for 'npm install <pkg>'",
    ),
    Rule(
        rule_id="NPM_CI",
        manager=Manager.NPM,
        subcommand="ci",
        shape=ArgShape.ANY,
        predicate=_always,
    ),
    Rule(
        rule_id="PNPM_INSTALL_FROZEN",
        manager=Manager.PNPM,
        subcommand="install",
        shape=ArgShape.BARE,
        predicate=_frozen_lockfile,
        violation_message="Use 'pnpm install --frozen-lockfile' to respect lockfile",
    ),
    Rule(
        rule_id="PNPM_ADD_UNPINNED",
        manager=Manager.PNPM,
        subcommand="add",
        shape=ArgShape.PACKAGES,
        predicate=_all_pinned,
        violation_message="Specify an exact version for 'pnpm add <pkg>'",
    ),
    Rule(
        rule_id="YARN_INSTALL_FROZEN",
        manager=Manager.YARN,
        subcommand="install",
        shape=ArgShape.ANY,
        predicate=_frozen_or_immutable,
        violation_message="Use 'yarn install --frozen-lockfile' or '--immutable'",
    ),
    Rule(
        rule_id="YARN_ADD_UNPINNED",
        manager=Manager.YARN,
        subcommand="add",
        shape=ArgShape.PACKAGES,
        predicate=_all_pinned,
        violation_message="Specify an exact version for 'yarn add <pkg>'",
    ),
    Rule(
        rule_id="BUN_INSTALL_FROZEN",
        manager=Manager.BUN,
        subcommand="install",
        shape=ArgShape.BARE,
        predicate=_frozen_lockfile,
        violation_message="Use 'bun install --frozen-lockfile'",
    ),
    Rule(
        rule_id="BUN_ADD_UNPINNED",
        manager=Manager.BUN,
        subcommand="add",
        shape=ArgShape.PACKAGES,
        predicate=_all_pinned,
        violation_message="Specify an exact version for 'bun add <pkg>'",
    ),
)


def find_rule(manager: Manager, subcommand: str, has_packages: bool) -> Rule | None:
    """Look up the rule for an invocation, or ``None`` if not applicable."""
    for rule in RULES:
        if rule.applies_to(manager, subcommand, has_packages):
            return rule
    return None
