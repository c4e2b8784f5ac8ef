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
Data models for extracted commands, verdicts and scan reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FileType(str, Enum):
    """Host file formats that can embed package-manager invocations."""

    DOCKERFILE = "dockerfile"
    MARKDOWN = "markdown"
    SHELL = "shell"
    WORKFLOW = "workflow"


class Manager(str, Enum):
    """Supported JavaScript package managers."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


class VerdictKind(str, Enum):
    """Outcome of classifying a single command."""

    COMPLIANT = "compliant"
    VIOLATION = "violation"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class SourceFragment:
    """A candidate command string extracted from a file."""

    file_path: str
    line_number: int
    raw_text: str


@dataclass(frozen=True)
class CommandTokens:
    """One shell invocation split into tokens, quotes already removed."""

    tokens: tuple[str, ...]
    fragment: SourceFragment

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]


@dataclass(frozen=True)
class Verdict:
    """Classifier result for one CommandTokens sequence."""

    kind: VerdictKind
    message: str | None = None
    rule_id: str | None = None
    manager: Manager | None = None
    unpinned: tuple[str, ...] = ()

    @classmethod
    def compliant(cls, manager: Manager, rule_id: str | None = None) -> "Verdict":
        return cls(VerdictKind.COMPLIANT, rule_id=rule_id, manager=manager)

    @classmethod
    def not_applicable(cls) -> "Verdict":
        return cls(VerdictKind.NOT_APPLICABLE)

    @property
    def is_violation(self) -> bool:
        return self.kind is VerdictKind.VIOLATION


@dataclass(frozen=True)
class Violation:
    """A non-compliant package-manager invocation found in a file."""

    file_path: str
    line_number: int
    raw_text: str
    message: str
    rule_id: str = ""
    manager: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert violation to dictionary."""
        return {
            "file_path": self.file_path,
            "line_number": self.line_number,
            "raw_text": self.raw_text,
            "message": self.message,
            "rule_id": self.rule_id,
            "manager": self.manager,
        }


@dataclass
class FileScanResult:
    """Violations found in a single file, in discovery order."""

    file_path: str
    file_type: FileType
    violations: list[Violation] = field(default_factory=list)
    fragments_checked: int = 0

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    def to_dict(self) -> dict[str, Any]:
        """Convert file result to dictionary."""
        return {
            "file_path": self.file_path,
            "file_type": self.file_type.value,
            "fragments_checked": self.fragments_checked,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass
class ScanReport:
    """Aggregated report over every scanned file.

    Holds no timestamps or other run-dependent data so that scanning the
    same content twice produces identical output.
    """

    results: list[FileScanResult] = field(default_factory=list)
    files_scanned: int = 0
    total_violations: int = 0
    files_with_violations: int = 0

    def add_file_result(self, result: FileScanResult) -> None:
        """Add a file result and update counters."""
        self.results.append(result)
        self.files_scanned += 1
        self.total_violations += len(result.violations)
        if result.has_violations:
            self.files_with_violations += 1

    @property
    def success(self) -> bool:
        return self.total_violations == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @property
    def violations(self) -> list[Violation]:
        """All violations, grouped by file in discovery order."""
        return [v for r in self.results for v in r.violations]

    def violations_by_file(self) -> dict[str, list[Violation]]:
        """Map of file path to its violations, omitting clean files."""
        return {r.file_path: list(r.violations) for r in self.results if r.violations}

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "summary": {
                "files_scanned": self.files_scanned,
                "files_with_violations": self.files_with_violations,
                "total_violations": self.total_violations,
                "success": self.success,
            },
            "files": [r.to_dict() for r in self.results if r.violations],
        }
