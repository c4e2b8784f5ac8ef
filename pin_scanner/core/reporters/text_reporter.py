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
Human-readable terminal reporter.

Layout::

    Checking for JS package manager violations...

    ✗ <path>
      Line <n>: <message>
      > <raw_text>

    ═══════════════════════════════════════
    ✗ Found <total> violation(s) in <files> file(s)
"""

from rich.console import Console
from rich.text import Text

from ..models import ScanReport

HEADER = "Checking for JS package manager violations..."
SEPARATOR = "═" * 39


class TextReporter:
    """Renders a ScanReport as styled text for the terminal."""

    def __init__(self, color: bool = True, show_header: bool = True):
        """
        Initialize text reporter.

        Args:
            color: Emit ANSI colors when printing to a console
            show_header: Include the banner line and separator
        """
        self.color = color
        self.show_header = show_header

    def render(self, report: ScanReport) -> Text:
        """Build the styled report."""
        text = Text()
        if self.show_header:
            text.append(HEADER + "\n\n", style="blue")

        for path, violations in report.violations_by_file().items():
            text.append(f"✗ {path}\n", style="red")
            for violation in violations:
                text.append("  ")
                text.append(f"Line {violation.line_number}:", style="yellow")
                text.append(f" {violation.message}\n")
                text.append("  ")
                text.append(">", style="blue")
                text.append(f" {violation.raw_text}\n")
            text.append("\n")

        if self.show_header:
            text.append(SEPARATOR + "\n", style="blue")

        if report.success:
            text.append("✓ No violations found!\n", style="green")
            text.append(f"Files checked: {report.files_scanned}\n", style="blue")
        else:
            text.append(
                f"✗ Found {report.total_violations} violation(s) in {report.files_with_violations} file(s)\n",
                style="red",
            )
        return text

    def generate_report(self, report: ScanReport) -> str:
        """
        Generate the report as plain text.

        Args:
            report: Aggregated scan report

        Returns:
            Report text without color codes
        """
        return self.render(report).plain

    def print_report(self, report: ScanReport, console: Console | None = None) -> None:
        """Print the report to *console* (stdout by default)."""
        console = console or Console(no_color=not self.color, highlight=False, soft_wrap=True)
        console.print(self.render(report), end="")

    def save_report(self, report: ScanReport, output_path: str):
        """
        Save plain-text report to file.

        Args:
            report: Aggregated scan report
            output_path: Path to save file
        """
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.generate_report(report))
