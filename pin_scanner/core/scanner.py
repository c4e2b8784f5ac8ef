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
Scan orchestrator and report aggregation.

For each (path, content) pair the orchestrator picks an extractor by path,
tokenizes every fragment, classifies every command and collects the
violations. Files are independent of each other and are processed in the
order they are supplied.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from ..config.config import Config
from .classifier import classify
from .discovery import discover_all, read_files
from .extractors import select_extractor
from .models import FileScanResult, ScanReport, Violation
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class PinScanner:
    """Main scanner that checks files for unpinned package-manager installs."""

    def __init__(self, config: Config | None = None):
        """
        Initialize scanner.

        Args:
            config: Discovery and output settings. Only used by
                :meth:`scan_paths`; content scans need no configuration.
        """
        self.config = config or Config()

    def scan_file(self, file_path: str, content: str) -> FileScanResult | None:
        """
        Scan one file's content.

        Args:
            file_path: Path used to select the extractor and tag violations
            content: Raw file text

        Returns:
            FileScanResult, or ``None`` if no extractor handles *file_path*
        """
        extractor = select_extractor(file_path)
        if extractor is None:
            return None

        result = FileScanResult(file_path=file_path, file_type=extractor.file_type)
        for fragment in extractor.extract(content, file_path):
            result.fragments_checked += 1
            for command in tokenize(fragment):
                verdict = classify(command)
                if not verdict.is_violation:
                    continue
                result.violations.append(
                    Violation(
                        file_path=fragment.file_path,
                        line_number=fragment.line_number,
                        raw_text=fragment.raw_text.strip(),
                        message=verdict.message or "",
                        rule_id=verdict.rule_id or "",
                        manager=verdict.manager.value if verdict.manager else "",
                    )
                )
        return result

    def scan_contents(self, contents: Mapping[str, str] | Iterable[tuple[str, str]]) -> ScanReport:
        """
        Scan already-loaded files.

        Args:
            contents: Mapping (or pairs) of file path to raw text, in
                discovery order

        Returns:
            ScanReport with files in the order supplied
        """
        items = contents.items() if isinstance(contents, Mapping) else contents
        report = ScanReport()
        for file_path, content in items:
            result = self.scan_file(file_path, content)
            if result is None:
                logger.debug("Skipping unsupported file %s", file_path)
                continue
            report.add_file_result(result)
        return report

    def scan_paths(self, paths: Iterable[str | Path]) -> ScanReport:
        """
        Discover, read and scan every supported file under *paths*.

        Raises:
            DiscoveryError: If a path does not exist
        """
        files = discover_all(list(paths), self.config)
        logger.debug("Discovered %d file(s)", len(files))
        return self.scan_contents(read_files(files, self.config))


def scan_file(file_path: str, content: str) -> FileScanResult | None:
    """
    Convenience function to scan a single file's content.

    Returns:
        FileScanResult, or ``None`` for unsupported paths
    """
    return PinScanner().scan_file(file_path, content)


def scan_contents(contents: Mapping[str, str]) -> ScanReport:
    """Convenience function to scan a path -> content mapping."""
    return PinScanner().scan_contents(contents)


def scan_directory(directory: str | Path, config: Config | None = None) -> ScanReport:
    """
    Convenience function to scan every supported file under a directory.

    Args:
        directory: Root to walk
        config: Optional discovery settings

    Returns:
        ScanReport
    """
    return PinScanner(config=config).scan_paths([directory])
