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
SARIF format reporter for GitHub Code Scanning integration.

Implements SARIF 2.1.0 specification for scan results.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import hashlib
import json
from collections import Counter
from typing import Any

from ...config.constants import PinScannerConstants
from ..models import ScanReport, Violation
from ..rules import RULES


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports for GitHub Code Scanning."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    # All violations are errors
    LEVEL = "error"

    FINGERPRINT_KEY = "pin-scanner/v1"

    def __init__(
        self,
        tool_name: str = PinScannerConstants.TOOL_NAME,
        tool_version: str = PinScannerConstants.VERSION,
    ):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the scanning tool
            tool_version: Version of the scanning tool
        """
        self.tool_name = tool_name
        self.tool_version = tool_version

    def generate_report(self, report: ScanReport) -> str:
        """
        Generate SARIF report.

        Args:
            report: Aggregated scan report

        Returns:
            SARIF JSON string
        """
        violations = report.violations
        sarif = {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": self._create_tool_component(self._extract_rules(violations)),
                    "results": self._convert_violations(violations),
                    "invocations": [{"executionSuccessful": True}],
                }
            ],
        }
        return json.dumps(sarif, indent=2)

    def _create_tool_component(self, rules: list[dict[str, Any]]) -> dict[str, Any]:
        """Create the tool component with rules."""
        return {
            "driver": {
                "name": self.tool_name,
                "version": self.tool_version,
                "rules": rules,
            }
        }

    def _extract_rules(self, violations: list[Violation]) -> list[dict[str, Any]]:
        """Describe each rule that produced at least one violation, in table order."""
        fired = {v.rule_id for v in violations}
        rules = []
        for rule in RULES:
            if rule.rule_id not in fired:
                continue
            rules.append(
                {
                    "id": rule.rule_id,
                    "name": rule.rule_id.replace("_", " ").title(),
                    "shortDescription": {
                        "text": f"{rule.manager.value} {rule.subcommand} does not pin dependencies",
                    },
                    "fullDescription": {
                        "text": rule.violation_message,
                    },
                    "defaultConfiguration": {
                        "level": self.LEVEL,
                    },
                    "help": {
                        "text": rule.violation_message,
                        "markdown": f"**Remediation**: {rule.violation_message}",
                    },
                    "properties": {
                        "manager": rule.manager.value,
                        "tags": ["supply-chain", "reproducibility"],
                    },
                }
            )
        return rules

    def _convert_violations(self, violations: list[Violation]) -> list[dict[str, Any]]:
        """Convert violations to SARIF results, numbering repeats of the same command."""
        results = []
        seen: Counter[tuple[str, str, str]] = Counter()
        for violation in violations:
            key = (violation.file_path, violation.rule_id, violation.raw_text)
            results.append(self._convert_violation(violation, seen[key]))
            seen[key] += 1
        return results

    def _convert_violation(self, violation: Violation, occurrence: int = 0) -> dict[str, Any]:
        """Convert one violation to a SARIF result."""
        fingerprint = hashlib.sha256(
            f"{violation.file_path}:{violation.rule_id}:{violation.raw_text}:{occurrence}".encode()
        ).hexdigest()[:32]
        return {
            "ruleId": violation.rule_id,
            "level": self.LEVEL,
            "message": {
                "text": violation.message,
            },
            "properties": {
                "manager": violation.manager,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": violation.file_path.replace("\\", "/"),
                            "uriBaseId": "%SRCROOT%",
                        },
                        "region": {
                            "startLine": violation.line_number,
                            "snippet": {
                                "text": violation.raw_text,
                            },
                        },
                    }
                }
            ],
            # Independent of the line number
            "fingerprints": {
                self.FINGERPRINT_KEY: fingerprint,
            },
        }

    def save_report(self, report: ScanReport, output_path: str):
        """
        Save SARIF report to file.

        Args:
            report: Aggregated scan report
            output_path: Path to save file
        """
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.generate_report(report))
