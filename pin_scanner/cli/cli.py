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

"""Command-line interface for the Pin Scanner."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.config import Config
from ..config.constants import PinScannerConstants
from ..core.exceptions import PinScannerError
from ..core.models import ScanReport
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.sarif_reporter import SARIFReporter
from ..core.reporters.text_reporter import TextReporter
from ..core.rules import RULES
from ..core.scanner import PinScanner

logger = logging.getLogger("pin_scanner.cli")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> Config:
    """Build the effective config: file (explicit or discovered), then CLI flags."""
    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config.discover(args.paths[0])

    if args.format:
        config.output_format = args.format
    if args.no_gitignore:
        config.respect_gitignore = False
    if args.no_color:
        config.color = False
    return config


def _format_output(config: Config, report: ScanReport) -> str:
    """Generate the formatted output string for a scan report."""
    if config.output_format == "json":
        return JSONReporter().generate_report(report)
    if config.output_format == "sarif":
        return SARIFReporter().generate_report(report)
    return TextReporter(color=False).generate_report(report)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}")
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def scan_command(args: argparse.Namespace) -> int:
    """Handle the ``scan`` command."""
    try:
        config = _load_config(args)
        logger.debug("Effective config: %s", config)
        report = PinScanner(config=config).scan_paths(args.paths)
    except PinScannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.output_format == "text" and not args.output:
        TextReporter(color=config.color).print_report(report)
    else:
        _write_output(args, _format_output(config, report))

    return report.exit_code


def list_rules_command(_args: argparse.Namespace) -> int:
    """Handle the ``list-rules`` command."""
    print("Rules:\n")
    for i, rule in enumerate(RULES, 1):
        print(f"  {i}. {rule.rule_id}")
        print(f"     {rule.manager.value} {rule.subcommand} ({rule.shape.value} arguments)")
        print(f"     {rule.violation_message or 'Always compliant'}")
        print()
    return 0


def generate_config_command(args: argparse.Namespace) -> int:
    """Handle the ``generate-config`` command."""
    output_path = Path(args.output)
    try:
        Config().to_yaml(output_path)
    except OSError as e:
        print(f"Error generating config: {e}", file=sys.stderr)
        return 1
    print(f"Generated config: {output_path}\n")
    print("Use it with:")
    print(f"  {PinScannerConstants.TOOL_NAME} scan --config {output_path} .\n")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pin Scanner - Find unpinned JavaScript package installs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pin-scanner scan
  pin-scanner scan docs/ Dockerfile
  pin-scanner scan . --format sarif -o results.sarif
  pin-scanner scan . --config .pin-scanner.yaml --no-gitignore
  pin-scanner generate-config -o .pin-scanner.yaml
  pin-scanner list-rules
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {PinScannerConstants.VERSION}")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- scan --------------------------------------------------------------
    scan_p = subparsers.add_parser("scan", help="Scan files and directories")
    scan_p.add_argument("paths", nargs="*", default=["."], help="Files or directories to scan (default: .)")
    scan_p.add_argument(
        "--format",
        choices=list(PinScannerConstants.OUTPUT_FORMATS),
        default=None,
        help="Output format (default: text). Use 'sarif' for GitHub Code Scanning.",
    )
    scan_p.add_argument("--output", "-o", help="Output file path")
    scan_p.add_argument("--config", metavar="PATH", help="Config file (default: .pin-scanner.yaml in the scan root)")
    scan_p.add_argument("--no-gitignore", action="store_true", help="Scan files ignored by git")
    scan_p.add_argument("--no-color", action="store_true", help="Disable colored output")
    scan_p.add_argument("--verbose", "-v", action="store_true", help="Log discovery and extraction details")

    # -- list-rules --------------------------------------------------------
    subparsers.add_parser("list-rules", help="List the compiled-in rules")

    # -- generate-config ---------------------------------------------------
    gc_p = subparsers.add_parser("generate-config", help="Generate a default config YAML")
    gc_p.add_argument("--output", "-o", default=PinScannerConstants.CONFIG_FILENAMES[0], help="Output file path")

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(getattr(args, "verbose", False))

    dispatch = {
        "scan": scan_command,
        "list-rules": list_rules_command,
        "generate-config": generate_config_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
