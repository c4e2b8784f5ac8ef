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
Pre-commit hook that blocks commits adding unpinned package installs.

Only staged files in a supported format (Dockerfiles, Markdown, shell
scripts and GitHub workflows) are scanned.

Usage:
    1. Install as a pre-commit hook:
       pin-scanner-pre-commit install

    2. Or add to .pre-commit-config.yaml:
       - repo: local
         hooks:
           - id: pin-scanner
             name: Pin Scanner
             entry: pin-scanner-pre-commit
             language: python
             pass_filenames: false

Configuration:
    The hook reads .pin-scanner.yaml from the repository root, the same
    file used by ``pin-scanner scan``.
"""

import argparse
import subprocess
import sys
from pathlib import Path

from ..config.config import Config
from ..core.discovery import read_files
from ..core.exceptions import PinScannerError
from ..core.extractors import is_supported
from ..core.models import ScanReport
from ..core.reporters.text_reporter import TextReporter
from ..core.scanner import PinScanner


def get_repo_root() -> Path | None:
    """Return the top level of the current git work tree, or ``None``."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    return Path(result.stdout.strip())


def get_staged_files() -> list[str]:
    """
    Get list of staged files from git.

    Returns:
        List of staged file paths relative to repo root
    """
    try:
        result = subprocess.run(
            ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR"],
            capture_output=True,
            text=True,
            check=True,
        )
        return [f.strip() for f in result.stdout.split("\n") if f.strip()]
    except subprocess.CalledProcessError:
        return []


def select_scannable(staged_files: list[str], config: Config) -> list[str]:
    """Keep staged files in a supported format that are not in an excluded directory."""
    excluded = set(config.exclude_dirs)
    selected = []
    for file_path in staged_files:
        if excluded.intersection(Path(file_path).parts[:-1]):
            continue
        if is_supported(file_path):
            selected.append(file_path)
    return sorted(selected)


def scan_staged(repo_root: Path, staged_files: list[str], config: Config) -> ScanReport:
    """
    Scan staged files.

    Args:
        repo_root: Repository root directory
        staged_files: Paths relative to *repo_root*
        config: Scanner configuration

    Returns:
        ScanReport keyed by repo-relative paths
    """
    contents = read_files([repo_root / f for f in staged_files], config)
    relative = {Path(p).relative_to(repo_root).as_posix(): text for p, text in contents.items()}
    return PinScanner(config=config).scan_contents(relative)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for pre-commit hook.

    Args:
        args: Command line arguments (for testing)

    Returns:
        Exit code (0 = success, 1 = blocked)
    """
    parser = argparse.ArgumentParser(description="Pre-commit hook for unpinned package installs")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Scan every supported file in the repository, not just staged ones",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing hook without asking (install only)",
    )
    parser.add_argument(
        "install",
        nargs="?",
        help="Install pre-commit hook",
    )

    parsed_args = parser.parse_args(args)

    # Handle install command
    if parsed_args.install == "install":
        return install_hook(force=parsed_args.force)

    repo_root = get_repo_root()
    if repo_root is None:
        print("Error: Not a git repository", file=sys.stderr)
        return 1

    try:
        config = Config.discover(repo_root)
        if parsed_args.all:
            report = PinScanner(config=config).scan_paths([repo_root])
        else:
            files = select_scannable(get_staged_files(), config)
            if not files:
                # Nothing relevant staged, allow commit
                return 0
            print(f"Scanning {len(files)} file(s)...")
            report = scan_staged(repo_root, files, config)
    except PinScannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    TextReporter(color=config.color, show_header=False).print_report(report)

    if not report.success:
        print("Commit BLOCKED - pin package versions or use lockfile installs before committing")
        return 1
    return 0


def install_hook(force: bool = False) -> int:
    """
    Install the pre-commit hook in the current repository.

    Args:
        force: Overwrite an existing hook without prompting

    Returns:
        Exit code
    """
    repo_root = get_repo_root()
    if repo_root is None:
        print("Error: Not a git repository", file=sys.stderr)
        return 1

    hooks_dir = repo_root / ".git" / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)

    hook_path = hooks_dir / "pre-commit"

    hook_script = """#!/bin/sh
# Pin Scanner Pre-commit Hook
# Blocks commits that add unpinned npm/pnpm/yarn/bun installs

pin-scanner-pre-commit "$@"
exit_code=$?

if [ $exit_code -ne 0 ]; then
    echo ""
    echo "To bypass this check (not recommended), use: git commit --no-verify"
fi

exit $exit_code
"""

    # Check if hook already exists
    if hook_path.exists() and not force:
        print(f"Warning: Pre-commit hook already exists at {hook_path}")
        response = input("Overwrite? [y/N] ").strip().lower()
        if response != "y":
            print("Aborted")
            return 1

    hook_path.write_text(hook_script)
    hook_path.chmod(0o755)

    print(f"Pre-commit hook installed at {hook_path}")
    print("\nConfiguration:")
    print("  Create .pin-scanner.yaml in your repo root to customize discovery:")
    print("  pin-scanner generate-config -o .pin-scanner.yaml")

    return 0


if __name__ == "__main__":
    sys.exit(main())
