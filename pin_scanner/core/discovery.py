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
File discovery: find the files the scanner understands and read them.

Discovery order is the sorted relative path of every file under each root,
so reports are reproducible across runs and platforms.
"""

import fnmatch
import logging
import os
import subprocess
from pathlib import Path

from ..config.config import Config
from .exceptions import DiscoveryError
from .extractors import is_supported

logger = logging.getLogger(__name__)


def discover_files(root: str | Path, config: Config | None = None) -> list[Path]:
    """
    Find every supported file under *root*.

    Args:
        root: Directory to walk, or a single file
        config: Discovery settings (defaults if omitted)

    Returns:
        Supported files in sorted order

    Raises:
        DiscoveryError: If *root* does not exist
    """
    config = config or Config()
    root = Path(root)
    if not root.exists():
        raise DiscoveryError(f"Path does not exist: {root}")

    if root.is_file():
        if not is_supported(root.resolve()):
            logger.debug("Skipping unsupported file %s", root)
            return []
        return _filter_gitignored([root], root.parent, config)

    found: list[Path] = []
    resolved_root = root.resolve()
    exclude_dirs = set(config.exclude_dirs)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)
        for name in filenames:
            path = Path(dirpath) / name
            relative = path.relative_to(root).as_posix()
            if _is_glob_excluded(relative, config.exclude_globs):
                logger.debug("Excluded by glob: %s", relative)
                continue
            if not is_supported(resolved_root / relative):
                continue
            found.append(path)

    found.sort(key=lambda p: p.relative_to(root).as_posix())
    return _filter_gitignored(found, root, config)


def discover_all(paths: list[str | Path], config: Config | None = None) -> list[Path]:
    """Discover files under several roots, keeping the first occurrence of each."""
    seen: set[Path] = set()
    result: list[Path] = []
    for root in paths:
        for path in discover_files(root, config):
            key = path.resolve()
            if key not in seen:
                seen.add(key)
                result.append(path)
    return result


def read_files(paths: list[Path], config: Config | None = None) -> dict[str, str]:
    """
    Read *paths* as UTF-8 text.

    Files that are too large, unreadable or not valid UTF-8 are logged and
    left out of the result.

    Returns:
        Mapping of path to content, in the order of *paths*
    """
    config = config or Config()
    contents: dict[str, str] = {}
    for path in paths:
        try:
            size = path.stat().st_size
            if size > config.max_file_size_bytes:
                logger.warning(
                    "Skipping %s: %d bytes exceeds the %d MB limit", path, size, config.max_file_size_mb
                )
                continue
            contents[str(path)] = path.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.warning("Skipping %s: not valid UTF-8", path)
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)
    return contents


def _is_glob_excluded(relative: str, patterns: list[str]) -> bool:
    name = relative.rsplit("/", 1)[-1]
    return any(fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(name, pattern) for pattern in patterns)


def _filter_gitignored(paths: list[Path], cwd: Path, config: Config) -> list[Path]:
    """Drop *paths* that git ignores; a no-op outside a work tree."""
    if not config.respect_gitignore or not paths:
        return paths

    relative = [os.path.relpath(p, cwd) for p in paths]
    try:
        result = subprocess.run(
            ["git", "check-ignore", "--stdin"],
            input="\n".join(relative) + "\n",
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        logger.warning("git not found; .gitignore rules are not applied")
        return paths

    # 0: some paths ignored, 1: none ignored, anything else: not a work tree
    if result.returncode not in (0, 1):
        logger.debug("git check-ignore unavailable in %s: %s", cwd, result.stderr.strip())
        return paths

    ignored = {line.strip() for line in result.stdout.splitlines() if line.strip()}
    if ignored:
        logger.debug("Ignored by .gitignore: %s", ", ".join(sorted(ignored)))
    return [p for p, rel in zip(paths, relative) if rel not in ignored]
