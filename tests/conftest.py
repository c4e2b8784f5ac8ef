# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pin_scanner.config.config import Config
from pin_scanner.core.models import SourceFragment
from pin_scanner.core.scanner import PinScanner

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

_ENV_OVERRIDES = ("PIN_SCANNER_FORMAT", "PIN_SCANNER_RESPECT_GITIGNORE", "NO_COLOR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's environment from changing config defaults."""
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> Config:
    """Config that does not consult git, so results do not depend on the host."""
    return Config(respect_gitignore=False)


@pytest.fixture
def scanner(config: Config) -> PinScanner:
    return PinScanner(config=config)


@pytest.fixture
def make_fragment() -> Callable[..., SourceFragment]:
    """Factory for SourceFragment objects."""

    def _factory(raw_text: str, file_path: str = "script.sh", line_number: int = 1) -> SourceFragment:
        return SourceFragment(file_path=file_path, line_number=line_number, raw_text=raw_text)

    return _factory


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative path: content}`` under ``tmp_path`` and return the root."""

    def _factory(files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _factory
