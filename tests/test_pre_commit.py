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
Tests for the git pre-commit hook.
"""

import os
import subprocess
from unittest.mock import patch

from pin_scanner.config.config import Config
from pin_scanner.hooks import pre_commit
from pin_scanner.hooks.pre_commit import get_staged_files, install_hook, main, select_scannable

HOOK = "pin_scanner.hooks.pre_commit"


class TestStagedFiles:
    """Reading and filtering ``git diff --cached``."""

    def test_get_staged_files(self):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="README.md\nsrc/app.py\n\n", stderr="")

        with patch(f"{HOOK}.subprocess.run", return_value=completed) as run:
            assert get_staged_files() == ["README.md", "src/app.py"]

        assert run.call_args.args[0] == ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR"]

    def test_get_staged_files_outside_repo(self):
        error = subprocess.CalledProcessError(128, ["git"])

        with patch(f"{HOOK}.subprocess.run", side_effect=error):
            assert get_staged_files() == []

    def test_select_scannable(self):
        staged = [
            "README.md",
            "src/app.py",
            "node_modules/pkg/README.md",
            ".github/workflows/ci.yml",
            "Dockerfile",
            "package.json",
        ]

        assert select_scannable(staged, Config()) == [".github/workflows/ci.yml", "Dockerfile", "README.md"]


class TestHookMain:
    """Blocking or allowing a commit."""

    def test_blocks_on_violation(self, make_tree, capsys):
        root = make_tree({"Dockerfile": "FROM node:20\nRUN npm install\n"})

        with (
            patch(f"{HOOK}.get_repo_root", return_value=root),
            patch(f"{HOOK}.get_staged_files", return_value=["Dockerfile"]),
        ):
            assert main([]) == 1

        out = capsys.readouterr().out
        assert "✗ Dockerfile" in out
        assert "Commit BLOCKED" in out

    def test_allows_clean_files(self, make_tree, capsys):
        root = make_tree({"docs/setup.md": "`npm ci`\n"})

        with (
            patch(f"{HOOK}.get_repo_root", return_value=root),
            patch(f"{HOOK}.get_staged_files", return_value=["docs/setup.md"]),
        ):
            assert main([]) == 0

        assert "✓ No violations found!" in capsys.readouterr().out

    def test_nothing_relevant_staged(self, tmp_path):
        with (
            patch(f"{HOOK}.get_repo_root", return_value=tmp_path),
            patch(f"{HOOK}.get_staged_files", return_value=["src/app.py"]),
        ):
            assert main([]) == 0

    def test_not_a_repository(self, capsys):
        with patch(f"{HOOK}.get_repo_root", return_value=None):
            assert main([]) == 1

        assert "Not a git repository" in capsys.readouterr().err

    def test_all_scans_whole_repository(self, make_tree):
        root = make_tree(
            {
                ".pin-scanner.yaml": "respect_gitignore: false\n",
                "scripts/setup.sh": "yarn install\n",
            }
        )

        with (
            patch(f"{HOOK}.get_repo_root", return_value=root),
            patch(f"{HOOK}.get_staged_files") as staged,
        ):
            assert main(["--all"]) == 1

        staged.assert_not_called()

    def test_scan_staged_uses_repo_relative_paths(self, make_tree):
        root = make_tree({"a/b.sh": "pnpm add react\n"})

        report = pre_commit.scan_staged(root, ["a/b.sh"], Config())

        assert [v.file_path for v in report.violations] == ["a/b.sh"]


class TestInstallHook:
    """Writing ``.git/hooks/pre-commit``."""

    def test_install(self, tmp_path, capsys):
        with patch(f"{HOOK}.get_repo_root", return_value=tmp_path):
            assert install_hook() == 0

        hook_path = tmp_path / ".git" / "hooks" / "pre-commit"
        assert "pin-scanner-pre-commit" in hook_path.read_text()
        assert os.access(hook_path, os.X_OK)
        assert "Pre-commit hook installed" in capsys.readouterr().out

    def test_existing_hook_declined(self, tmp_path):
        hook_path = tmp_path / ".git" / "hooks" / "pre-commit"
        hook_path.parent.mkdir(parents=True)
        hook_path.write_text("#!/bin/sh\nexit 0\n")

        with (
            patch(f"{HOOK}.get_repo_root", return_value=tmp_path),
            patch("builtins.input", return_value="n"),
        ):
            assert install_hook() == 1

        assert hook_path.read_text() == "#!/bin/sh\nexit 0\n"

    def test_force_overwrites(self, tmp_path):
        hook_path = tmp_path / ".git" / "hooks" / "pre-commit"
        hook_path.parent.mkdir(parents=True)
        hook_path.write_text("old")

        with patch(f"{HOOK}.get_repo_root", return_value=tmp_path):
            assert main(["install", "--force"]) == 0

        assert "pin-scanner-pre-commit" in hook_path.read_text()

    def test_install_outside_repository(self, capsys):
        with patch(f"{HOOK}.get_repo_root", return_value=None):
            assert install_hook() == 1
