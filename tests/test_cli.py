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
Tests for the ``pin-scanner`` command-line interface.
"""

import json

import pytest

from pin_scanner.cli.cli import main
from pin_scanner.config.config import Config
from pin_scanner.config.constants import PinScannerConstants


@pytest.fixture
def clean_tree(make_tree):
    return make_tree({"Dockerfile": "FROM node:20\nRUN npm ci\n", "README.md": "`yarn install --immutable`\n"})


@pytest.fixture
def dirty_tree(make_tree):
    return make_tree({"setup.sh": "npm install\n", "README.md": "`yarn add lodash`\n"})


class TestScanCommand:
    """``pin-scanner scan``."""

    def test_clean_tree_exits_zero(self, clean_tree, capsys):
        assert main(["scan", str(clean_tree), "--no-gitignore", "--no-color"]) == 0

        out = capsys.readouterr().out
        assert "✓ No violations found!" in out
        assert "Files checked: 2" in out

    def test_violations_exit_one(self, dirty_tree, capsys):
        assert main(["scan", str(dirty_tree), "--no-gitignore", "--no-color"]) == 1

        out = capsys.readouterr().out
        assert "Line 1: Use 'npm ci' instead of 'npm install' for lockfile-based installations" in out
        assert "  > yarn add lodash" in out
        assert "✗ Found 2 violation(s) in 2 file(s)" in out

    def test_json_to_stdout(self, dirty_tree, capsys):
        assert main(["scan", str(dirty_tree), "--no-gitignore", "--format", "json"]) == 1

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["total_violations"] == 2

    def test_sarif_to_file(self, dirty_tree, tmp_path, capsys):
        output = tmp_path / "out" / "results.sarif"
        output.parent.mkdir()

        assert main(["scan", str(dirty_tree), "--no-gitignore", "--format", "sarif", "-o", str(output)]) == 1

        assert json.loads(output.read_text(encoding="utf-8"))["version"] == "2.1.0"
        assert f"Report saved to: {output}" in capsys.readouterr().out

    def test_text_to_file(self, clean_tree, tmp_path):
        output = tmp_path / "report.txt"

        assert main(["scan", str(clean_tree), "--no-gitignore", "-o", str(output)]) == 0
        assert "✓ No violations found!" in output.read_text(encoding="utf-8")

    def test_several_paths(self, dirty_tree, capsys):
        code = main(["scan", str(dirty_tree / "setup.sh"), str(dirty_tree / "README.md"), "--no-gitignore"])

        assert code == 1
        assert "✗ Found 2 violation(s) in 2 file(s)" in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        assert main(["scan", str(tmp_path / "missing")]) == 1
        assert "Error: Path does not exist" in capsys.readouterr().err

    def test_explicit_config(self, dirty_tree, tmp_path, capsys):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("exclude_globs: ['*.sh']\nrespect_gitignore: false\n")

        assert main(["scan", str(dirty_tree), "--config", str(config_path), "--no-color"]) == 1
        assert "✗ Found 1 violation(s) in 1 file(s)" in capsys.readouterr().out

    def test_discovered_config(self, dirty_tree, capsys):
        (dirty_tree / ".pin-scanner.yaml").write_text("output_format: json\nrespect_gitignore: false\n")

        assert main(["scan", str(dirty_tree)]) == 1
        assert json.loads(capsys.readouterr().out)["summary"]["files_scanned"] == 2

    def test_invalid_config(self, dirty_tree, tmp_path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("output_format: xml\n")

        assert main(["scan", str(dirty_tree), "--config", str(config_path)]) == 1
        assert "Error:" in capsys.readouterr().err


class TestOtherCommands:
    def test_list_rules(self, capsys):
        assert main(["list-rules"]) == 0

        out = capsys.readouterr().out
        assert "NPM_INSTALL_BARE" in out
        assert "BUN_ADD_UNPINNED" in out
        assert "Always compliant" in out

    def test_generate_config(self, tmp_path, capsys):
        output = tmp_path / ".pin-scanner.yaml"

        assert main(["generate-config", "-o", str(output)]) == 0
        assert Config.from_yaml(output) == Config()
        assert "Generated config" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])

        assert exc.value.code == 0
        assert PinScannerConstants.VERSION in capsys.readouterr().out
