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
Tests for the per-format fragment extractors.
"""

import pytest

from pin_scanner.core.extractors import (
    DockerfileExtractor,
    MarkdownExtractor,
    ShellScriptExtractor,
    WorkflowExtractor,
    detect_file_type,
    select_extractor,
)
from pin_scanner.core.models import FileType


def _fragments(extractor, content: str, file_path: str = "test"):
    return [(f.line_number, f.raw_text) for f in extractor.extract(content, file_path)]


class TestExtractorSelection:
    """Format selection is based on the path only."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("Dockerfile", FileType.DOCKERFILE),
            ("Dockerfile.prod", FileType.DOCKERFILE),
            ("docker/Dockerfile", FileType.DOCKERFILE),
            ("build/app.dockerfile", FileType.DOCKERFILE),
            ("README.md", FileType.MARKDOWN),
            ("docs/guide/INSTALL.MD", FileType.MARKDOWN),
            ("scripts/setup.sh", FileType.SHELL),
            (".github/workflows/ci.yml", FileType.WORKFLOW),
            (".github/workflows/release.yaml", FileType.WORKFLOW),
            ("repo/.github/workflows/ci.yml", FileType.WORKFLOW),
        ],
    )
    def test_supported(self, path, expected):
        assert detect_file_type(path) is expected

    @pytest.mark.parametrize(
        "path",
        ["ci.yml", ".github/ci.yml", "config/workflows/ci.yml", "package.json", "notes.txt", "dockerfile"],
    )
    def test_unsupported(self, path):
        assert select_extractor(path) is None

    def test_windows_separators(self):
        assert detect_file_type(".github\\workflows\\ci.yml") is FileType.WORKFLOW


class TestDockerfileExtractor:
    """RUN instruction extraction."""

    def setup_method(self):
        self.extractor = DockerfileExtractor()

    def test_run_instruction(self):
        content = "FROM node:20\nWORKDIR /app\nRUN npm ci\n"
        assert _fragments(self.extractor, content) == [(3, "npm ci")]

    def test_other_instructions_ignored(self):
        content = 'FROM node:20\nENV NPM_INSTALL="npm install"\nCMD ["npm", "start"]\n'
        assert _fragments(self.extractor, content) == []

    def test_continuation_reported_at_first_line(self):
        content = "FROM node:20\nRUN apt-get update && \\\n    # refresh deps\n    npm install\n"
        assert _fragments(self.extractor, content) == [(2, "apt-get update && npm install")]

    def test_case_insensitive_run(self):
        assert _fragments(self.extractor, "run npm install\n") == [(1, "npm install")]

    def test_runner_prefix_is_not_run(self):
        assert _fragments(self.extractor, "RUNNER npm install\n") == []

    def test_run_flags_stripped(self):
        content = "RUN --mount=type=cache,target=/root/.npm --network=none npm ci\n"
        assert _fragments(self.extractor, content) == [(1, "npm ci")]

    def test_exec_form(self):
        assert _fragments(self.extractor, 'RUN ["npm", "install"]\n') == [(1, "npm install")]

    def test_exec_form_with_shell(self):
        assert _fragments(self.extractor, 'RUN ["/bin/sh", "-c", "npm install lodash"]\n') == [
            (1, "npm install lodash")
        ]

    def test_invalid_exec_form_passed_through(self):
        assert _fragments(self.extractor, 'RUN ["npm", "ci"\n') == [(1, '["npm", "ci"')]

    def test_heredoc_script_lines(self):
        content = "FROM node:20\nRUN <<EOF\nnpm ci\nnpm install lodash\nEOF\nRUN echo done\n"
        fragments = _fragments(self.extractor, content)

        assert (3, "npm ci") in fragments
        assert (4, "npm install lodash") in fragments
        assert (6, "echo done") in fragments

    def test_heredoc_data_is_not_scanned(self):
        content = "RUN cat <<EOF > /app/README\nnpm install foo\nEOF\nRUN npm ci\n"
        fragments = _fragments(self.extractor, content)

        assert all("npm install foo" not in text for _, text in fragments)
        assert (4, "npm ci") in fragments


class TestMarkdownExtractor:
    """Fenced blocks and inline code spans."""

    def setup_method(self):
        self.extractor = MarkdownExtractor()

    def test_fenced_and_inline(self):
        content = (
            "# Setup\n"
            "\n"
            "Run `npm install` first.\n"
            "\n"
            "```bash\n"
            "$ npm install lodash\n"
            "pnpm install --frozen-lockfile\n"
            "```\n"
            "\n"
            "Prose mentioning npm install without code.\n"
        )
        assert _fragments(self.extractor, content) == [
            (3, "npm install"),
            (6, "npm install lodash"),
            (7, "pnpm install --frozen-lockfile"),
        ]

    def test_prompt_markers_stripped(self):
        content = "```\n> yarn add lodash\n$ bun install\n```\n"
        assert _fragments(self.extractor, content) == [(2, "yarn add lodash"), (3, "bun install")]

    def test_tilde_fence(self):
        content = "~~~sh\nnpm install\n~~~\n"
        assert _fragments(self.extractor, content) == [(2, "npm install")]

    def test_closing_fence_must_be_as_long(self):
        content = "````\n```\nnpm install\n````\n`npm ci`\n"
        fragments = _fragments(self.extractor, content)

        assert (3, "npm install") in fragments
        assert (5, "npm ci") in fragments

    def test_unclosed_fence_runs_to_end(self):
        content = "```\nnpm install\n"
        assert _fragments(self.extractor, content) == [(2, "npm install")]

    def test_continuation_inside_fence(self):
        content = "```sh\nnpm install \\\n  lodash\n```\n"
        assert _fragments(self.extractor, content) == [(2, "npm install lodash")]

    def test_double_backtick_span(self):
        assert _fragments(self.extractor, "Use ``npm ci`` here.\n") == [(1, "npm ci")]

    def test_several_inline_spans_on_one_line(self):
        content = "Use `npm ci` rather than `npm install`.\n"
        assert _fragments(self.extractor, content) == [(1, "npm ci"), (1, "npm install")]

    def test_single_word_inline_span_is_a_name(self):
        content = "This project uses `yarn` with `bun` for scripts.\n"
        assert _fragments(self.extractor, content) == []

    def test_single_word_fenced_line_is_a_command(self):
        assert _fragments(self.extractor, "```\nyarn\n```\n") == [(2, "yarn")]

    def test_indented_fence_in_list(self):
        content = "1. Install:\n\n    ```\n    npm install\n    ```\n"
        assert _fragments(self.extractor, content) == [(4, "npm install")]


class TestShellScriptExtractor:
    """Line-by-line shell extraction."""

    def setup_method(self):
        self.extractor = ShellScriptExtractor()

    def test_script(self):
        content = (
            "#!/bin/bash\n"
            "set -e\n"
            "# npm install\n"
            "\n"
            "npm ci\n"
            "npm install \\\n"
            "  lodash\n"
            "cat <<EOF > notes.txt\n"
            "npm install foo\n"
            "EOF\n"
            "bash <<'SCRIPT'\n"
            "yarn add bar\n"
            "SCRIPT\n"
        )
        assert _fragments(self.extractor, content) == [
            (2, "set -e"),
            (5, "npm ci"),
            (6, "npm install lodash"),
            (8, "cat <<EOF > notes.txt"),
            (11, "bash <<'SCRIPT'"),
            (12, "yarn add bar"),
        ]

    def test_indented_comment_skipped(self):
        assert _fragments(self.extractor, "if true; then\n    # npm install\nfi\n") == [
            (1, "if true; then"),
            (3, "fi"),
        ]

    def test_here_string_is_not_heredoc(self):
        content = "grep x <<< \"$v\"\nnpm ci\n"
        assert _fragments(self.extractor, content) == [(1, 'grep x <<< "$v"'), (2, "npm ci")]


class TestWorkflowExtractor:
    """``run:`` step extraction."""

    def setup_method(self):
        self.extractor = WorkflowExtractor()

    def test_inline_and_block_run(self):
        content = (
            "name: CI\n"
            "on: push\n"
            "jobs:\n"
            "  build:\n"
            "    runs-on: ubuntu-latest\n"
            "    steps:\n"
            "      - uses: actions/checkout@v4\n"
            "      - run: npm install\n"
            "      - name: Install\n"
            "        run: |\n"
            "          pnpm install\n"
            "          # yarn add foo\n"
            "          bun install --frozen-lockfile\n"
            "      - name: Quoted\n"
            '        run: "yarn add lodash"\n'
        )
        assert _fragments(self.extractor, content) == [
            (8, "npm install"),
            (11, "pnpm install"),
            (13, "bun install --frozen-lockfile"),
            (15, "yarn add lodash"),
        ]

    def test_folded_block_with_chomping(self):
        content = "steps:\n  - run: >-\n      npm ci\n  - run: echo hi\n"
        assert _fragments(self.extractor, content) == [(3, "npm ci"), (4, "echo hi")]

    def test_block_with_blank_lines_and_continuation(self):
        content = (
            "    steps:\n"
            "      - run: |\n"
            "          npm install \\\n"
            "            lodash\n"
            "\n"
            "          npm ci\n"
            "      - uses: actions/cache@v4\n"
        )
        assert _fragments(self.extractor, content) == [(3, "npm install lodash"), (6, "npm ci")]

    def test_single_quoted_value(self):
        assert _fragments(self.extractor, "      - run: 'echo ''hi'' && npm ci'\n") == [
            (1, "echo 'hi' && npm ci")
        ]

    def test_runs_on_is_not_run(self):
        assert _fragments(self.extractor, "    runs-on: ubuntu-latest\n") == []

    def test_block_at_end_of_file(self):
        assert _fragments(self.extractor, "- run: |\n    yarn install\n") == [(2, "yarn install")]
