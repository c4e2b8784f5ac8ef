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
Shell script fragment extractor.
"""

from collections.abc import Iterator
from pathlib import PurePath

from ...config.constants import PinScannerConstants
from ..models import FileType, SourceFragment
from .base import FragmentExtractor, as_posix_path, iter_script_lines


class ShellScriptExtractor(FragmentExtractor):
    """Every non-blank, non-comment logical line of a ``.sh`` file is a fragment."""

    file_type = FileType.SHELL

    def __init__(self):
        super().__init__("shell")

    def matches(self, path: PurePath) -> bool:
        return as_posix_path(path).suffix.lower() == PinScannerConstants.SHELL_SUFFIX

    def extract(self, content: str, file_path: str) -> Iterator[SourceFragment]:
        return iter_script_lines(content.splitlines(), file_path)
