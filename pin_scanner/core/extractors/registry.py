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
Extractor selection by file path.

Format selection looks only at the path, never at file content, so the same
file always goes through the same extractor.
"""

import logging
from pathlib import PurePath

from ..models import FileType
from .base import FragmentExtractor
from .dockerfile import DockerfileExtractor
from .markdown import MarkdownExtractor
from .shell import ShellScriptExtractor
from .workflow import WorkflowExtractor

logger = logging.getLogger(__name__)

# Checked in order; the first match wins
EXTRACTORS: tuple[FragmentExtractor, ...] = (
    DockerfileExtractor(),
    MarkdownExtractor(),
    ShellScriptExtractor(),
    WorkflowExtractor(),
)


def select_extractor(path: str | PurePath) -> FragmentExtractor | None:
    """Return the extractor for *path*, or ``None`` for unsupported files."""
    for extractor in EXTRACTORS:
        if extractor.matches(PurePath(path)):
            logger.debug("Using %s extractor for %s", extractor.get_name(), path)
            return extractor
    logger.debug("No extractor matches %s", path)
    return None


def detect_file_type(path: str | PurePath) -> FileType | None:
    extractor = select_extractor(path)
    return extractor.file_type if extractor else None


def is_supported(path: str | PurePath) -> bool:
    """True if *path* names a file format the scanner understands."""
    return any(extractor.matches(PurePath(path)) for extractor in EXTRACTORS)
