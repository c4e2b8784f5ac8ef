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
Constants for Pin Scanner.
"""

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class PinScannerConstants:
    """Constants used throughout the scanner."""

    VERSION = PACKAGE_VERSION
    TOOL_NAME = "pin-scanner"

    # Supported file formats
    DOCKERFILE_PREFIX = "Dockerfile"
    DOCKERFILE_SUFFIX = ".dockerfile"
    MARKDOWN_SUFFIX = ".md"
    SHELL_SUFFIX = ".sh"
    WORKFLOW_SUFFIXES = (".yml", ".yaml")
    WORKFLOW_DIR_PARTS = (".github", "workflows")

    # Default values
    DEFAULT_EXCLUDE_DIRS = ("node_modules", ".git")
    DEFAULT_MAX_FILE_SIZE_MB = 10
    DEFAULT_OUTPUT_FORMAT = "text"
    OUTPUT_FORMATS = ("text", "json", "sarif")

    # Config file names looked up in the scan root, in order
    CONFIG_FILENAMES = (".pin-scanner.yaml", ".pin-scanner.yml")

    # Environment overrides
    ENV_FORMAT = "PIN_SCANNER_FORMAT"
    ENV_RESPECT_GITIGNORE = "PIN_SCANNER_RESPECT_GITIGNORE"
    ENV_NO_COLOR = "NO_COLOR"
