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

"""Pin Scanner exceptions.

The detection engine itself never raises on file content: malformed lines
are tokenized best-effort and unknown commands are simply not applicable.
These exceptions cover the layers around it (configuration and discovery).
All exceptions inherit from PinScannerError for easy catching.

Example:
    >>> from pin_scanner.core.scanner import PinScanner
    >>> from pin_scanner.core.exceptions import DiscoveryError
    >>>
    >>> scanner = PinScanner()
    >>>
    >>> try:
    ...     report = scanner.scan_paths(["does/not/exist"])
    ... except DiscoveryError as e:
    ...     print(f"Nothing to scan: {e}")
"""


class PinScannerError(Exception):
    """Base exception for all Pin Scanner errors."""

    pass


class ConfigError(PinScannerError):
    """Raised when a configuration file cannot be loaded.

    This can indicate:
    - Invalid YAML syntax
    - A top-level value that is not a mapping
    - A setting with the wrong type or an unknown output format
    """

    pass


class DiscoveryError(PinScannerError):
    """Raised when a scan root does not exist."""

    pass
