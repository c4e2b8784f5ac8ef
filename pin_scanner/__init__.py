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
Pin Scanner - Find unpinned JavaScript package installs in project files.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m pin_scanner.cli.cli`` and the pre-commit hook from
    importing every submodule up front.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "PinScannerConstants": (".config.constants", "PinScannerConstants"),
        "PinScannerError": (".core.exceptions", "PinScannerError"),
        "ConfigError": (".core.exceptions", "ConfigError"),
        "DiscoveryError": (".core.exceptions", "DiscoveryError"),
        "FileScanResult": (".core.models", "FileScanResult"),
        "FileType": (".core.models", "FileType"),
        "Manager": (".core.models", "Manager"),
        "ScanReport": (".core.models", "ScanReport"),
        "SourceFragment": (".core.models", "SourceFragment"),
        "Violation": (".core.models", "Violation"),
        "RULES": (".core.rules", "RULES"),
        "classify": (".core.classifier", "classify"),
        "tokenize": (".core.tokenizer", "tokenize"),
        "PinScanner": (".core.scanner", "PinScanner"),
        "scan_file": (".core.scanner", "scan_file"),
        "scan_contents": (".core.scanner", "scan_contents"),
        "scan_directory": (".core.scanner", "scan_directory"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PinScanner",
    "scan_file",
    "scan_contents",
    "scan_directory",
    "classify",
    "tokenize",
    "RULES",
    "FileScanResult",
    "FileType",
    "Manager",
    "ScanReport",
    "SourceFragment",
    "Violation",
    "PinScannerError",
    "ConfigError",
    "DiscoveryError",
    "Config",
    "PinScannerConstants",
]
