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
Configuration class for Pin Scanner.

Configuration covers file discovery and output only; the rule table is
compiled in and cannot be changed from a config file.
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from ..core.exceptions import ConfigError
from .constants import PinScannerConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Configuration for Pin Scanner.

    Values come from the dataclass defaults, then an optional
    ``.pin-scanner.yaml`` file, then environment variables.
    """

    # Discovery
    exclude_dirs: list[str] = field(default_factory=lambda: list(PinScannerConstants.DEFAULT_EXCLUDE_DIRS))
    exclude_globs: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    max_file_size_mb: int = PinScannerConstants.DEFAULT_MAX_FILE_SIZE_MB

    # Output
    output_format: str = PinScannerConstants.DEFAULT_OUTPUT_FORMAT
    color: bool = True

    def __post_init__(self):
        """Apply environment variable overrides."""

        # Output format from environment (only if still at default)
        if self.output_format == PinScannerConstants.DEFAULT_OUTPUT_FORMAT:
            if env_format := os.getenv(PinScannerConstants.ENV_FORMAT):
                if env_format.lower() in PinScannerConstants.OUTPUT_FORMATS:
                    self.output_format = env_format.lower()
                else:
                    logger.warning(
                        "Ignoring %s=%s (expected one of: %s)",
                        PinScannerConstants.ENV_FORMAT,
                        env_format,
                        ", ".join(PinScannerConstants.OUTPUT_FORMATS),
                    )

        if os.getenv(PinScannerConstants.ENV_RESPECT_GITIGNORE, "").lower() in ("false", "0"):
            self.respect_gitignore = False

        # https://no-color.org: any non-empty value disables color
        if os.getenv(PinScannerConstants.ENV_NO_COLOR):
            self.color = False

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from defaults and environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """
        Load configuration from a YAML file.

        The file is merged on top of the defaults so that it only needs to
        name the settings it changes.

        Raises:
            ConfigError: If the file is missing, is not valid YAML, or holds
                a setting of the wrong type
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")

        return cls._from_dict(raw, source=str(path))

    @classmethod
    def discover(cls, root: str | Path) -> "Config":
        """Load the config file found in *root*, or the defaults if there is none."""
        root = Path(root)
        directory = root if root.is_dir() else root.parent
        for name in PinScannerConstants.CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                logger.debug("Using config file %s", candidate)
                return cls.from_yaml(candidate)
        return cls()

    def to_yaml(self, path: str | Path) -> None:
        """Dump the effective configuration to a YAML file for editing."""
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(self.to_yaml_str())

    def to_yaml_str(self) -> str:
        header = (
            "# Pin Scanner configuration\n"
            "# Place this file at the root of the scanned tree as .pin-scanner.yaml.\n"
            "# Omitted settings use the built-in defaults.\n\n"
        )
        return header + yaml.dump(asdict(self), default_flow_style=False, sort_keys=False, width=120)

    @classmethod
    def _from_dict(cls, d: dict[str, Any], source: str = "<dict>") -> "Config":
        known = {f.name for f in fields(cls)}
        for key in d:
            if key not in known:
                logger.warning("Ignoring unknown config key %r in %s", key, source)

        values = {key: value for key, value in d.items() if key in known}
        for key in ("exclude_dirs", "exclude_globs"):
            if key in values and not _is_str_list(values[key]):
                raise ConfigError(f"{source}: '{key}' must be a list of strings")
        for key in ("respect_gitignore", "color"):
            if key in values and not isinstance(values[key], bool):
                raise ConfigError(f"{source}: '{key}' must be true or false")
        if "max_file_size_mb" in values:
            size = values["max_file_size_mb"]
            if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
                raise ConfigError(f"{source}: 'max_file_size_mb' must be a positive integer")
        if "output_format" in values and values["output_format"] not in PinScannerConstants.OUTPUT_FORMATS:
            raise ConfigError(
                f"{source}: 'output_format' must be one of {', '.join(PinScannerConstants.OUTPUT_FORMATS)}"
            )

        return cls(**values)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
