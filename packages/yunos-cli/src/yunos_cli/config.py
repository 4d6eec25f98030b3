# SPDX-License-Identifier: MIT
"""CLI configuration loading from yunos.toml."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "yunos.toml"
DEFAULT_PLATFORM_DIR = Path("platforms") / "yunos"


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


@dataclass
class CLIConfig:
    """CLI configuration for one application project.

    Attributes:
        project_dir: Application project root (holds config.xml and www)
        platform_dir: YunOS platform project, relative to project_dir
    """

    project_dir: Path
    platform_dir: Path = DEFAULT_PLATFORM_DIR

    @property
    def platform_root(self) -> Path:
        return self.project_dir / self.platform_dir

    @classmethod
    def from_toml(cls, project_dir: str | Path) -> "CLIConfig":
        """Load configuration from ``yunos.toml`` in the project directory.

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If yunos.toml doesn't exist
        """
        project_path = Path(project_dir)
        config_path = project_path / CONFIG_FILENAME

        if not config_path.exists():
            raise FileNotFoundError(f"{CONFIG_FILENAME} not found in {project_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {CONFIG_FILENAME}: {e}") from e

        return cls.from_toml_dict(data, project_path)

    @classmethod
    def from_toml_dict(cls, data: dict[str, Any], project_dir: Path) -> "CLIConfig":
        """Create CLIConfig from a parsed yunos.toml dictionary."""
        section = data.get("yunos", {})
        if not isinstance(section, dict):
            raise ConfigError("[yunos] must be a table")

        platform_dir = section.get("platform_dir", DEFAULT_PLATFORM_DIR.as_posix())
        if not isinstance(platform_dir, str) or not platform_dir:
            raise ConfigError("[yunos].platform_dir must be a non-empty string")

        return cls(project_dir=project_dir, platform_dir=Path(platform_dir))


def _is_project_root(path: Path) -> bool:
    # A platform project also holds config.xml and www, but ships defaults.xml
    return (
        (path / "config.xml").is_file()
        and (path / "www").is_dir()
        and not (path / "cordova" / "defaults.xml").exists()
    )


def find_project_root(start_dir: Optional[str | Path] = None) -> Path:
    """Find the application project root by looking for config.xml and www/.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root directory

    Raises:
        ConfigError: If no project root is found
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while True:
        if _is_project_root(current):
            return current
        if current == current.parent:
            break
        current = current.parent

    raise ConfigError("Could not find project root (no config.xml with a www directory found)")


def load_config(project_dir: Optional[str | Path] = None) -> CLIConfig:
    """Load CLI configuration for the project.

    Args:
        project_dir: Project directory (defaults to finding project root)

    Returns:
        CLIConfig instance

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    project_path = find_project_root(project_dir)

    if (project_path / CONFIG_FILENAME).exists():
        return CLIConfig.from_toml(project_path)

    return CLIConfig(project_dir=project_path)
