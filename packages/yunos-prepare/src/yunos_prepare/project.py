# SPDX-License-Identifier: MIT
"""Project and platform locations for the YunOS platform."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from yunos_common import ConfigParser

PLATFORM = "yunos"

# Project-relative folder whose contents override www for this platform
MERGES_DIR = Path("merges") / PLATFORM


class PrepareError(Exception):
    """Raised when the platform project is missing a required file."""

    pass


@dataclass(frozen=True)
class Locations:
    """Fixed layout of a YunOS platform project.

    Attributes:
        root: Platform project root (``platforms/yunos``)
        www: Prepared web assets
        platform_www: Platform-provided web assets (cordova.js and friends)
        config_xml: Materialised platform config.xml
        default_config_xml: Template the platform config.xml is reset from
        res: Icon and splash resource tree
        manifest: Native manifest.json
    """

    root: Path
    www: Path
    platform_www: Path
    config_xml: Path
    default_config_xml: Path
    res: Path
    manifest: Path

    @classmethod
    def for_platform(cls, platform_root: str | Path) -> "Locations":
        root = Path(platform_root)
        return cls(
            root=root,
            www=root / "www",
            platform_www=root / "platform_www",
            config_xml=root / "config.xml",
            default_config_xml=root / "cordova" / "defaults.xml",
            res=root / "res",
            manifest=root / "manifest.json",
        )


@dataclass
class CordovaProject:
    """The application project being prepared.

    Attributes:
        root: Project root directory
        project_config: Parsed project config.xml
        www: Project web assets directory
    """

    root: Path
    project_config: ConfigParser
    www: Path

    @classmethod
    def from_root(cls, root: str | Path) -> "CordovaProject":
        """Load the project rooted at ``root``.

        Raises:
            ConfigParseError: If ``root/config.xml`` is missing or malformed
        """
        root = Path(root)
        return cls(
            root=root,
            project_config=ConfigParser(root / "config.xml"),
            www=root / "www",
        )


def relative_to_root(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root``, even when it lies outside it."""
    return Path(os.path.relpath(path, root)).as_posix()
