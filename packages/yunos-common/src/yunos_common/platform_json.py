# SPDX-License-Identifier: MIT
"""Per-platform plugin state file (``<platform>.json``), read during prepare.

The file records the config munge accumulated by installed plugins::

    {
        "config_munge": {
            "files": {
                "config.xml": {
                    "parents": {
                        "/*": [{"xml": "<feature name=\\"Device\\">...</feature>", "count": 1}]
                    }
                }
            }
        },
        "installed_plugins": {"cordova-plugin-device": {}},
        "dependent_plugins": {}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class PlatformJsonError(Exception):
    """Raised when the platform state file cannot be read."""

    pass


def _empty_root() -> dict[str, Any]:
    return {
        "prepare_queue": {"installed": [], "uninstalled": []},
        "config_munge": {"files": {}},
        "installed_plugins": {},
        "dependent_plugins": {},
    }


@dataclass
class PlatformJson:
    """Plugin state for one platform of a project.

    Attributes:
        path: Location of the ``<platform>.json`` file
        platform: Platform name
        root: Parsed file contents
    """

    path: Path
    platform: str
    root: dict[str, Any] = field(default_factory=_empty_root)

    @classmethod
    def load(cls, platform_root: str | Path, platform: str) -> "PlatformJson":
        """Load the state file, or start empty if there isn't one yet.

        Raises:
            PlatformJsonError: If the file exists but is not valid JSON
        """
        path = Path(platform_root) / f"{platform}.json"
        if not path.exists():
            return cls(path=path, platform=platform)

        try:
            with open(path, encoding="utf-8") as f:
                root = json.load(f)
        except json.JSONDecodeError as e:
            raise PlatformJsonError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(root, dict):
            raise PlatformJsonError(f"{path} must contain a JSON object")

        defaults = _empty_root()
        for key, value in defaults.items():
            root.setdefault(key, value)
        return cls(path=path, platform=platform, root=root)

    @property
    def config_munge(self) -> dict[str, Any]:
        munge = self.root.setdefault("config_munge", {"files": {}})
        munge.setdefault("files", {})
        return munge
