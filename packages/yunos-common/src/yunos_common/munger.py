# SPDX-License-Identifier: MIT
"""Replay of plugin-contributed config changes.

Installed plugins record XML fragments in ``<platform>.json``. After the
platform ``config.xml`` is reset from its template, the munger grafts every
recorded fragment back, in the order it was recorded, into each file it
targets.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional

from .platform_json import PlatformJson
from .xml_helpers import (
    XmlError,
    graft_xml,
    graft_xml_merge,
    graft_xml_overwrite,
    parse_elementtree,
    parse_fragment,
    prune_xml_remove,
    write_elementtree,
)

logger = logging.getLogger(__name__)

_GRAFTERS = {
    None: graft_xml,
    "merge": graft_xml_merge,
    "overwrite": graft_xml_overwrite,
    "remove": prune_xml_remove,
}


class MungeError(Exception):
    """Raised when a recorded fragment cannot be applied."""

    pass


class ConfigKeeper:
    """Cache of parsed target documents, written back by ``save_all``."""

    def __init__(self, project_dir: Path, config_xml: Path) -> None:
        self.project_dir = project_dir
        self.config_xml = config_xml
        self._docs: dict[Path, ET.ElementTree] = {}

    def resolve(self, file: str) -> Path:
        """Map a munge file name to a path inside the platform project."""
        if file == "config.xml":
            return self.config_xml
        return self.project_dir / file

    def get(self, file: str) -> ET.ElementTree:
        path = self.resolve(file)
        if path not in self._docs:
            try:
                self._docs[path] = parse_elementtree(path)
            except (FileNotFoundError, XmlError) as e:
                raise MungeError(f"Cannot load {file} for munging: {e}") from e
        return self._docs[path]

    def save_all(self) -> None:
        for path, doc in self._docs.items():
            write_elementtree(doc, path)
        self._docs.clear()


class PlatformMunger:
    """Applies the global config munge of a platform.

    Args:
        platform: Platform name
        project_dir: Platform project root (``platforms/<platform>``)
        platform_json: Loaded plugin state for the platform
        config_xml: Platform config file (defaults to ``project_dir/config.xml``)
    """

    def __init__(
        self,
        platform: str,
        project_dir: str | Path,
        platform_json: PlatformJson,
        config_xml: Optional[str | Path] = None,
    ) -> None:
        self.platform = platform
        self.project_dir = Path(project_dir)
        self.platform_json = platform_json
        self.config_keeper = ConfigKeeper(
            self.project_dir,
            Path(config_xml) if config_xml else self.project_dir / "config.xml",
        )

    def apply_file_munge(self, file: str, munge: dict[str, Any]) -> None:
        """Graft every live fragment recorded for one file."""
        if not file.endswith(".xml"):
            logger.debug("Skipping munge for non-XML file %s", file)
            return

        root = self.config_keeper.get(file).getroot()
        for selector, entries in munge.get("parents", {}).items():
            for entry in entries:
                if entry.get("count", 1) <= 0:
                    continue
                mode = entry.get("mode")
                grafter = _GRAFTERS.get(mode)
                if grafter is None:
                    raise MungeError(f"Unknown munge mode {mode!r} for {file}")
                try:
                    node = parse_fragment(entry.get("xml", ""))
                    applied = grafter(root, [node], selector)
                except XmlError as e:
                    raise MungeError(f"Bad munge fragment for {file} at {selector}: {e}") from e
                if not applied:
                    raise MungeError(f"Unable to graft xml at selector {selector!r} from {file}")

    def reapply_global_munge(self) -> "PlatformMunger":
        """Reapply every recorded fragment to its target file."""
        files = self.platform_json.config_munge["files"]
        for file, munge in files.items():
            logger.debug("Reapplying plugin config changes to %s", file)
            self.apply_file_munge(file, munge)
        return self

    def save_all(self) -> "PlatformMunger":
        self.config_keeper.save_all()
        return self
