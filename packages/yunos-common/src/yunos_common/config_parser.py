# SPDX-License-Identifier: MIT
"""Accessor for Cordova ``config.xml`` descriptors.

The same class reads the platform-agnostic project descriptor and the
materialised platform copy under ``platforms/yunos``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .xml_helpers import XmlError, children_by_tag, parse_elementtree, write_elementtree


class ConfigParseError(Exception):
    """Raised when a config.xml file is missing or malformed."""

    pass


@dataclass(frozen=True, slots=True)
class Resource:
    """An ``<icon>`` or ``<splash>`` declaration.

    Attributes:
        src: Source path, relative to the project root
        density: Density tag (e.g. "mdpi"), if declared
        width: Pixel width, if declared
        height: Pixel height, if declared
        platform: Platform name when declared inside a ``<platform>`` block
    """

    src: str
    density: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    platform: Optional[str] = None

    @property
    def size(self) -> Optional[int]:
        """Return the declared width, falling back to the height."""
        return self.width or self.height


@dataclass(frozen=True, slots=True)
class FeatureParam:
    """A ``<param name=... value=...>`` child of a feature."""

    name: str
    value: str


@dataclass(frozen=True)
class Feature:
    """A ``<feature>`` declaration with its ordered parameters."""

    name: str
    params: tuple[FeatureParam, ...] = ()

    def param(self, name: str) -> Optional[str]:
        """Return the value of the last parameter called ``name``."""
        value = None
        for param in self.params:
            if param.name == name:
                value = param.value
        return value


def _to_int(value: Optional[str]) -> Optional[int]:
    # Non-numeric and zero sizes count as undeclared
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number or None


class ConfigParser:
    """Read and write a Cordova ``config.xml`` file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            self.doc = parse_elementtree(self.path)
        except FileNotFoundError as e:
            raise ConfigParseError(f"config.xml not found: {self.path}") from e
        except XmlError as e:
            raise ConfigParseError(str(e)) from e

    def getroot(self) -> ET.Element:
        return self.doc.getroot()

    def package_name(self) -> str:
        """Return the package identifier (``widget@id``)."""
        return self.getroot().get("id", "")

    def name(self) -> str:
        """Return the human-readable application name."""
        elems = children_by_tag(self.getroot(), "name")
        if not elems:
            return ""
        return (elems[0].text or "").strip()

    def version(self) -> str:
        return self.getroot().get("version", "")

    def findall(self, tag: str) -> list[ET.Element]:
        """Return top-level elements with the given literal tag."""
        return children_by_tag(self.getroot(), tag)

    def _platform_elements(self, platform: str) -> list[ET.Element]:
        return [p for p in self.findall("platform") if p.get("name") == platform]

    def _platform_children(self, platform: str, tag: str) -> list[ET.Element]:
        found: list[ET.Element] = []
        for platform_elem in self._platform_elements(platform):
            found.extend(children_by_tag(platform_elem, tag))
        return found

    @staticmethod
    def _preference_value(name: str, elems: list[ET.Element]) -> str:
        value = ""
        for elem in elems:
            if elem.get("name", "").lower() == name.lower():
                value = elem.get("value", "")
        return value

    def get_preference(self, name: str, platform: Optional[str] = None) -> str:
        """Return a preference value, or an empty string if it's not set.

        Names are matched case-insensitively; the last matching declaration
        wins. A platform-scoped value takes precedence over a global one.
        """
        if platform:
            value = self._preference_value(name, self._platform_children(platform, "preference"))
            if value:
                return value
        return self._preference_value(name, self.findall("preference"))

    def preferences(self) -> dict[str, str]:
        """Return the global preferences in document order."""
        return {
            elem.get("name", ""): elem.get("value", "")
            for elem in self.findall("preference")
            if elem.get("name")
        }

    def _static_resources(self, platform: Optional[str], tag: str) -> list[Resource]:
        elems: list[tuple[ET.Element, Optional[str]]] = []
        if platform:
            elems.extend((e, platform) for e in self._platform_children(platform, tag))
        elems.extend((e, None) for e in self.findall(tag))

        resources: list[Resource] = []
        for elem, elem_platform in elems:
            src = elem.get("src")
            if not src:
                continue
            density = elem.get("density") or elem.get("cdv:density") or elem.get("gap:density")
            resources.append(
                Resource(
                    src=src,
                    density=density or None,
                    width=_to_int(elem.get("width")),
                    height=_to_int(elem.get("height")),
                    platform=elem_platform,
                )
            )
        return resources

    def get_icons(self, platform: Optional[str] = None) -> list[Resource]:
        """Return icon declarations, platform-scoped ones first."""
        return self._static_resources(platform, "icon")

    def get_splash_screens(self, platform: Optional[str] = None) -> list[Resource]:
        """Return splash declarations, platform-scoped ones first."""
        return self._static_resources(platform, "splash")

    def features(self) -> list[Feature]:
        """Return the declared features with their parameters."""
        features: list[Feature] = []
        for elem in self.findall("feature"):
            params = tuple(
                FeatureParam(name=p.get("name", ""), value=p.get("value", ""))
                for p in children_by_tag(elem, "param")
            )
            features.append(Feature(name=elem.get("name", ""), params=params))
        return features

    def write(self) -> None:
        """Persist the document back to its file."""
        write_elementtree(self.doc, self.path)
