# SPDX-License-Identifier: MIT
"""Registers the plugins declared in a materialised config.xml."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from yunos_common import ConfigParser, Feature

from .plugin_manager import PluginManager

logger = logging.getLogger(__name__)

PACKAGE_PARAM = "yunos-package"
ONLOAD_PARAM = "onload"


@dataclass(frozen=True, slots=True)
class ServiceDeclaration:
    """What a ``<feature>`` asks the runtime to register."""

    name: str
    path: str = ""
    onload: bool = False


def read_config(path: str | Path) -> ConfigParser:
    """Read the application's config.xml.

    Raises:
        ConfigParseError: If the file is missing or malformed
    """
    config = ConfigParser(path)
    logger.debug("Read %s, start parsing", path)
    return config


def service_declaration(feature: Feature) -> ServiceDeclaration:
    path = ""
    onload = False
    for param in feature.params:
        if param.name == PACKAGE_PARAM:
            path = param.value
        elif param.name == ONLOAD_PARAM:
            onload = param.value == "true"
    return ServiceDeclaration(name=feature.name, path=path, onload=onload)


def load_plugins(
    config_path: str | Path,
    manager: Optional[PluginManager] = None,
) -> PluginManager:
    """Register every feature of a config.xml with a plugin manager.

    Args:
        config_path: Path to the materialised config.xml
        manager: Registry to fill (a new one is created if omitted)

    Returns:
        The registry
    """
    manager = manager if manager is not None else PluginManager()
    for feature in read_config(config_path).features():
        declaration = service_declaration(feature)
        manager.add_service(declaration.name, declaration.path, declaration.onload)
    return manager
