# SPDX-License-Identifier: MIT
"""Registry of native-bridge services declared by plugins."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class PluginError(Exception):
    """Raised when a service cannot be found or instantiated."""

    pass


@dataclass
class ServiceEntry:
    """A registered service.

    Attributes:
        name: Service name (the feature name in config.xml)
        path: Import path of the implementation, ``module:attribute``
        onload: Whether the service is instantiated at registration
        instance: The instantiated service, once loaded
    """

    name: str
    path: str
    onload: bool = False
    instance: Any = None

    @property
    def loaded(self) -> bool:
        return self.instance is not None


def _import_object(path: str) -> Any:
    module_name, sep, attribute = path.partition(":")
    if not module_name:
        raise PluginError(f"Invalid service path: {path!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise PluginError(f"Cannot import {module_name}: {e}") from e
    if not sep:
        return obj
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise PluginError(f"{module_name} has no attribute {attribute}") from e
    return obj


class PluginManager:
    """Holds the services of one running application.

    Services are instantiated on first use, or at registration when they
    are declared with ``onload``.
    """

    def __init__(self) -> None:
        self._services: dict[str, ServiceEntry] = {}

    @property
    def services(self) -> Mapping[str, ServiceEntry]:
        return MappingProxyType(self._services)

    def add_service(self, name: str, path: str, onload: bool = False) -> ServiceEntry:
        """Register a service, replacing any earlier one with the same name."""
        entry = ServiceEntry(name=name, path=path, onload=onload)
        self._services[name] = entry
        logger.debug("Registered service %s (%s)", name, path or "<no path>")
        if onload:
            self._instantiate(entry)
        return entry

    def _instantiate(self, entry: ServiceEntry) -> Any:
        if not entry.path:
            raise PluginError(f"Service {entry.name} has no implementation path")
        factory = _import_object(entry.path)
        entry.instance = factory() if callable(factory) else factory
        logger.debug("Loaded service %s", entry.name)
        return entry.instance

    def get_service(self, name: str) -> Any:
        """Return the service instance, loading it if needed.

        Raises:
            PluginError: If the service is unknown or fails to load
        """
        entry = self._services.get(name)
        if entry is None:
            raise PluginError(f"Unknown service: {name}")
        if entry.loaded:
            return entry.instance
        return self._instantiate(entry)

    def find_service(self, name: str) -> Optional[ServiceEntry]:
        return self._services.get(name)
