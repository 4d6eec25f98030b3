# SPDX-License-Identifier: MIT
"""Runtime registration of native-bridge plugins.

Example:
    >>> from yunos_loader import PluginManager, load_plugins
    >>>
    >>> manager = load_plugins("www/config.xml", PluginManager())
    >>> sorted(manager.services)
    ['Device', 'Vibration']
"""

__version__ = "0.1.0"

from .loader import (
    ONLOAD_PARAM,
    PACKAGE_PARAM,
    ServiceDeclaration,
    load_plugins,
    read_config,
    service_declaration,
)
from .plugin_manager import PluginError, PluginManager, ServiceEntry

__all__ = [
    "ONLOAD_PARAM",
    "PACKAGE_PARAM",
    "ServiceDeclaration",
    "load_plugins",
    "read_config",
    "service_declaration",
    "PluginError",
    "PluginManager",
    "ServiceEntry",
]
