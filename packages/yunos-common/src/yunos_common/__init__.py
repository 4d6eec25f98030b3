# SPDX-License-Identifier: MIT
"""Shared building blocks for the YunOS platform tools.

This package provides the collaborators the prepare pipeline relies on:
- ``ConfigParser`` for reading Cordova ``config.xml`` descriptors
- XML merge and graft helpers that keep namespace prefixes literal
- Incremental file and directory synchronization
- ``PlatformJson`` and ``PlatformMunger`` for replaying plugin config changes

Example:
    >>> from yunos_common import ConfigParser
    >>>
    >>> config = ConfigParser("config.xml")
    >>> config.package_name()
    'com.example.hello'
    >>> config.get_preference("Orientation")
    'landscape'
"""

__version__ = "0.1.0"

from .config_parser import (
    ConfigParseError,
    ConfigParser,
    Feature,
    FeatureParam,
    Resource,
)
from .file_updater import (
    FileUpdaterError,
    log_file_op,
    map_directory,
    merge_and_update_dir,
    update_paths,
)
from .munger import (
    ConfigKeeper,
    MungeError,
    PlatformMunger,
)
from .platform_json import (
    PlatformJson,
    PlatformJsonError,
)
from .xml_helpers import (
    XmlError,
    children_by_tag,
    equal_nodes,
    graft_xml,
    merge_xml,
    parse_elementtree,
    parse_fragment,
    resolve_parent,
    write_elementtree,
)

__all__ = [
    # Config descriptor
    "ConfigParseError",
    "ConfigParser",
    "Feature",
    "FeatureParam",
    "Resource",
    # File synchronization
    "FileUpdaterError",
    "log_file_op",
    "map_directory",
    "merge_and_update_dir",
    "update_paths",
    # Plugin munge
    "ConfigKeeper",
    "MungeError",
    "PlatformMunger",
    "PlatformJson",
    "PlatformJsonError",
    # XML helpers
    "XmlError",
    "children_by_tag",
    "equal_nodes",
    "graft_xml",
    "merge_xml",
    "parse_elementtree",
    "parse_fragment",
    "resolve_parent",
    "write_elementtree",
]
