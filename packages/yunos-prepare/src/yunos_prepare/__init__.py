# SPDX-License-Identifier: MIT
"""Prepare pipeline for the YunOS platform.

This package turns an application's config.xml, www tree and plugin state
into a YunOS platform project:
- The platform config.xml rebuilt from defaults, plugin munges and the project
- A synchronized www directory
- manifest.json identity, version, display, user agent, permissions and events
- Icons and splash screens sorted into density buckets

Example:
    >>> from yunos_prepare import CordovaProject, Locations, prepare
    >>>
    >>> project = CordovaProject.from_root("my-app")
    >>> locations = Locations.for_platform("my-app/platforms/yunos")
    >>> config = prepare(project, locations)
    >>> config.package_name()
    'com.example.hello'
"""

__version__ = "0.1.0"

from .config_files import update_config_files
from .manifest import (
    ORIENTATION_MAP,
    Manifest,
    ManifestError,
    ManifestValidationError,
    ValidationErrorDetail,
    load_manifest,
    patch_manifest,
    save_manifest,
    update_fullscreen,
    update_icon,
    update_identity,
    update_orientation,
    update_permissions,
    update_splash,
    update_user_agent,
    validate_manifest,
)
from .prepare import clean, prepare
from .project import PLATFORM, CordovaProject, Locations, PrepareError
from .resources import (
    DEFAULT_BUCKET,
    DENSITY_ORDER,
    ICON_BASENAME,
    SIZE_TO_DENSITY,
    SPLASH_BASENAME,
    ResourceSelection,
    resource_targets,
    select_resources,
)
from .versioncode import default_version_code
from .www import clean_www, update_www, www_source_dirs

__all__ = [
    # Pipeline
    "prepare",
    "clean",
    "update_config_files",
    "update_www",
    "clean_www",
    "www_source_dirs",
    # Project layout
    "PLATFORM",
    "CordovaProject",
    "Locations",
    "PrepareError",
    # Manifest
    "ORIENTATION_MAP",
    "Manifest",
    "ManifestError",
    "ManifestValidationError",
    "ValidationErrorDetail",
    "load_manifest",
    "patch_manifest",
    "save_manifest",
    "validate_manifest",
    "update_fullscreen",
    "update_icon",
    "update_identity",
    "update_orientation",
    "update_permissions",
    "update_splash",
    "update_user_agent",
    # Resources
    "DEFAULT_BUCKET",
    "DENSITY_ORDER",
    "ICON_BASENAME",
    "SIZE_TO_DENSITY",
    "SPLASH_BASENAME",
    "ResourceSelection",
    "resource_targets",
    "select_resources",
    # Versions
    "default_version_code",
]
