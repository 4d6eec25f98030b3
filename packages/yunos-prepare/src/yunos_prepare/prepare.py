# SPDX-License-Identifier: MIT
"""Prepare and clean entry points for the YunOS platform.

``prepare`` runs every step in a fixed order: config files, www, manifest
fields from the merged config, icons, splashes, then permissions and
events. Each manifest step is its own load/modify/save cycle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from yunos_common import ConfigParser, PlatformJson, PlatformMunger, Resource, update_paths

from .config_files import update_config_files
from .manifest import (
    patch_manifest,
    update_fullscreen,
    update_icon,
    update_identity,
    update_orientation,
    update_permissions,
    update_splash,
    update_user_agent,
)
from .project import PLATFORM, CordovaProject, Locations, relative_to_root
from .resources import (
    ICON_BASENAME,
    SPLASH_BASENAME,
    ResourceSelection,
    resource_targets,
    select_resources,
)
from .www import clean_www, update_www

logger = logging.getLogger(__name__)

PERMISSION_TAG = "uses-permission"
EVENT_TAG = "event"
NAME_ATTRIBUTE = f"{PLATFORM}:name"


def update_project_according_to(config: ConfigParser, locations: Locations) -> None:
    """Write identity, version, orientation, fullscreen and user agent."""
    with patch_manifest(locations.manifest) as manifest:
        update_identity(manifest, config.package_name(), config.name(), config.version())
        # Ensure the display block exists even if orientation is unknown
        manifest.display()
        update_orientation(manifest, config.get_preference("orientation"))
        update_fullscreen(manifest, config.get_preference("fullscreen"))
        update_user_agent(
            manifest,
            config.get_preference("AppendUserAgent"),
            config.get_preference("OverrideUserAgent"),
        )
    logger.debug("Wrote out YunOS manifest.")


def _update_resources(
    resources: list[Resource],
    base_name: str,
    project_root: Path,
    res_dir: str,
    manifest_path: Path,
) -> ResourceSelection:
    selection = select_resources(resources, base_name, res_dir)

    logger.debug("Updating %s resources at %s", base_name, res_dir)
    update_paths(selection.resource_map, root_dir=project_root)

    if selection.chosen_filename:
        with patch_manifest(manifest_path) as manifest:
            if base_name == ICON_BASENAME:
                update_icon(manifest, selection.chosen_filename)
            else:
                update_splash(manifest, selection.chosen_filename)
        logger.debug("Updating manifest.json for %s.", base_name)
    return selection


def update_icons(
    project: CordovaProject, res_dir: str, manifest_path: Path
) -> Optional[ResourceSelection]:
    icons = project.project_config.get_icons(PLATFORM)
    if not icons:
        logger.debug("This app does not have launcher icons defined")
        return None
    return _update_resources(icons, ICON_BASENAME, project.root, res_dir, manifest_path)


def update_splashes(
    project: CordovaProject, res_dir: str, manifest_path: Path
) -> Optional[ResourceSelection]:
    splashes = project.project_config.get_splash_screens(PLATFORM)
    if not splashes:
        return None
    return _update_resources(splashes, SPLASH_BASENAME, project.root, res_dir, manifest_path)


def read_permissions(config: ConfigParser) -> tuple[list[str], list[str]]:
    """Return the permission and event names declared in a config."""
    permissions = [e.get(NAME_ATTRIBUTE, "") for e in config.findall(PERMISSION_TAG)]
    events = [e.get(NAME_ATTRIBUTE, "") for e in config.findall(EVENT_TAG)]
    return permissions, events


def update_manifest_permissions(locations: Locations) -> None:
    """Copy permissions and events from the platform config into the manifest."""
    permissions, events = read_permissions(ConfigParser(locations.config_xml))
    with patch_manifest(locations.manifest) as manifest:
        update_permissions(manifest, permissions, events)


def prepare(project: CordovaProject, locations: Locations) -> ConfigParser:
    """Bring the YunOS platform project up to date with the application.

    Args:
        project: The application project
        locations: Platform locations

    Returns:
        The merged platform config
    """
    platform_json = PlatformJson.load(locations.root, PLATFORM)
    munger = PlatformMunger(PLATFORM, locations.root, platform_json, locations.config_xml)
    config = update_config_files(project.project_config, munger, locations)

    update_www(project, locations)
    update_project_according_to(config, locations)

    res_dir = relative_to_root(locations.res, project.root)
    update_icons(project, res_dir, locations.manifest)
    update_splashes(project, res_dir, locations.manifest)
    update_manifest_permissions(locations)

    logger.debug("Prepared YunOS project successfully")
    return config


def _clean_resources(
    resources: list[Resource], base_name: str, project_root: Path, res_dir: str
) -> None:
    selection = select_resources(resources, base_name, res_dir)
    logger.debug("Cleaning %s resources at %s", base_name, res_dir)
    update_paths(resource_targets(selection), root_dir=project_root, copy_all=True)


def clean(locations: Locations, project_root: Path, no_prepare: bool = False) -> bool:
    """Remove the files prepare copied into the platform project.

    The www directory is emptied and the icon and splash files mapped from
    the descriptor are deleted. The descriptor is the project's config.xml
    when present, otherwise the platform copy.

    Args:
        locations: Platform locations
        project_root: Application project root
        no_prepare: Skip cleaning prepared files entirely

    Returns:
        False if there was nothing to clean
    """
    if no_prepare or not locations.config_xml.exists():
        return False

    project_config_path = project_root / "config.xml"
    config = ConfigParser(
        project_config_path if project_config_path.exists() else locations.config_xml
    )

    clean_www(project_root, locations)

    res_dir = relative_to_root(locations.res, project_root)
    _clean_resources(config.get_icons(PLATFORM), ICON_BASENAME, project_root, res_dir)
    _clean_resources(config.get_splash_screens(PLATFORM), SPLASH_BASENAME, project_root, res_dir)
    return True
