# SPDX-License-Identifier: MIT
"""Synchronization of the platform www directory."""

from __future__ import annotations

import logging
from pathlib import Path

from yunos_common import merge_and_update_dir

from .project import MERGES_DIR, CordovaProject, Locations, relative_to_root

logger = logging.getLogger(__name__)


def www_source_dirs(project: CordovaProject, locations: Locations) -> list[str]:
    """Return the www source directories, lowest priority first.

    The project's ``merges/yunos`` folder is included only if it exists.
    """
    source_dirs = [
        relative_to_root(project.www, project.root),
        relative_to_root(locations.platform_www, project.root),
    ]

    if (project.root / MERGES_DIR).is_dir():
        logger.debug(
            'Found "%s" folder. Copying its contents into the YunOS project.',
            MERGES_DIR.as_posix(),
        )
        source_dirs.append(MERGES_DIR.as_posix())
    return source_dirs


def update_www(project: CordovaProject, locations: Locations) -> bool:
    """Replace the platform www with project www, platform_www and merges.

    Returns:
        True if any file changed
    """
    source_dirs = www_source_dirs(project, locations)
    target_dir = relative_to_root(locations.www, project.root)

    logger.debug("Merging and updating files from [%s] to %s", ", ".join(source_dirs), target_dir)
    return merge_and_update_dir(source_dirs, target_dir, root_dir=project.root)


def clean_www(project_root: Path, locations: Locations) -> bool:
    """Remove every file from the platform www directory."""
    target_dir = relative_to_root(locations.www, project_root)
    logger.debug("Cleaning %s", target_dir)

    return merge_and_update_dir([], target_dir, root_dir=project_root, copy_all=True)
