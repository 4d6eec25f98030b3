# SPDX-License-Identifier: MIT
"""Generation of the platform config.xml."""

from __future__ import annotations

import logging
import shutil

from yunos_common import ConfigParser, PlatformMunger, merge_xml

from .project import PLATFORM, Locations, PrepareError

logger = logging.getLogger(__name__)


def update_config_files(
    source_config: ConfigParser,
    munger: PlatformMunger,
    locations: Locations,
) -> ConfigParser:
    """Rebuild the platform config.xml from defaults, plugins and the project.

    The platform file is first reset from ``defaults.xml``, then every
    plugin's recorded changes are reapplied, then the project's config.xml
    is merged on top with clobbering so project values win. The steps always
    run from the reset, so a failed run is repaired by the next one.

    Args:
        source_config: The project's config.xml
        munger: Munger initialised for this platform
        locations: Platform locations

    Returns:
        The merged platform config, already written to disk

    Raises:
        PrepareError: If defaults.xml is missing
    """
    if not locations.default_config_xml.exists():
        raise PrepareError(f"Platform defaults not found: {locations.default_config_xml}")

    logger.debug(
        "Generating platform-specific config.xml from defaults for YunOS at %s",
        locations.config_xml,
    )
    shutil.copyfile(locations.default_config_xml, locations.config_xml)

    munger.reapply_global_munge().save_all()

    logger.debug("Merging project's config.xml into platform-specific YunOS config.xml")
    config = ConfigParser(locations.config_xml)
    merge_xml(source_config.getroot(), config.getroot(), PLATFORM, clobber=True)
    config.write()
    return config
