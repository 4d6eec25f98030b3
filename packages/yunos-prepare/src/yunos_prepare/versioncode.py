# SPDX-License-Identifier: MIT
"""Integer build codes derived from semantic version strings.

The code is ``MAJOR * 10000 + MINOR * 100 + PATCH``, following the Android
``versionCode`` convention. Derivation is lenient: a
pre-release suffix is dropped and any missing or non-numeric component
counts as zero, so ``"2.0"`` and ``"abc"`` both produce a code.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"[0-9]+")

# Weight of MAJOR, MINOR and PATCH
COMPONENT_WEIGHTS = (10000, 100, 1)


def _component_value(component: str) -> int:
    component = component.strip()
    if not _NUMERIC.fullmatch(component):
        return 0
    return int(component)


def default_version_code(version: str) -> int:
    """Derive the build version code for a version string.

    Args:
        version: Version string such as ``"1.2.3"`` or ``"1.2.3-beta"``

    Returns:
        The derived integer code; never raises

    Examples:
        >>> default_version_code("1.2.3")
        10203
        >>> default_version_code("2.0")
        20000
        >>> default_version_code("1.2.3-beta")
        10203
        >>> default_version_code("abc")
        0
    """
    components = (version or "").split("-")[0].split(".")

    code = 0
    for component, weight in zip(components, COMPONENT_WEIGHTS):
        code += _component_value(component) * weight

    logger.debug(
        "Generating a YunOS version code from version in config.xml (%s): %d",
        version,
        code,
    )
    return code
