# SPDX-License-Identifier: MIT
"""Selection of icon and splash images per density bucket.

Each declaration either names a density, gives a pixel size that maps to a
density, or is a candidate for the default image. One source is kept per
bucket and the result is a map of platform target path to project source
path, both relative to the project root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional

from yunos_common import Resource

logger = logging.getLogger(__name__)

# http://developer.android.com/design/style/iconography.html
SIZE_TO_DENSITY: dict[int, str] = {
    36: "ldpi",
    48: "mdpi",
    72: "hdpi",
    96: "xhdpi",
    144: "xxhdpi",
    192: "xxxhdpi",
}

# Named buckets from lowest to highest resolution
DENSITY_ORDER = ("ldpi", "mdpi", "hdpi", "xhdpi", "xxhdpi", "xxxhdpi")

DEFAULT_BUCKET = "default"

ICON_BASENAME = "icon"
SPLASH_BASENAME = "splashScreen"


@dataclass
class ResourceSelection:
    """Outcome of selecting resources of one kind.

    Attributes:
        base_name: Target file stem ("icon" or "splashScreen")
        buckets: Density bucket -> selected declaration
        default: Declaration used for the default bucket, if any
        resource_map: Target path -> source path
        chosen_filename: File name to record in the manifest, if any
    """

    base_name: str
    buckets: dict[str, Resource] = field(default_factory=dict)
    default: Optional[Resource] = None
    resource_map: dict[str, str] = field(default_factory=dict)
    chosen_filename: Optional[str] = None

    @property
    def default_src(self) -> Optional[str]:
        return self.default.src if self.default else None


def target_filename(base_name: str, src: str) -> str:
    """Return ``<base_name>.<extension of src>``."""
    suffix = PurePosixPath(src).suffix
    return f"{base_name}{suffix}" if suffix else base_name


def _bucket_sort_key(bucket: str) -> tuple[int, str]:
    if bucket in DENSITY_ORDER:
        return DENSITY_ORDER.index(bucket), bucket
    return len(DENSITY_ORDER), bucket


def select_resources(
    resources: Iterable[Resource],
    base_name: str,
    res_dir: str | Path,
) -> ResourceSelection:
    """Pick one source per density bucket plus an optional default.

    Declarations without density or size are default candidates; the first
    one wins. A bucket already filled by a platform-scoped declaration is
    never replaced, a generic one only gives way to a platform-scoped one,
    and otherwise the first declaration for a bucket is kept.

    Args:
        resources: Declarations in document order
        base_name: Target file stem
        res_dir: Platform resource directory, relative to the project root

    Returns:
        The selection, with a deterministic ``chosen_filename``: the default
        image if there is one, else the lowest-resolution bucket.
    """
    selection = ResourceSelection(base_name=base_name)

    for res in resources:
        size = res.size
        if not size and not res.density:
            if selection.default is None:
                selection.default = res
            else:
                logger.debug(
                    "Found extra default %s: %s (ignoring in favor of %s)",
                    base_name,
                    res.src,
                    selection.default.src,
                )
            continue

        density = res.density or SIZE_TO_DENSITY.get(size or 0)
        if not density:
            logger.debug("Invalid %s definition (or unsupported size): %s", base_name, res.src)
            continue

        previous = selection.buckets.get(density)
        if previous is not None and (previous.platform or not res.platform):
            logger.debug(
                "Ignoring %s %s for %s, already using %s", base_name, res.src, density, previous.src
            )
            continue
        selection.buckets[density] = res

    res_path = Path(res_dir)
    ordered = sorted(selection.buckets, key=_bucket_sort_key)
    for bucket in ordered:
        src = selection.buckets[bucket].src
        target = res_path / bucket / target_filename(base_name, src)
        selection.resource_map[target.as_posix()] = src

    if selection.default is not None:
        filename = target_filename(base_name, selection.default.src)
        target = res_path / DEFAULT_BUCKET / filename
        selection.resource_map[target.as_posix()] = selection.default.src
        selection.chosen_filename = filename
    elif ordered:
        selection.chosen_filename = target_filename(base_name, selection.buckets[ordered[0]].src)

    return selection


def resource_targets(selection: ResourceSelection) -> dict[str, Optional[str]]:
    """Map every selected target to None, for removal."""
    return {target: None for target in selection.resource_map}
