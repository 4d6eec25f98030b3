# SPDX-License-Identifier: MIT
"""Prepare the YunOS platform project."""

from __future__ import annotations

import click

from yunos_common import ConfigParseError, FileUpdaterError, MungeError, PlatformJsonError
from yunos_prepare import CordovaProject, Locations, ManifestError, PrepareError
from yunos_prepare import prepare as prepare_project

from ..config import ConfigError
from ..main import Context, echo_error, echo_info, echo_success, pass_context

PREPARE_ERRORS = (
    ConfigParseError,
    FileUpdaterError,
    ManifestError,
    MungeError,
    PlatformJsonError,
    PrepareError,
)


@click.command()
@pass_context
def prepare(ctx: Context) -> None:
    """Prepare the YunOS platform project.

    Regenerates the platform config.xml from its defaults, installed plugins
    and the project's config.xml, synchronizes www, and updates
    manifest.json, icons and splash screens.

    \b
    Examples:
        cordova-yunos prepare
        cordova-yunos -v prepare        # Show every file operation
    """
    try:
        cli_config = ctx.load_config()
    except (ConfigError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    platform_root = cli_config.platform_root
    if not platform_root.is_dir():
        echo_error(f"YunOS platform not found: {platform_root}")
        raise SystemExit(1)

    if ctx.verbose:
        echo_info(f"Project: {cli_config.project_dir}")
        echo_info(f"Platform: {platform_root}")

    try:
        project = CordovaProject.from_root(cli_config.project_dir)
        config = prepare_project(project, Locations.for_platform(platform_root))
    except PREPARE_ERRORS as e:
        echo_error(f"Prepare failed: {e}")
        raise SystemExit(1)

    echo_success(f"Prepared {config.package_name()} {config.version()} for YunOS")
