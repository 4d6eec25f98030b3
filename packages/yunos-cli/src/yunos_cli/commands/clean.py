# SPDX-License-Identifier: MIT
"""Clean prepared files from the YunOS platform project."""

from __future__ import annotations

import click

from yunos_common import ConfigParseError, FileUpdaterError
from yunos_prepare import Locations
from yunos_prepare import clean as clean_project

from ..config import ConfigError
from ..main import Context, echo_error, echo_info, echo_success, pass_context


@click.command()
@click.option(
    "--no-prepare",
    is_flag=True,
    default=False,
    help="Leave prepared files in place.",
)
@pass_context
def clean(ctx: Context, no_prepare: bool) -> None:
    """Remove prepared files from the YunOS platform project.

    Empties the platform www directory and deletes the icons and splash
    screens copied by prepare.

    \b
    Examples:
        cordova-yunos clean
        cordova-yunos clean --no-prepare
    """
    try:
        cli_config = ctx.load_config()
    except (ConfigError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    locations = Locations.for_platform(cli_config.platform_root)
    try:
        cleaned = clean_project(locations, cli_config.project_dir, no_prepare=no_prepare)
    except (ConfigParseError, FileUpdaterError) as e:
        echo_error(f"Clean failed: {e}")
        raise SystemExit(1)

    if cleaned:
        echo_success("Cleaned YunOS project")
    else:
        echo_info("Nothing to clean")
