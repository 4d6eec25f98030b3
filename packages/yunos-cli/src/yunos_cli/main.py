# SPDX-License-Identifier: MIT
"""CLI entry point for the cordova-yunos command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import CLIConfig, ConfigError, load_config

# Library loggers whose output is routed through click
LOGGER_NAMES = ("yunos_common", "yunos_prepare", "yunos_loader", "yunos_cli")


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[CLIConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> CLIConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


class ClickHandler(logging.Handler):
    """Logging handler that writes records with the echo helpers."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return

        if record.levelno >= logging.ERROR:
            echo_error(message)
        elif record.levelno >= logging.WARNING:
            echo_warning(message)
        else:
            echo_info(message)


def configure_logging(verbose: bool) -> None:
    """Route library logging to the terminal, DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.INFO
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if isinstance(handler, ClickHandler):
                logger.removeHandler(handler)
        logger.addHandler(ClickHandler())
        logger.setLevel(level)


@click.group()
@click.version_option(package_name="cordova-yunos")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Change to directory before running command.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """YunOS platform tools for Cordova projects.

    Prepare a YunOS platform project from the application's config.xml,
    www assets and installed plugins, or clean the prepared files.

    \b
    Examples:
        cordova-yunos prepare
        cordova-yunos -v prepare
        cordova-yunos -C my-app clean
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    configure_logging(verbose)


# Import and register commands
from .commands import clean, prepare

cli.add_command(prepare.prepare)
cli.add_command(clean.clean)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
