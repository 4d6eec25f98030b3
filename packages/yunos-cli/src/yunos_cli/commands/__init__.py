# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import clean, prepare

__all__ = ["clean", "prepare"]
