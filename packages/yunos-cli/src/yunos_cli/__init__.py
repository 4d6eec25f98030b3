# SPDX-License-Identifier: MIT
"""Command line interface for the YunOS platform tools."""

__version__ = "0.1.0"
