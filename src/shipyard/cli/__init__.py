# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : src/shipyard/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard CLI package.

This package holds the global option parser, the dispatcher, the introspection
short-circuits and the process entry point.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        shipyard = "shipyard.cli.main:cli"
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main at module import time
