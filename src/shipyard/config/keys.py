# topmark:header:start
#
#   project      : Shipyard
#   file         : keys.py
#   file_relpath : src/shipyard/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section/key names and environment variable names.

These strings are Shipyard's external configuration API: renaming or removing
one is a breaking change.
"""

from __future__ import annotations

from typing import Final

from shipyard.constants import ENV_PREFIX


class Toml:
    """TOML section names and keys read from ``config.toml`` files."""

    # [term]
    SECTION_TERM: Final[str] = "term"
    KEY_VERBOSE: Final[str] = "verbose"
    KEY_QUIET: Final[str] = "quiet"
    KEY_COLOR: Final[str] = "color"

    # [net]
    SECTION_NET: Final[str] = "net"
    KEY_OFFLINE: Final[str] = "offline"

    # [build]
    SECTION_BUILD: Final[str] = "build"
    KEY_COMPILER: Final[str] = "compiler"

    # [alias] free-form: alias name -> "tokens ..." | ["tokens", ...]
    SECTION_ALIAS: Final[str] = "alias"


class Env:
    """Environment variables that override persisted settings."""

    TERM_VERBOSE: Final[str] = f"{ENV_PREFIX}TERM_VERBOSE"
    TERM_QUIET: Final[str] = f"{ENV_PREFIX}TERM_QUIET"
    TERM_COLOR: Final[str] = f"{ENV_PREFIX}TERM_COLOR"
    NET_OFFLINE: Final[str] = f"{ENV_PREFIX}NET_OFFLINE"
    BUILD_COMPILER: Final[str] = f"{ENV_PREFIX}BUILD_COMPILER"
    # SHIPYARD_ALIAS_<NAME>; NAME is lower-cased and '_' becomes '-'
    ALIAS_PREFIX: Final[str] = f"{ENV_PREFIX}ALIAS_"
