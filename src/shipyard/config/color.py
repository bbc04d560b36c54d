# topmark:header:start
#
#   project      : Shipyard
#   file         : color.py
#   file_relpath : src/shipyard/config/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-independent color helpers.

This module provides:

- the `ColorMode` enum parsed from ``--color`` / ``term.color``;
- `resolve_color_mode`, which turns a mode into a final on/off decision based
  on the environment and the output stream.
"""

from __future__ import annotations

import os
import sys
from enum import Enum


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when appropriate (typically when stdout is a TTY).
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def parse(cls, value: str) -> ColorMode | None:
        """Return the mode named by ``value`` (case-insensitive), or None if unknown."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def resolve_color_mode(
    *,
    color_mode: ColorMode,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **Explicit mode**: `ALWAYS` → True; `NEVER` → False.
        2. **Environment**:
            - `FORCE_COLOR` (set and not equal to `"0"`) → True
            - `NO_COLOR` (set to any value) → False
        3. **Auto**: `stdout.isatty()`.

    Args:
        color_mode (ColorMode): Effective color mode.
        stdout_isatty (bool | None): Optional override for TTY detection. When `None`,
            the function calls `sys.stdout.isatty()` and falls back to `False` on error.

    Returns:
        bool: True if ANSI color should be enabled; False otherwise.
    """
    if color_mode == ColorMode.ALWAYS:
        return True
    if color_mode == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)
