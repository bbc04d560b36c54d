# topmark:header:start
#
#   project      : Shipyard
#   file         : console.py
#   file_relpath : src/shipyard/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console implementations for user-facing program output.

`ClickConsole` is used while a Click context is active; `StdConsole` is the
stdlib fallback returned by `get_console_safely` when Shipyard code runs
without one (e.g., handlers called directly from tests).
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

from shipyard.cli.console_api import ConsoleLike


class ClickConsole(ConsoleLike):
    """Program-output console backed by `click.secho`.

    Warnings are yellow and errors bright red; color is dropped entirely when
    ``enable_color`` is False.

    Args:
        enable_color (bool): Emit ANSI styling.
        out (TextIO | None): Stream for program output (default `sys.stdout`).
        err (TextIO | None): Stream for diagnostics (default `sys.stderr`).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def _emit(self, text: str, stream: TextIO, nl: bool, fg: str | None = None) -> None:
        click.secho(text, nl=nl, file=stream, color=self.enable_color, fg=fg)

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write program output to stdout."""
        self._emit(text, self.out, nl)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr."""
        self._emit(text, self.err, nl, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr."""
        self._emit(text, self.err, nl, fg="bright_red")


class StdConsole(ConsoleLike):
    """Simple console without colors."""

    def __init__(self, *, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        self.out.write(text + ("\n" if nl else ""))

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        self.err.write(text + ("\n" if nl else ""))

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        self.err.write(text + ("\n" if nl else ""))


def get_console_safely() -> ConsoleLike:
    """Return a ConsoleLike using the active Click context when available.

    If an active Click context exists and a console instance is stored in
    ``ctx.obj["console"]``, that console is returned. Otherwise a
    [`StdConsole`][shipyard.cli.console.StdConsole] is returned.
    """
    ctx = click.get_current_context(silent=True)
    if ctx is not None and isinstance(getattr(ctx, "obj", None), dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return StdConsole()
