# topmark:header:start
#
#   project      : Shipyard
#   file         : errors.py
#   file_relpath : src/shipyard/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Shipyard CLI.

Usage:
    Raise these exceptions while parsing, configuring or dispatching to signal
    errors with standardized messages and exit codes. All of them are terminal
    for the current invocation; nothing is retried.

Styling:
    Exceptions print as ``error: <message>`` on stderr, through the project
    console when one is present in the Click context (see `show()`).
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from shipyard.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Sequence


class ShipyardError(click.ClickException):
    """Base class for all Shipyard CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available.

        Outside a Click context (e.g. after `main()` returned from Click), the
        message is written to ``file`` or stderr with ``click.secho``.
        """
        text = f"error: {self.format_message()}"
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(text)
                return
        click.secho(text, file=file, err=file is None, fg="bright_red")


class ArgumentParseError(click.UsageError):
    """Malformed global flags (unknown flag, missing value).

    Rendered by Click together with the usage line.
    """

    exit_code = ExitCode.USAGE_ERROR


class ConfigurationError(ShipyardError):
    """Configuration could not be initialized (invalid settings or inconsistent flags)."""

    exit_code = ExitCode.CONFIG_ERROR


class AliasCycleError(ConfigurationError):
    """An alias expands, directly or transitively, back into itself.

    Args:
        chain (Sequence[str]): Alias names in expansion order, ending with the
            name that closes the cycle.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain: tuple[str, ...] = tuple(chain)
        super().__init__(f"alias cycle detected: {' -> '.join(self.chain)}")


class UnresolvedCommandError(ShipyardError):
    """No built-in, alias, or external command matches the requested name.

    Args:
        command (str): The exact command name that was attempted.
        suggestion (str | None): Closest known command name, if any.
    """

    exit_code = ExitCode.UNAVAILABLE

    def __init__(self, command: str, *, suggestion: str | None = None) -> None:
        self.command: str = command
        self.suggestion: str | None = suggestion
        message = f"no such subcommand: `{command}`"
        if suggestion:
            message += f"\n\n\tDid you mean `{suggestion}`?"
        super().__init__(message)


class ChildProcessFailedError(ShipyardError):
    """A child process (external command, compiler) could not be spawned.

    Args:
        argv (Sequence[str]): The command line that was attempted.
        reason (str): Human-readable cause (usually the ``OSError`` text).
    """

    exit_code = ExitCode.OS_ERROR

    def __init__(self, argv: Sequence[str], reason: str) -> None:
        self.argv: tuple[str, ...] = tuple(argv)
        super().__init__(f"could not execute process `{' '.join(self.argv)}` ({reason})")
