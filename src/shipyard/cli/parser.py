# topmark:header:start
#
#   project      : Shipyard
#   file         : parser.py
#   file_relpath : src/shipyard/cli/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Global option parsing.

The top-level grammar is a single Click command that declares the global flags
and one opaque, unprocessed trailing argument list. Interspersed arguments are
disabled: the first token that is not a flag is the command name, and every
token after it belongs to that command, untouched.

The same option set backs both the process entry point
([`shipyard.cli.main.cli`][]) and `parse_invocation`, which re-parses alias
expansions as brand-new invocations without running anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar

import click

from shipyard.cli.errors import ArgumentParseError
from shipyard.config.logging import get_logger
from shipyard.constants import PROGRAM_NAME

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.registry.commands import CommandRegistry

P = ParamSpec("P")
R = TypeVar("R")

logger: ShipyardLogger = get_logger(__name__)

#: Click context settings for the top-level command.
CONTEXT_SETTINGS: dict[str, Any] = {
    "allow_interspersed_args": False,
    "ignore_unknown_options": False,
    "max_content_width": 100,
}


@dataclass(frozen=True)
class ParsedArgs:
    """Structured result of parsing one invocation.

    Attributes:
        verbose (int): Number of ``-v`` flags.
        quiet (bool): ``-q``/``--quiet``.
        color (str | None): ``--color`` value (validated later, at configuration time).
        frozen (bool): ``--frozen``.
        locked (bool): ``--locked``.
        unstable_features (tuple[str, ...]): ``-Z`` values in command-line order.
        version (bool): ``-V``/``--version``.
        list_commands (bool): ``--list``.
        explain (str | None): ``--explain`` diagnostic code.
        show_help (bool): ``-h``/``--help``.
        command (str | None): Subcommand name, if any.
        args (tuple[str, ...]): Tokens following the subcommand name.
    """

    verbose: int = 0
    quiet: bool = False
    color: str | None = None
    frozen: bool = False
    locked: bool = False
    unstable_features: tuple[str, ...] = ()
    version: bool = False
    list_commands: bool = False
    explain: str | None = None
    show_help: bool = False
    command: str | None = None
    args: tuple[str, ...] = ()

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> ParsedArgs:
        """Build a `ParsedArgs` from Click's parsed parameter mapping."""
        rest: tuple[str, ...] = tuple(params.get("command_args") or ())
        return cls(
            verbose=int(params.get("verbose") or 0),
            quiet=bool(params.get("quiet")),
            color=params.get("color"),
            frozen=bool(params.get("frozen")),
            locked=bool(params.get("locked")),
            unstable_features=tuple(params.get("unstable_features") or ()),
            version=bool(params.get("version")),
            list_commands=bool(params.get("list_commands")),
            explain=params.get("explain"),
            show_help=bool(params.get("show_help")),
            command=rest[0] if rest else None,
            args=rest[1:],
        )

    @property
    def has_global_flags(self) -> bool:
        """Return True if any flag other than the command was given."""
        return self != ParsedArgs(command=self.command, args=self.args)


class GlobalCommand(click.Command):
    """Top-level Click command.

    Parse failures surface as `ArgumentParseError`, and the help text ends with
    the common built-in commands of the registry found in ``ctx.obj``.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Parse ``args``, converting Click usage errors into `ArgumentParseError`."""
        try:
            return super().parse_args(ctx, args)
        except ArgumentParseError:
            raise
        except click.UsageError as exc:
            raise ArgumentParseError(exc.message, ctx=exc.ctx or ctx) from exc

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Write the list of common commands, then the epilog."""
        registry: CommandRegistry | None = None
        if isinstance(ctx.obj, dict):
            registry = ctx.obj.get("registry")
        if registry is not None and len(registry):
            with formatter.section(
                f"Some common {PROGRAM_NAME} commands are (see all commands with --list)"
            ):
                formatter.write_dl([(command.name, command.about) for command in registry])
        super().format_epilog(ctx, formatter)


def global_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the global flags and the trailing command arguments to a command.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function.
    """
    # Click applies decorators bottom-up; declare in reverse display order.
    f = click.argument(
        "command_args",
        nargs=-1,
        type=click.UNPROCESSED,
        metavar="[COMMAND] [ARGS]...",
    )(f)
    f = click.option(
        "-h",
        "--help",
        "show_help",
        is_flag=True,
        help="Print help information.",
    )(f)
    f = click.option(
        "-Z",
        "unstable_features",
        multiple=True,
        metavar="FLAG",
        help="Unstable (nightly-only) flags. May be repeated.",
    )(f)
    f = click.option(
        "--locked",
        is_flag=True,
        help="Require the lock file is up to date.",
    )(f)
    f = click.option(
        "--frozen",
        is_flag=True,
        help="Require the lock file and cache are up to date.",
    )(f)
    f = click.option(
        "--color",
        metavar="WHEN",
        default=None,
        help="Coloring: auto, always, never.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        is_flag=True,
        help="No output printed to stdout.",
    )(f)
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Use verbose output (-vv very verbose).",
    )(f)
    f = click.option(
        "--explain",
        metavar="CODE",
        default=None,
        help="Run `<compiler> --explain CODE`.",
    )(f)
    f = click.option(
        "--list",
        "list_commands",
        is_flag=True,
        help="List installed commands.",
    )(f)
    f = click.option(
        "-V",
        "--version",
        is_flag=True,
        help="Print version info and exit.",
    )(f)
    return f


@click.command(
    cls=GlobalCommand,
    name=PROGRAM_NAME,
    context_settings=CONTEXT_SETTINGS,
    add_help_option=False,
)
@global_options
def _grammar(**_params: Any) -> None:
    """Parse-only twin of the entry point; never invoked."""


def parse_invocation(tokens: Sequence[str]) -> ParsedArgs:
    """Parse an invocation (argv without program name) into `ParsedArgs`.

    Pure: the same tokens always produce an equal result, and nothing is run.

    Args:
        tokens (Sequence[str]): Invocation tokens.

    Returns:
        ParsedArgs: The parsed global flags, command name and command arguments.

    Raises:
        ArgumentParseError: On unknown flags or missing flag values.
    """
    ctx: click.Context = _grammar.make_context(PROGRAM_NAME, list(tokens))
    parsed = ParsedArgs.from_params(ctx.params)
    logger.trace("Parsed %s -> %r", list(tokens), parsed)
    return parsed
