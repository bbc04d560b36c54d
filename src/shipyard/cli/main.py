# topmark:header:start
#
#   project      : Shipyard
#   file         : main.py
#   file_relpath : src/shipyard/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard command-line entry point.

Processing order for one invocation:

1. Click parses the global flags (see [`shipyard.cli.parser`][]).
2. ``--help``, then ``--version``, ``--explain`` and ``--list`` short-circuit,
   in that order; the first one present wins.
3. The runtime config is initialized once from settings and flags.
4. The [`Dispatcher`][shipyard.cli.dispatch.Dispatcher] resolves the command
   and its exit code becomes the process exit code.

Test seams: ``obj={"registry": ..., "settings": ..., "help_renderer": ...}``
passed to Click (e.g. through ``CliRunner.invoke``) replaces the built-in
registry, the settings loaded from disk and environment, and the renderer of
the top-level help. The same renderer serves ``--help``, an empty command line
and the `help` built-in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from shipyard.cli.console import ClickConsole
from shipyard.cli.dispatch import Dispatcher
from shipyard.cli.exit_codes import ExitCode
from shipyard.cli.introspect import print_command_list, print_version, run_explain
from shipyard.cli.parser import CONTEXT_SETTINGS, GlobalCommand, ParsedArgs, global_options
from shipyard.commands import builtin_registry
from shipyard.config.color import ColorMode, resolve_color_mode
from shipyard.config.logging import get_logger, setup_logging
from shipyard.config.model import configure
from shipyard.config.settings import load_settings
from shipyard.constants import PROGRAM_NAME
from shipyard.registry.external import search_directories
from shipyard.utils.version import version

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.settings import Settings
    from shipyard.registry.commands import CommandRegistry

logger: ShipyardLogger = get_logger(__name__)


def _settings(ctx: click.Context) -> Settings:
    """Return the settings from ``ctx.obj``, loading them on first use."""
    settings: Settings | None = ctx.obj.get("settings")
    if settings is None:
        settings = load_settings()
        ctx.obj["settings"] = settings
    return settings


def _early_console(parsed: ParsedArgs) -> ClickConsole:
    """Return a console for output produced before the config exists."""
    mode = ColorMode.parse(parsed.color) if parsed.color is not None else None
    return ClickConsole(enable_color=resolve_color_mode(color_mode=mode or ColorMode.AUTO))


@click.command(
    cls=GlobalCommand,
    name=PROGRAM_NAME,
    context_settings=CONTEXT_SETTINGS,
    add_help_option=False,
    help="Shipyard, the package manager front end.",
    epilog=f"See '{PROGRAM_NAME} help <command>' for more information on a specific command.",
)
@global_options
@click.pass_context
def cli(ctx: click.Context, **params: Any) -> None:
    """Entry point for the Shipyard CLI."""
    ctx.ensure_object(dict)
    setup_logging()

    parsed = ParsedArgs.from_params(params)
    registry: CommandRegistry | None = ctx.obj.get("registry")
    if registry is None:
        registry = builtin_registry()
        ctx.obj["registry"] = registry
    help_renderer: Callable[[], str] = ctx.obj.setdefault("help_renderer", ctx.get_help)

    console = _early_console(parsed)
    ctx.obj["console"] = console

    if parsed.show_help:
        console.print(help_renderer())
        return
    if parsed.version:
        print_version(console, version(), verbose=parsed.verbose > 0)
        return
    if parsed.explain is not None:
        ctx.exit(run_explain(_settings(ctx).compiler, parsed.explain))
    if parsed.list_commands:
        print_command_list(
            console,
            registry,
            search_directories(_settings(ctx)),
            verbose=parsed.verbose > 0,
        )
        return

    config = configure(_settings(ctx), parsed)
    ctx.obj["config"] = config
    ctx.color = config.color_enabled
    console = ClickConsole(enable_color=config.color_enabled)
    ctx.obj["console"] = console

    dispatcher = Dispatcher.for_config(
        config,
        registry,
        console=console,
        help_text=help_renderer,
    )
    ctx.exit(dispatcher.dispatch(config, parsed))


def main(argv: Sequence[str] | None = None, **extra: Any) -> int:
    """Run Shipyard and return the process exit code instead of exiting.

    Args:
        argv (Sequence[str] | None): Invocation tokens (defaults to ``sys.argv[1:]``).
        **extra (Any): Extra keyword arguments for the Click context (e.g. ``obj``).

    Returns:
        int: The exit code Shipyard would exit with.
    """
    try:
        rv = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name=PROGRAM_NAME,
            standalone_mode=False,
            **extra,
        )
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return ExitCode.FAILURE
    return rv if isinstance(rv, int) else ExitCode.SUCCESS


if __name__ == "__main__":
    cli()
