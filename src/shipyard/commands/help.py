# topmark:header:start
#
#   project      : Shipyard
#   file         : help.py
#   file_relpath : src/shipyard/commands/help.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard `help` command.

Resolves its argument with the same precedence as dispatch:

- no argument: the top-level help;
- a built-in: that command's ``--help``;
- an alias: ``\\`name\\` is aliased to \\`tokens\\```;
- an external command: runs it with ``--help``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import click

from shipyard.cli.console import get_console_safely
from shipyard.cli.errors import UnresolvedCommandError
from shipyard.registry.aliases import AliasTable
from shipyard.registry.external import (
    execute_external_command,
    find_external_command,
    search_directories,
)

if TYPE_CHECKING:
    from shipyard.config.model import Config
    from shipyard.registry.commands import CommandRegistry


@click.command(
    name="help",
    help="Display help for a command.",
)
@click.argument("command", required=False)
@click.pass_context
def help_command(ctx: click.Context, command: str | None) -> None:
    """Display help for a command.

    Args:
        ctx (click.Context): Click context; ``obj`` carries the config, the
            registry and the top-level help renderer.
        command (str | None): Command to describe.

    Raises:
        UnresolvedCommandError: If ``command`` does not name any command.
    """
    config: Config = ctx.obj["config"]
    console = get_console_safely()

    if command is None:
        render: Callable[[], str] | None = ctx.obj.get("help_renderer")
        if render is not None:
            console.print(render())
        return

    registry: CommandRegistry | None = ctx.obj.get("registry")
    handler = registry.get(command) if registry is not None else None
    if handler is not None:
        ctx.exit(handler(config, ["--help"]))

    tokens = AliasTable.from_settings(config.settings).get(command)
    if tokens is not None:
        console.print(f"`{command}` is aliased to `{' '.join(tokens)}`")
        return

    path = find_external_command(command, search_directories(config.settings))
    if path is not None:
        ctx.exit(execute_external_command(path, command, ["--help"]))

    raise UnresolvedCommandError(command)
