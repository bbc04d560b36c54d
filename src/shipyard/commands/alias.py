# topmark:header:start
#
#   project      : Shipyard
#   file         : alias.py
#   file_relpath : src/shipyard/commands/alias.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard `alias` command.

Lists the configured aliases as ``name = tokens`` (sorted by name), or prints a
single alias when a name is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from shipyard.cli.console import get_console_safely
from shipyard.cli.errors import UnresolvedCommandError
from shipyard.registry.aliases import AliasTable

if TYPE_CHECKING:
    from shipyard.config.model import Config


@click.command(
    name="alias",
    help="List configured command aliases.",
)
@click.argument("name", required=False)
@click.pass_obj
def alias_command(obj: dict[str, Any], name: str | None) -> None:
    """List configured command aliases.

    Args:
        obj (dict[str, Any]): Click context object carrying the runtime config.
        name (str | None): Print only this alias.

    Raises:
        UnresolvedCommandError: If ``name`` is not a configured alias.
    """
    config: Config = obj["config"]
    console = get_console_safely()
    aliases = AliasTable.from_settings(config.settings)

    if name is not None:
        tokens = aliases.get(name)
        if tokens is None:
            raise UnresolvedCommandError(name)
        console.print(f"{name} = {' '.join(tokens)}")
        return

    if not len(aliases) and not config.is_quiet:
        console.print("No aliases configured.")
        return
    for alias_name, tokens in aliases.items():
        console.print(f"{alias_name} = {' '.join(tokens)}")
