# topmark:header:start
#
#   project      : Shipyard
#   file         : version.py
#   file_relpath : src/shipyard/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard `version` command.

Prints the same output as ``shipyard --version``; verbosity comes from the
runtime config, so ``shipyard -v version`` includes the release details.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from shipyard.cli.console import get_console_safely
from shipyard.cli.introspect import print_version
from shipyard.utils.version import version

if TYPE_CHECKING:
    from shipyard.config.model import Config


@click.command(
    name="version",
    help="Show version information.",
)
@click.pass_obj
def version_command(obj: dict[str, Any]) -> None:
    """Show version information.

    Args:
        obj (dict[str, Any]): Click context object carrying the runtime config.
    """
    config: Config = obj["config"]
    print_version(get_console_safely(), version(), verbose=config.is_verbose)
