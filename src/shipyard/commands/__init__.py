# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : src/shipyard/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in commands shipped with Shipyard.

Each built-in is a Click command adapted to the registry's
``(config, args) -> exit code`` handler contract.
"""

from __future__ import annotations

from shipyard.commands.alias import alias_command
from shipyard.commands.help import help_command
from shipyard.commands.version import version_command
from shipyard.registry.commands import BuiltinCommand, CommandRegistry


def builtin_registry() -> CommandRegistry:
    """Return the registry of built-in commands, in listing order."""
    return CommandRegistry(
        [
            BuiltinCommand.from_click(help_command),
            BuiltinCommand.from_click(version_command),
            BuiltinCommand.from_click(alias_command),
        ]
    )


__all__ = ["builtin_registry"]
