# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : src/shipyard/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command resolution sources: built-in registry, alias table, external commands."""

from __future__ import annotations

from shipyard.registry.aliases import AliasExpansion, AliasTable
from shipyard.registry.commands import BuiltinCommand, ClickHandler, CommandHandler, CommandRegistry
from shipyard.registry.external import (
    ExternalCommand,
    execute_external_command,
    find_external_command,
    iter_external_commands,
    search_directories,
)

__all__ = [
    "AliasExpansion",
    "AliasTable",
    "BuiltinCommand",
    "ClickHandler",
    "CommandHandler",
    "CommandRegistry",
    "ExternalCommand",
    "execute_external_command",
    "find_external_command",
    "iter_external_commands",
    "search_directories",
]
