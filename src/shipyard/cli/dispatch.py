# topmark:header:start
#
#   project      : Shipyard
#   file         : dispatch.py
#   file_relpath : src/shipyard/cli/dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command dispatch.

Resolution order for a command name is fixed:

1. **Built-in**: the registry handler runs with the config and remaining args.
2. **Alias**: the expansion tokens, followed by the remaining args, are
   re-parsed as a fresh invocation and dispatched again. Aliases may expand to
   other aliases; a name expanded twice in one invocation is a cycle.
3. **External**: ``shipyard-<name>`` is looked up on the search path and run
   with ``[name, *args]``; its exit code is the result.

If nothing matches, `UnresolvedCommandError` names the attempted command.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING, Callable

from shipyard.cli.errors import UnresolvedCommandError
from shipyard.cli.exit_codes import ExitCode
from shipyard.cli.parser import parse_invocation
from shipyard.config.logging import get_logger
from shipyard.registry.aliases import AliasExpansion, AliasTable
from shipyard.registry.external import (
    execute_external_command,
    find_external_command,
    iter_external_commands,
    search_directories,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from shipyard.cli.console_api import ConsoleLike
    from shipyard.cli.parser import ParsedArgs
    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.model import Config
    from shipyard.registry.commands import CommandRegistry

logger: ShipyardLogger = get_logger(__name__)


class Dispatcher:
    """Resolve and run commands for one top-level invocation.

    Args:
        registry (CommandRegistry): Built-in commands.
        aliases (AliasTable): User-defined aliases.
        directories (Sequence[Path]): External command search directories, in order.
        console (ConsoleLike): Program-output console.
        help_text (Callable[[], str]): Renders the top-level help.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        aliases: AliasTable,
        directories: Sequence[Path],
        *,
        console: ConsoleLike,
        help_text: Callable[[], str],
    ) -> None:
        self.registry = registry
        self.aliases = aliases
        self.directories: tuple[Path, ...] = tuple(directories)
        self.console = console
        self.help_text = help_text

    @classmethod
    def for_config(
        cls,
        config: Config,
        registry: CommandRegistry,
        *,
        console: ConsoleLike,
        help_text: Callable[[], str],
    ) -> Dispatcher:
        """Build a dispatcher from the aliases and search path of ``config``."""
        return cls(
            registry,
            AliasTable.from_settings(config.settings),
            search_directories(config.settings),
            console=console,
            help_text=help_text,
        )

    def dispatch(self, config: Config, parsed: ParsedArgs) -> int:
        """Run the command named by ``parsed`` and return the exit code.

        Args:
            config (Config): Runtime configuration, already initialized.
            parsed (ParsedArgs): Parsed top-level invocation.

        Returns:
            int: Exit code of the handler or external command (0 when only help
                was printed).

        Raises:
            UnresolvedCommandError: If no built-in, alias or external command matches.
            AliasCycleError: If alias expansion loops.
            ConfigurationError: If an alias has an empty expansion.
            ArgumentParseError: If an alias expansion does not parse.
            ChildProcessFailedError: If an external command could not be started.
        """
        expansion = AliasExpansion()
        while True:
            command = parsed.command
            if command is None:
                self.console.print(self.help_text())
                return ExitCode.SUCCESS

            handler = self.registry.get(command)
            if handler is not None:
                if command in self.aliases:
                    self.console.warn(
                        f"warning: user-defined alias `{command}` is ignored, "
                        "because it is shadowed by a built-in command"
                    )
                logger.info("Running built-in command %r", command)
                return handler(config, parsed.args)

            tokens = self.aliases.get(command)
            if tokens is not None:
                parsed = self._reparse(expansion.expand(command, tokens, parsed.args), command)
                continue

            path = find_external_command(command, self.directories)
            if path is None:
                raise UnresolvedCommandError(command, suggestion=self.suggest(command))
            logger.info("Running external command %s", path)
            return execute_external_command(path, command, parsed.args)

    def _reparse(self, tokens: Sequence[str], alias: str) -> ParsedArgs:
        parsed = parse_invocation(tokens)
        if parsed.has_global_flags:
            # Configuration is initialized once, from the top-level flags only.
            logger.debug("Global flags in the expansion of alias %r are not applied", alias)
        return parsed

    def known_commands(self) -> list[str]:
        """Return every resolvable command name (built-ins, aliases, externals)."""
        names: list[str] = [*self.registry.names(), *self.aliases]
        names.extend(ext.name for ext in iter_external_commands(self.directories))
        return names

    def suggest(self, command: str) -> str | None:
        """Return the known command name closest to ``command``, if any is close enough."""
        matches = difflib.get_close_matches(command, self.known_commands(), n=1, cutoff=0.6)
        return matches[0] if matches else None
