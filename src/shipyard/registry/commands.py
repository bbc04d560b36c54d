# topmark:header:start
#
#   project      : Shipyard
#   file         : commands.py
#   file_relpath : src/shipyard/registry/commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of built-in commands.

A built-in command is a name bound to a handler: any callable taking the
runtime [`Config`][shipyard.config.model.Config] and the command's remaining
arguments and returning an exit code. The registry is built once, is read-only
afterwards, and answers exact-name lookups only.

Built-ins implemented as Click commands are wrapped with `ClickHandler`, which
runs the command's own argument parsing on the remaining arguments.

Typical usage:
    ```python
    registry = CommandRegistry(
        [
            BuiltinCommand("build", "Compile the current package", build_handler),
            BuiltinCommand.from_click(version_command),
        ]
    )
    handler = registry.get("build")
    if handler is not None:
        exit_code = handler(config, ["--release"])
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

import click

from shipyard.cli.exit_codes import ExitCode
from shipyard.config.logging import get_logger
from shipyard.constants import PROGRAM_NAME

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.model import Config

logger: ShipyardLogger = get_logger(__name__)


class CommandHandler(Protocol):
    """Executable built-in: ``(config, args) -> exit code``."""

    def __call__(self, config: Config, args: Sequence[str]) -> int: ...


class ClickHandler:
    """Adapt a Click command to the `CommandHandler` protocol.

    The command parses ``args`` itself. Its context ``obj`` is a copy of the
    enclosing Click context's ``obj`` (console, registry, help renderer) with
    ``"config"`` set to the runtime config.

    Args:
        command (click.Command): The Click command to run.
    """

    def __init__(self, command: click.Command) -> None:
        self.command = command

    def __call__(self, config: Config, args: Sequence[str]) -> int:
        """Run the Click command and return its exit code.

        Click exceptions (usage errors, aborts) propagate to the caller.
        """
        obj: dict[str, object] = {}
        parent = click.get_current_context(silent=True)
        if parent is not None and isinstance(parent.obj, dict):
            obj.update(parent.obj)
        obj["config"] = config

        rv = self.command.main(
            args=list(args),
            prog_name=f"{PROGRAM_NAME} {self.command.name}",
            standalone_mode=False,
            obj=obj,
            color=config.color_enabled,
        )
        # `--help` yields Click's exit code; a plain callback returns None.
        if isinstance(rv, int):
            return rv
        return ExitCode.SUCCESS


@dataclass(frozen=True)
class BuiltinCommand:
    """A built-in command known to the dispatcher.

    Attributes:
        name (str): Command name as typed on the command line.
        about (str): One-line description shown in the top-level help.
        handler (CommandHandler): Callable executed for this command.
    """

    name: str
    about: str
    handler: CommandHandler

    @classmethod
    def from_click(cls, command: click.Command) -> BuiltinCommand:
        """Build a `BuiltinCommand` from a Click command (name and short help)."""
        if command.name is None:
            raise ValueError("Click command must have a name to be registered")
        return cls(
            name=command.name,
            about=command.get_short_help_str(limit=80),
            handler=ClickHandler(command),
        )


class CommandRegistry:
    """Read-only, ordered mapping from command name to `BuiltinCommand`.

    Declaration order is preserved and used for listings.

    Args:
        commands (Iterable[BuiltinCommand]): Commands in declaration order.

    Raises:
        ValueError: If two commands share a name.
    """

    def __init__(self, commands: Iterable[BuiltinCommand] = ()) -> None:
        entries: dict[str, BuiltinCommand] = {}
        for command in commands:
            if command.name in entries:
                raise ValueError(f"Duplicate built-in command: {command.name!r}")
            entries[command.name] = command
        self._entries: Mapping[str, BuiltinCommand] = MappingProxyType(entries)
        logger.trace("Registered built-in commands: %s", list(entries))

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[BuiltinCommand]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> CommandHandler | None:
        """Return the handler registered under exactly ``name``, or None."""
        command = self._entries.get(name)
        return command.handler if command is not None else None

    def names(self) -> tuple[str, ...]:
        """Return command names in declaration order."""
        return tuple(self._entries)

    def as_mapping(self) -> Mapping[str, BuiltinCommand]:
        """Return a read-only mapping of name → `BuiltinCommand`."""
        return self._entries
