# topmark:header:start
#
#   project      : Shipyard
#   file         : test_commands.py
#   file_relpath : tests/registry/test_commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the built-in command registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import pytest

from shipyard.cli.parser import ParsedArgs
from shipyard.commands import builtin_registry
from shipyard.commands.version import version_command
from shipyard.config.model import configure
from shipyard.registry.commands import BuiltinCommand, ClickHandler, CommandRegistry
from tests.conftest import RecordingHandler, make_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_registry_preserves_declaration_order() -> None:
    """Listing order is declaration order."""
    registry = CommandRegistry(
        BuiltinCommand(name, name, RecordingHandler()) for name in ("test", "build", "bench")
    )

    assert registry.names() == ("test", "build", "bench")
    assert [command.name for command in registry] == ["test", "build", "bench"]
    assert len(registry) == 3


def test_registry_lookup() -> None:
    """`get()` returns the handler for an exact name and None otherwise."""
    handler = RecordingHandler()
    registry = CommandRegistry([BuiltinCommand("build", "Compile", handler)])

    assert registry.get("build") is handler
    assert registry.get("buil") is None
    assert "build" in registry
    assert "test" not in registry


def test_registry_rejects_duplicates() -> None:
    """Two built-ins cannot share a name."""
    with pytest.raises(ValueError, match="Duplicate built-in command"):
        CommandRegistry(
            [
                BuiltinCommand("build", "a", RecordingHandler()),
                BuiltinCommand("build", "b", RecordingHandler()),
            ]
        )


def test_registry_is_read_only() -> None:
    """The name → command mapping cannot be modified."""
    registry = CommandRegistry([BuiltinCommand("build", "Compile", RecordingHandler())])

    with pytest.raises(TypeError):
        registry.as_mapping()["test"] = BuiltinCommand(  # type: ignore[index]
            "test", "Run tests", RecordingHandler()
        )


def test_shipped_builtins() -> None:
    """Shipyard ships `help`, `version` and `alias`."""
    registry = builtin_registry()

    assert registry.names() == ("help", "version", "alias")
    assert all(command.about for command in registry)


def test_click_handler_parses_its_own_args(tmp_path: Path) -> None:
    """`ClickHandler` runs the command's Click parsing on the remaining args."""
    seen: list[tuple[str, bool]] = []

    @click.command(name="greet", help="Say hello.")
    @click.argument("who")
    @click.option("--loud", is_flag=True)
    @click.pass_obj
    def greet(obj: dict[str, object], who: str, loud: bool) -> int:
        assert "config" in obj
        seen.append((who, loud))
        return 4

    command = BuiltinCommand.from_click(greet)
    config = configure(make_settings(tmp_path), ParsedArgs())

    assert command.name == "greet"
    assert command.about == "Say hello."
    assert isinstance(command.handler, ClickHandler)
    assert command.handler(config, ["world", "--loud"]) == 4
    assert seen == [("world", True)]


def test_click_handler_help_exit_code(tmp_path: Path) -> None:
    """`--help` on a wrapped command succeeds."""
    handler = ClickHandler(version_command)
    config = configure(make_settings(tmp_path), ParsedArgs())

    assert handler(config, ["--help"]) == 0
