# topmark:header:start
#
#   project      : Shipyard
#   file         : test_help.py
#   file_relpath : tests/cli/test_help.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: top-level help and the `help` built-in."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, assert_UNAVAILABLE, run_cli
from tests.conftest import (
    RecordingHandler,
    make_registry,
    make_settings,
    mark_cli,
    mark_posix,
    parametrize,
    write_script,
)

if TYPE_CHECKING:
    from pathlib import Path

USAGE = "Usage: shipyard [OPTIONS] [COMMAND] [ARGS]..."
COMMON_COMMANDS = "Some common shipyard commands are (see all commands with --list)"


@mark_cli
@parametrize("argv", [[], ["-h"], ["--help"], ["help"]])
def test_top_level_help(argv: list[str]) -> None:
    """No command, `-h`/`--help` and bare `help` all print the top-level help."""
    result = run_cli(argv)

    assert_SUCCESS(result)
    assert USAGE in result.output
    assert COMMON_COMMANDS in result.output
    for name in ("help", "version", "alias"):
        assert f"  {name} " in result.output
    assert "See 'shipyard help <command>'" in result.output


@mark_cli
def test_help_lists_injected_builtins(tmp_path: Path) -> None:
    """The common-commands section reflects the active registry."""
    registry = make_registry(build=RecordingHandler(), test=RecordingHandler())

    result = run_cli([], registry=registry, settings=make_settings(tmp_path))

    assert_SUCCESS(result)
    assert "Run build" in result.output
    assert "Run test" in result.output


@mark_cli
def test_help_flag_short_circuits_dispatch(tmp_path: Path) -> None:
    """`-h` wins over the command that follows it: nothing is dispatched."""
    build = RecordingHandler()

    result = run_cli(
        ["-h", "build"], registry=make_registry(build=build), settings=make_settings(tmp_path)
    )

    assert_SUCCESS(result)
    assert USAGE in result.output
    assert build.calls == []


@mark_cli
def test_help_for_builtin_shows_its_usage() -> None:
    """`help version` prints the usage of the `version` built-in."""
    result = run_cli(["help", "version"])

    assert_SUCCESS(result)
    assert "Usage: shipyard version" in result.output


@mark_cli
def test_builtin_own_help_flag() -> None:
    """`-h` after the command name belongs to the command, not to Shipyard."""
    result = run_cli(["alias", "--help"])

    assert_SUCCESS(result)
    assert "Usage: shipyard alias [OPTIONS] [NAME]" in result.output


@mark_cli
def test_help_for_alias_shows_expansion(tmp_path: Path) -> None:
    """`help <alias>` describes what the alias expands to."""
    settings = make_settings(tmp_path, aliases={"b": ["build", "--release"]})

    result = run_cli(["help", "b"], settings=settings)

    assert_SUCCESS(result)
    assert "`b` is aliased to `build --release`" in result.output


@mark_cli
@mark_posix
def test_help_for_external_runs_it_with_help_flag(tmp_path: Path) -> None:
    """`help <external>` runs ``shipyard-<external> <external> --help``."""
    record = tmp_path / "argv.txt"
    write_script(tmp_path / "home" / "bin", "shipyard-frob", f'printf "%s\\n" "$@" > "{record}"\n')

    result = run_cli(["help", "frob"], settings=make_settings(tmp_path))

    assert_SUCCESS(result)
    assert record.read_text(encoding="utf-8").splitlines() == ["frob", "--help"]


@mark_cli
def test_help_for_unknown_command(tmp_path: Path) -> None:
    """`help` with an unknown name fails like dispatch does."""
    result = run_cli(["help", "frobnicate"], settings=make_settings(tmp_path))

    assert_UNAVAILABLE(result)
    assert "no such subcommand: `frobnicate`" in result.output


@mark_cli
@parametrize("argv", [[], ["--help"], ["help"]])
def test_one_help_renderer_for_all_entry_points(argv: list[str]) -> None:
    """Flag, empty command line and `help` built-in share one top-level renderer."""
    result = run_cli(argv, help_renderer=lambda: "custom top-level help")

    assert_SUCCESS(result)
    assert result.output == "custom top-level help\n"
