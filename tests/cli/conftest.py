# topmark:header:start
#
#   project      : Shipyard
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Shipyard through Click's `CliRunner`.

`run_cli()` injects test doubles into Click's context object: a command
registry replacing the built-ins, and frozen settings replacing the ones
loaded from disk and the environment. Tests that need neither simply omit
them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from shipyard.cli.exit_codes import ExitCode
from shipyard.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Callable

    from shipyard.config.settings import Settings
    from shipyard.registry.commands import CommandRegistry


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    registry: CommandRegistry | None = None,
    settings: Settings | None = None,
    help_renderer: Callable[[], str] | None = None,
) -> Result:
    """Invoke the CLI with optional registry and settings overrides.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["--list"]``.
        registry (CommandRegistry | None): Built-in commands to use instead of
            Shipyard's own.
        settings (Settings | None): Settings to use instead of loading them.
        help_renderer (Callable[[], str] | None): Renders the top-level help
            instead of Click.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["b"], registry=make_registry(build=handler), settings=settings)
        assert result.exit_code == ExitCode.SUCCESS
        ```
    """
    obj: dict[str, Any] = {}
    if registry is not None:
        obj["registry"] = registry
    if settings is not None:
        obj["settings"] = settings
    if help_renderer is not None:
        obj["help_renderer"] = help_renderer
    runner = CliRunner()
    return runner.invoke(cli, argv, obj=obj)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_UNAVAILABLE(result: Result) -> None:
    """Assert that the command exited with UNAVAILABLE (code 69).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.UNAVAILABLE, result.output


def assert_OS_ERROR(result: Result) -> None:
    """Assert that the command exited with OS_ERROR (code 71).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.OS_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
