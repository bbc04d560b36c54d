# topmark:header:start
#
#   project      : Shipyard
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Shipyard test suite.

This file sets up global fixtures and helpers shared by the test packages.

Notes:
    Tests should respect the immutable/mutable settings split:

    - Build settings with `make_settings` (a `MutableSettings` builder frozen
      into `Settings`) and pass them to the CLI through ``obj={"settings": ...}``.
    - Do **not** mutate a frozen `Settings`. If you need to tweak one, call
      `Settings.thaw()`, edit the returned `MutableSettings`, then `freeze()`.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from shipyard.config import logging
from shipyard.config.settings import MutableSettings
from shipyard.registry.commands import BuiltinCommand, CommandRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from shipyard.config.model import Config
    from shipyard.config.settings import Settings

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
_skip_unless_posix: DecoratorType[Any] = as_typed_mark(
    pytest.mark.skipif(os.name == "nt", reason="spawns POSIX shell scripts")
)


def mark_posix(func: F) -> F:
    """Mark a test that spawns POSIX shell scripts (skipped on Windows)."""
    return cast("F", pytest.mark.posix(_skip_unless_posix(func)))


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test with a clean ``SHIPYARD_*`` environment in a scratch directory.

    Shell exports (``SHIPYARD_LOG_LEVEL``, aliases, color settings) never leak
    into a test, the home directory points into ``tmp_path``, and the working
    directory is an empty project directory.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory and environment.

    Returns:
        Path: The working directory of the test.
    """
    for var in list(os.environ):
        if var.startswith("SHIPYARD"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("SHIPYARD_HOME", str(tmp_path / "home"))

    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Enable TRACE logging for code exercised outside the CLI entry point.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_settings(
    tmp_path: Path,
    *,
    aliases: Mapping[str, Sequence[str]] | None = None,
    **overrides: Any,
) -> Settings:
    """Return frozen `Settings` rooted in ``tmp_path``.

    The home directory is ``tmp_path / "home"`` and the search path is empty
    unless overridden, so nothing installed on the developer machine is found.

    Args:
        tmp_path (Path): Scratch directory of the test.
        aliases (Mapping[str, Sequence[str]] | None): Alias definitions.
        **overrides (Any): Attribute overrides applied to the mutable builder.

    Returns:
        Settings: An immutable settings snapshot for use in tests.
    """
    m = MutableSettings(home=tmp_path / "home", cwd=tmp_path)
    if aliases:
        m.aliases = {name: tuple(tokens) for name, tokens in aliases.items()}
    for k, v in overrides.items():
        setattr(m, k, list(v) if k == "search_path" else v)
    return m.freeze()


def write_script(directory: Path, name: str, body: str) -> Path:
    """Write an executable ``/bin/sh`` script and return its path.

    Args:
        directory (Path): Target directory (created if needed).
        name (str): File name.
        body (str): Script body, without the shebang line.

    Returns:
        Path: The executable script.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
    path.chmod(0o755)
    return path


class RecordingHandler:
    """Built-in handler that records its calls and returns a fixed exit code."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[tuple[Config, tuple[str, ...]]] = []

    def __call__(self, config: Config, args: Sequence[str]) -> int:
        self.calls.append((config, tuple(args)))
        return self.exit_code

    @property
    def args(self) -> list[tuple[str, ...]]:
        """Arguments of every recorded call, in order."""
        return [args for _config, args in self.calls]


def make_registry(**handlers: RecordingHandler) -> CommandRegistry:
    """Return a registry with one built-in per keyword (name → handler)."""
    return CommandRegistry(
        BuiltinCommand(name=name, about=f"Run {name}", handler=handler)
        for name, handler in handlers.items()
    )
