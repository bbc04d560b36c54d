# topmark:header:start
#
#   project      : Shipyard
#   file         : introspect.py
#   file_relpath : src/shipyard/cli/introspect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Introspection paths that short-circuit dispatch: ``--version``, ``--explain``, ``--list``.

Output format (stdout):

- ``--version``: ``shipyard X.Y.Z`` and, when verbose, ``release: X.Y.Z``
  followed by ``commit-hash:``/``commit-date:`` if commit metadata exists.
- ``--list``: ``Installed Commands:`` followed by one indented line per command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipyard.config.logging import get_logger
from shipyard.registry.external import iter_external_commands
from shipyard.utils.process import run_process

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from shipyard.cli.console_api import ConsoleLike
    from shipyard.config.logging import ShipyardLogger
    from shipyard.registry.commands import CommandRegistry
    from shipyard.utils.version import VersionInfo

logger: ShipyardLogger = get_logger(__name__)


def version_lines(info: VersionInfo, *, verbose: bool) -> list[str]:
    """Return the lines printed by ``--version``.

    Args:
        info (VersionInfo): Version and build metadata.
        verbose (bool): Include the release triple and commit details.

    Returns:
        list[str]: Output lines, without trailing newlines.
    """
    lines: list[str] = [str(info)]
    if verbose:
        lines.append(f"release: {info.release}")
        if info.commit_info is not None:
            lines.append(f"commit-hash: {info.commit_info.commit_hash}")
            lines.append(f"commit-date: {info.commit_info.commit_date}")
    return lines


def print_version(console: ConsoleLike, info: VersionInfo, *, verbose: bool) -> None:
    """Print the ``--version`` output."""
    for line in version_lines(info, verbose=verbose):
        console.print(line)


def run_explain(compiler: str, code: str) -> int:
    """Run ``<compiler> --explain <code>`` and return its exit status.

    Raises:
        ChildProcessFailedError: If the compiler could not be started.
    """
    logger.debug("Explaining %s with %s", code, compiler)
    return run_process([compiler, "--explain", code])


def list_commands(
    registry: CommandRegistry,
    directories: Iterable[Path],
) -> Iterator[tuple[str, Path | None]]:
    """Yield ``(name, path)`` for every installed command.

    Built-ins come first, in registry order, with no path. External commands
    follow, sorted by name; an external command named like a built-in is
    omitted because the built-in always wins.

    Args:
        registry (CommandRegistry): Built-in commands.
        directories (Iterable[Path]): External command search directories.

    Yields:
        tuple[str, Path | None]: Command name and executable path (None for built-ins).
    """
    for command in registry:
        yield command.name, None
    externals = sorted(iter_external_commands(directories), key=lambda ext: ext.name)
    for ext in externals:
        if ext.name in registry:
            logger.debug("External command %s is shadowed by a built-in", ext.path)
            continue
        yield ext.name, ext.path


def print_command_list(
    console: ConsoleLike,
    registry: CommandRegistry,
    directories: Iterable[Path],
    *,
    verbose: bool,
) -> None:
    """Print the ``--list`` output."""
    console.print("Installed Commands:")
    for name, path in list_commands(registry, directories):
        if not verbose:
            console.print(f"    {name}")
        elif path is not None:
            console.print(f"    {name:<20} {path}")
        else:
            console.print(f"    {name:<20}")
