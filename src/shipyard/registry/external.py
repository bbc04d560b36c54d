# topmark:header:start
#
#   project      : Shipyard
#   file         : external.py
#   file_relpath : src/shipyard/registry/external.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""External command discovery and execution.

An external command ``foo`` is an executable named ``shipyard-foo`` (with the
platform executable suffix) found in one of the search directories:
``$SHIPYARD_HOME/bin`` first, then every ``PATH`` entry in order. The first
match wins. Lookups are never cached, so every call reflects the filesystem
at that moment.
"""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from shipyard.config.logging import get_logger
from shipyard.constants import EXE_SUFFIX, EXTERNAL_COMMAND_PREFIX, PROGRAM_NAME, SELF_EXE_ENV_VAR
from shipyard.utils.process import run_process

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.settings import Settings

logger: ShipyardLogger = get_logger(__name__)


@dataclass(frozen=True)
class ExternalCommand:
    """An external command found on the search path.

    Attributes:
        name (str): Command name (without prefix or suffix).
        path (Path): Location of the executable.
    """

    name: str
    path: Path


def external_command_filename(command: str) -> str:
    """Return the executable file name for external command ``command``."""
    return f"{EXTERNAL_COMMAND_PREFIX}{command}{EXE_SUFFIX}"


def search_directories(settings: Settings) -> list[Path]:
    """Return the ordered directories probed for external commands."""
    return [settings.home / "bin", *settings.search_path]


def is_executable(path: Path) -> bool:
    """Return True if ``path`` is a regular file the current user may execute."""
    try:
        return path.is_file() and os.access(path, os.X_OK)
    except OSError:
        return False


def find_external_command(command: str, directories: Iterable[Path]) -> Path | None:
    """Search ``directories`` in order for the executable of ``command``.

    Args:
        command (str): External command name.
        directories (Iterable[Path]): Directories to probe, highest priority first.

    Returns:
        Path | None: The first matching executable, or None.
    """
    filename = external_command_filename(command)
    for directory in directories:
        candidate = directory / filename
        if is_executable(candidate):
            logger.debug("Resolved external command %r to %s", command, candidate)
            return candidate
    logger.debug("No %s found in search path", filename)
    return None


def iter_external_commands(directories: Iterable[Path]) -> Iterator[ExternalCommand]:
    """Yield every external command in ``directories``.

    A name found in several directories is yielded once, with the path that
    `find_external_command` would resolve. Unreadable directories are skipped.

    Args:
        directories (Iterable[Path]): Directories to scan, highest priority first.

    Yields:
        ExternalCommand: Discovered commands, in discovery order.
    """
    seen: set[str] = set()
    for directory in directories:
        try:
            entries = sorted(directory.iterdir())
        except OSError:
            continue
        for entry in entries:
            filename = entry.name
            if not filename.startswith(EXTERNAL_COMMAND_PREFIX):
                continue
            if EXE_SUFFIX and not filename.endswith(EXE_SUFFIX):
                continue
            name = filename[len(EXTERNAL_COMMAND_PREFIX) : len(filename) - len(EXE_SUFFIX)]
            if not name or name in seen or not is_executable(entry):
                continue
            seen.add(name)
            yield ExternalCommand(name=name, path=entry)


def current_executable() -> str:
    """Return the path of the running ``shipyard`` entry point, as exported to children."""
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0 and Path(argv0).name.startswith(PROGRAM_NAME) and Path(argv0).exists():
        return str(Path(argv0).resolve())
    return shutil.which(PROGRAM_NAME) or sys.executable


def execute_external_command(path: Path, command: str, args: Sequence[str]) -> int:
    """Run external command ``command`` located at ``path``.

    The child receives ``[command, *args]`` as its arguments, inherits the
    standard streams, and sees ``SHIPYARD`` set to the running entry point.

    Args:
        path (Path): Executable to run.
        command (str): Command name, passed as the child's first argument.
        args (Sequence[str]): Remaining arguments, forwarded verbatim.

    Returns:
        int: The child's exit code.

    Raises:
        ChildProcessFailedError: If the executable could not be started.
    """
    return run_process(
        [str(path), command, *args],
        extra_env={SELF_EXE_ENV_VAR: current_executable()},
    )
