# topmark:header:start
#
#   project      : Shipyard
#   file         : process.py
#   file_relpath : src/shipyard/utils/process.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Child process execution.

Children inherit the parent's standard streams and block the caller until they
exit. Their exit status is returned unchanged; a child killed by signal ``N``
maps to ``128 + N``.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING

from shipyard.cli.errors import ChildProcessFailedError
from shipyard.cli.exit_codes import ExitCode
from shipyard.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from shipyard.config.logging import ShipyardLogger

logger: ShipyardLogger = get_logger(__name__)


def run_process(
    argv: Sequence[str],
    *,
    extra_env: Mapping[str, str] | None = None,
) -> int:
    """Run ``argv`` to completion and return its exit status.

    Args:
        argv (Sequence[str]): Program followed by its arguments.
        extra_env (Mapping[str, str] | None): Variables added to the inherited environment.

    Returns:
        int: The child's exit code (``128 + N`` when terminated by signal ``N``).

    Raises:
        ChildProcessFailedError: If the process could not be started.
    """
    env: dict[str, str] | None = None
    if extra_env:
        env = {**os.environ, **extra_env}

    logger.debug("Executing %s", " ".join(argv))
    try:
        completed = subprocess.run(list(argv), env=env, check=False)
    except OSError as exc:
        logger.debug("Failed to spawn %s: %s", argv[0], exc)
        raise ChildProcessFailedError(argv, exc.strerror or str(exc)) from exc

    code = completed.returncode
    if code < 0:
        code = ExitCode.SIGNAL_BASE - code
    logger.debug("Process %s exited with status %d", argv[0], code)
    return int(code)
