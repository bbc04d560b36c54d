# topmark:header:start
#
#   project      : Shipyard
#   file         : logging.py
#   file_relpath : src/shipyard/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Shipyard logging with TRACE logging.

This module extends the standard logging module with a custom TRACE level, a
specialized logger class, and chalk-colored output formatting. Logging is for
internal diagnostics only; user-facing output goes through the console.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final, cast

from yachalk import chalk

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "SHIPYARD_LOG_LEVEL"


class ShipyardLogger(logging.Logger):
    """Logger class with support for a TRACE log level below DEBUG."""

    def trace(self, msg: object, *args: object) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(ShipyardLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``SHIPYARD_LOG_LEVEL``, or None if unset or unknown.

    Accepts level names (``TRACE``, ``debug``, ``WARN``, ...) and numbers.
    """
    val = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not val:
        return None
    if val.isdigit():
        return int(val)
    level = logging.getLevelName(val)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with a specified log level and colored output.

    If ``level`` is None, the environment is consulted via
    [`resolve_env_log_level`][shipyard.config.logging.resolve_env_log_level].
    Default is CRITICAL when unspecified. Records are written to stderr.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Iterate over a copy since we're modifying the list
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str) -> ShipyardLogger:
    """Retrieve a ShipyardLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        ShipyardLogger: A ShipyardLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("ShipyardLogger", logger)
