# topmark:header:start
#
#   project      : Shipyard
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the logging level resolved from ``SHIPYARD_LOG_LEVEL``."""

from __future__ import annotations

import logging

import pytest

from shipyard.config.logging import (
    LOG_LEVEL_ENV_VAR,
    TRACE_LEVEL,
    ShipyardLogger,
    get_logger,
    resolve_env_log_level,
)
from tests.conftest import parametrize


@parametrize(
    "raw, expected",
    [
        ("trace", TRACE_LEVEL),
        ("DEBUG", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("10", 10),
        ("verbose", None),
    ],
)
def test_env_log_level(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None) -> None:
    """Level names (any case) and numbers are accepted; unknown names are ignored."""
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, raw)

    assert resolve_env_log_level() == expected


def test_env_log_level_unset() -> None:
    """Without the variable, no level is forced."""
    assert resolve_env_log_level() is None


def test_get_logger_supports_trace() -> None:
    """Shipyard loggers expose `trace()`."""
    logger = get_logger("shipyard.tests")

    assert isinstance(logger, ShipyardLogger)
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"
