# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : src/shipyard/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard configuration package.

Two layers are exposed:

- [`Settings`][shipyard.config.settings.Settings]: persisted settings
  (``config.toml`` files) merged with ``SHIPYARD_*`` environment overrides.
- [`Config`][shipyard.config.model.Config]: the immutable, per-invocation
  runtime snapshot built from `Settings` and the global command-line flags.
"""

from __future__ import annotations

from shipyard.config.model import Config, Verbosity, configure
from shipyard.config.settings import Settings, load_settings

__all__ = [
    "Config",
    "Settings",
    "Verbosity",
    "configure",
    "load_settings",
]
