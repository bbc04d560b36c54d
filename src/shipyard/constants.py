# topmark:header:start
#
#   project      : Shipyard
#   file         : constants.py
#   file_relpath : src/shipyard/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard Constants."""

from __future__ import annotations

import os
from importlib.metadata import version as get_version

SHIPYARD_VERSION: str = get_version("shipyard")

PROGRAM_NAME: str = "shipyard"

# External commands are executables named `shipyard-<command>`:
EXTERNAL_COMMAND_PREFIX: str = f"{PROGRAM_NAME}-"
EXE_SUFFIX: str = ".exe" if os.name == "nt" else ""

# Home directory (config + installed binaries) and per-project config location:
HOME_ENV_VAR: str = "SHIPYARD_HOME"
DEFAULT_HOME_DIRNAME: str = ".shipyard"
CONFIG_DIRNAME: str = ".shipyard"
CONFIG_FILENAME: str = "config.toml"

# Prefix of environment variables that override persisted settings:
ENV_PREFIX: str = "SHIPYARD_"

# Exported to external commands so they can call back into Shipyard:
SELF_EXE_ENV_VAR: str = "SHIPYARD"

DEFAULT_COMPILER: str = "rustc"
