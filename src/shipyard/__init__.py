# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : src/shipyard/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shipyard package.

Shipyard is the command-line front end of a package manager. It resolves an
invocation to a built-in command, a user-defined alias, or an external
``shipyard-<command>`` executable found on the search path, and runs it.
"""

from __future__ import annotations
