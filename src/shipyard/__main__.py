# topmark:header:start
#
#   project      : Shipyard
#   file         : __main__.py
#   file_relpath : src/shipyard/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Shipyard via ``python -m shipyard``.

It delegates directly to :func:`shipyard.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how Shipyard is launched.
"""

from __future__ import annotations

from shipyard.cli.main import cli

if __name__ == "__main__":
    cli()
