# topmark:header:start
#
#   project      : Shipyard
#   file         : __init__.py
#   file_relpath : tests/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command registry, alias and external command tests."""
