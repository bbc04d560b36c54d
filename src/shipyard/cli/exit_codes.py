# topmark:header:start
#
#   project      : Shipyard
#   file         : exit_codes.py
#   file_relpath : src/shipyard/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Shipyard CLI.

Shipyard aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. Exit codes of child processes
(external commands, ``--explain``) are never remapped: the parent mirrors them
verbatim.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Shipyard CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Malformed global flags. Mirrors BSD ``EX_USAGE (64)``.
        UNAVAILABLE: No built-in, alias, or external command matches the
            requested name. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        OS_ERROR: A child process could not be spawned. Mirrors BSD
            ``EX_OSERR (71)``.
        CONFIG_ERROR: Configuration error (invalid settings, inconsistent flags,
            alias cycles). Mirrors BSD ``EX_CONFIG (78)``.
        SIGNAL_BASE: Offset added to the signal number when a child process is
            terminated by a signal (shell convention).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    UNAVAILABLE = 69  # EX_UNAVAILABLE
    OS_ERROR = 71  # EX_OSERR
    CONFIG_ERROR = 78  # EX_CONFIG

    SIGNAL_BASE = 128
