# topmark:header:start
#
#   project      : Shipyard
#   file         : version.py
#   file_relpath : src/shipyard/utils/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version and build metadata for Shipyard.

The release triple is parsed from the installed distribution version (PEP 440).
Commit metadata is stamped into the environment of release builds
(``SHIPYARD_COMMIT_HASH``, ``SHIPYARD_COMMIT_SHORT_HASH``,
``SHIPYARD_COMMIT_DATE``) and is absent for development installs.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shipyard.constants import PROGRAM_NAME, SHIPYARD_VERSION

if TYPE_CHECKING:
    from collections.abc import Mapping

COMMIT_HASH_ENV_VAR = "SHIPYARD_COMMIT_HASH"
COMMIT_SHORT_HASH_ENV_VAR = "SHIPYARD_COMMIT_SHORT_HASH"
COMMIT_DATE_ENV_VAR = "SHIPYARD_COMMIT_DATE"

# Recognize the subset of PEP 440 we emit:
#   X.Y.Z
#   X.Y.ZrcN / X.Y.ZaN / X.Y.ZbN
#   X.Y.Z.postN
#   X.Y.Z.devN
#   +local (optional)
_PEP440_RE: re.Pattern[str] = re.compile(
    r"""
    ^
    (?P<major>0|[1-9]\d*)\.
    (?P<minor>0|[1-9]\d*)\.
    (?P<patch>0|[1-9]\d*)
    (?:
      (?P<pre_label>a|b|rc)(?P<pre_num>\d+)
    )?
    (?:
      \.post(?P<post>\d+)
    )?
    (?:
      \.dev(?P<dev>\d+)
    )?
    (?:
      \+(?P<local>[0-9A-Za-z]+(?:\.[0-9A-Za-z]+)*)
    )?
    $
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class CommitInfo:
    """Commit the running build was produced from."""

    commit_hash: str
    short_commit_hash: str
    commit_date: str


@dataclass(frozen=True)
class VersionInfo:
    """Structured Shipyard version.

    Attributes:
        major (int): Major release number.
        minor (int): Minor release number.
        patch (int): Patch release number.
        pre_release (str | None): Pre-release/dev suffix in SemVer style
            (e.g. ``rc.1``, ``dev.3``), or None for final releases.
        commit_info (CommitInfo | None): Build commit, when known.
    """

    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    commit_info: CommitInfo | None = None

    @property
    def release(self) -> str:
        """Return the ``X.Y.Z`` release triple."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        text = f"{PROGRAM_NAME} {self.release}"
        if self.pre_release:
            text += f"-{self.pre_release}"
        if self.commit_info is not None:
            text += f" ({self.commit_info.short_commit_hash} {self.commit_info.commit_date})"
        return text


def parse_version(pep440_version: str, commit: CommitInfo | None = None) -> VersionInfo:
    """Parse (our) PEP 440 version string into a `VersionInfo`.

    Maps:
      rcN  -> rc.N
      aN   -> alpha.N
      bN   -> beta.N
      postN -> post.N
      devN -> dev.N (after any pre-release)

    Args:
        pep440_version (str): The version in PEP 440 format.
        commit (CommitInfo | None): Build commit metadata, if any.

    Returns:
        VersionInfo: The structured version.

    Raises:
        ValueError: If the version is not in the supported PEP 440 subset.
    """
    m: re.Match[str] | None = _PEP440_RE.match(pep440_version)
    if not m:
        raise ValueError(f"Not a recognized PEP 440 version: {pep440_version!r}")
    parts: list[str] = []
    if m.group("pre_label"):
        label: str = {"a": "alpha", "b": "beta", "rc": "rc"}[m.group("pre_label")]
        parts.append(f"{label}.{m.group('pre_num')}")
    if m.group("post") is not None:
        parts.append(f"post.{m.group('post')}")
    if m.group("dev") is not None:
        parts.append(f"dev.{m.group('dev')}")
    return VersionInfo(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        pre_release=".".join(parts) or None,
        commit_info=commit,
    )


def commit_info(env: Mapping[str, str] | None = None) -> CommitInfo | None:
    """Return the build commit metadata, or None if the build carries none.

    The short hash defaults to the first nine characters of the full hash.
    """
    environ: Mapping[str, str] = os.environ if env is None else env
    commit_hash = environ.get(COMMIT_HASH_ENV_VAR)
    commit_date = environ.get(COMMIT_DATE_ENV_VAR)
    if not commit_hash or not commit_date:
        return None
    short = environ.get(COMMIT_SHORT_HASH_ENV_VAR) or commit_hash[:9]
    return CommitInfo(commit_hash=commit_hash, short_commit_hash=short, commit_date=commit_date)


def version(env: Mapping[str, str] | None = None) -> VersionInfo:
    """Return the version of the running Shipyard installation."""
    return parse_version(SHIPYARD_VERSION, commit_info(env))
