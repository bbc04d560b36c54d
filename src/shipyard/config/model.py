# topmark:header:start
#
#   project      : Shipyard
#   file         : model.py
#   file_relpath : src/shipyard/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime configuration model.

This module defines:
    - `Config`: the immutable, per-invocation snapshot every built-in handler and
      the external resolver read from.
    - `configure`: the single initialization point that folds the global
      command-line flags into the persisted `Settings`.

Explicit flags always win over settings. `configure` runs once per top-level
invocation, before the first dispatch attempt; alias re-parses never call it
again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, Protocol

from shipyard.cli.errors import ConfigurationError
from shipyard.config.color import ColorMode, resolve_color_mode
from shipyard.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.settings import Settings

logger: ShipyardLogger = get_logger(__name__)

# Features accepted by `-Z <feature>[=yes|no]`:
KNOWN_UNSTABLE_FEATURES: Final[frozenset[str]] = frozenset(
    {
        "avoid-dev-deps",
        "minimal-versions",
        "no-index-update",
        "offline",
        "print-im-a-teapot",
        "unstable-options",
    }
)


class Verbosity(Enum):
    """Program-output verbosity."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class GlobalFlags(Protocol):
    """Global flag values consumed by `configure` (satisfied by `ParsedArgs`)."""

    @property
    def verbose(self) -> int: ...

    @property
    def quiet(self) -> bool: ...

    @property
    def color(self) -> str | None: ...

    @property
    def frozen(self) -> bool: ...

    @property
    def locked(self) -> bool: ...

    @property
    def unstable_features(self) -> Sequence[str]: ...


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for one Shipyard invocation.

    Attributes:
        settings (Settings): Persisted settings this snapshot was built from
            (aliases, search path, compiler, home).
        verbosity (Verbosity): Effective program-output verbosity.
        extra_verbose (bool): True for ``-vv`` and above.
        color (ColorMode): Effective color mode.
        color_enabled (bool): Whether ANSI styling is emitted.
        frozen (bool): ``--frozen``: lock file and caches must be up to date.
        locked (bool): ``--locked`` (implied by ``--frozen``).
        offline (bool): No network access (``--frozen`` or ``net.offline``).
        unstable_features (frozenset[str]): Enabled ``-Z`` features.
    """

    settings: Settings
    verbosity: Verbosity = Verbosity.NORMAL
    extra_verbose: bool = False
    color: ColorMode = ColorMode.AUTO
    color_enabled: bool = False
    frozen: bool = False
    locked: bool = False
    offline: bool = False
    unstable_features: frozenset[str] = frozenset()

    @property
    def is_verbose(self) -> bool:
        """Return True when verbose output was requested."""
        return self.verbosity is Verbosity.VERBOSE

    @property
    def is_quiet(self) -> bool:
        """Return True when output should be suppressed."""
        return self.verbosity is Verbosity.QUIET

    def unstable(self, feature: str) -> bool:
        """Return True if ``-Z <feature>`` was enabled."""
        return feature in self.unstable_features


def resolve_verbosity(
    verbose_count: int,
    quiet: bool,
    settings: Settings,
) -> tuple[Verbosity, bool]:
    """Resolve the effective verbosity from flags and settings.

    Args:
        verbose_count (int): Number of ``-v`` flags.
        quiet (bool): Whether ``-q`` was passed.
        settings (Settings): Persisted settings (``term.verbose``/``term.quiet``).

    Returns:
        tuple[Verbosity, bool]: The verbosity and the extra-verbose flag.

    Raises:
        ConfigurationError: If both ``--verbose`` and ``--quiet`` were passed,
            or if the settings enable both ``term.verbose`` and ``term.quiet``.
    """
    if verbose_count > 0 and quiet:
        raise ConfigurationError("cannot set both --verbose and --quiet")
    if quiet:
        return Verbosity.QUIET, False
    if verbose_count > 0:
        return Verbosity.VERBOSE, verbose_count >= 2

    if settings.term_verbose and settings.term_quiet:
        raise ConfigurationError("cannot set both `term.verbose` and `term.quiet`")
    if settings.term_verbose:
        return Verbosity.VERBOSE, False
    if settings.term_quiet:
        return Verbosity.QUIET, False
    return Verbosity.NORMAL, False


def resolve_color(cli_color: str | None, settings: Settings) -> ColorMode:
    """Resolve the color mode (flag first, then ``term.color``, then auto).

    Raises:
        ConfigurationError: If the chosen value is not auto, always, or never.
    """
    raw = cli_color if cli_color is not None else settings.term_color
    if raw is None:
        return ColorMode.AUTO
    mode = ColorMode.parse(raw)
    if mode is None:
        raise ConfigurationError(
            f"argument for --color must be auto, always, or never, but found `{raw}`"
        )
    return mode


def parse_unstable_features(flags: Sequence[str]) -> frozenset[str]:
    """Validate ``-Z`` flags and return the set of enabled features.

    Each flag is ``name`` or ``name=value`` where value is ``yes`` or ``no``;
    later flags override earlier ones.

    Args:
        flags (Sequence[str]): Raw ``-Z`` values in command-line order.

    Returns:
        frozenset[str]: Names of the enabled features.

    Raises:
        ConfigurationError: On unknown feature names or invalid values.
    """
    enabled: set[str] = set()
    for flag in flags:
        name, sep, value = flag.partition("=")
        name = name.strip()
        if name not in KNOWN_UNSTABLE_FEATURES:
            raise ConfigurationError(f"unknown -Z flag specified: {name}")
        value = value.strip()
        if not sep or value == "yes":
            enabled.add(name)
        elif value == "no":
            enabled.discard(name)
        else:
            raise ConfigurationError(
                f"flag -Z {name} expected `no` or `yes`, found: `{value}`"
            )
    return frozenset(enabled)


def configure(settings: Settings, flags: GlobalFlags) -> Config:
    """Build the runtime `Config` from settings and global flags.

    Args:
        settings (Settings): Persisted settings merged with the environment.
        flags (GlobalFlags): Global flag values from the top-level invocation.

    Returns:
        Config: The immutable runtime configuration.

    Raises:
        ConfigurationError: If flags and settings are inconsistent or invalid.
    """
    verbosity, extra_verbose = resolve_verbosity(flags.verbose, flags.quiet, settings)
    color = resolve_color(flags.color, settings)
    unstable = parse_unstable_features(flags.unstable_features)

    config = Config(
        settings=settings,
        verbosity=verbosity,
        extra_verbose=extra_verbose,
        color=color,
        color_enabled=resolve_color_mode(color_mode=color),
        frozen=flags.frozen,
        locked=flags.locked or flags.frozen,
        offline=flags.frozen or settings.offline or "offline" in unstable,
        unstable_features=unstable,
    )
    logger.debug(
        "Configured: verbosity=%s color=%s frozen=%s locked=%s offline=%s unstable=%s",
        config.verbosity.value,
        config.color.value,
        config.frozen,
        config.locked,
        config.offline,
        sorted(config.unstable_features),
    )
    return config
