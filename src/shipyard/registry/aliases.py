# topmark:header:start
#
#   project      : Shipyard
#   file         : aliases.py
#   file_relpath : src/shipyard/registry/aliases.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""User-defined command aliases.

An alias maps a command name to an ordered token sequence (a command plus its
own flags). Expanding an alias appends the caller's extra arguments after the
expansion tokens; the result is re-parsed as a brand-new invocation by the
dispatcher.

The table is not checked for cycles when it is built. Cycle safety is enforced
while expanding, through `AliasExpansion`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from shipyard.cli.errors import AliasCycleError, ConfigurationError
from shipyard.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from shipyard.config.logging import ShipyardLogger
    from shipyard.config.settings import Settings

logger: ShipyardLogger = get_logger(__name__)


class AliasTable:
    """Read-only mapping from alias name to expansion tokens.

    Args:
        aliases (Mapping[str, Sequence[str]]): Alias definitions.
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        self._aliases: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {name: tuple(tokens) for name, tokens in (aliases or {}).items()}
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AliasTable:
        """Build the table from the ``[alias]`` settings."""
        return cls(settings.aliases)

    def __contains__(self, name: object) -> bool:
        return name in self._aliases

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def get(self, name: str) -> tuple[str, ...] | None:
        """Return the expansion tokens for exactly ``name``, or None."""
        return self._aliases.get(name)

    def items(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        """Iterate ``(name, tokens)`` pairs sorted by name."""
        for name in sorted(self._aliases):
            yield name, self._aliases[name]


class AliasExpansion:
    """Tracks alias expansion within one top-level invocation.

    Every alias name expanded during the invocation is recorded; expanding a
    name a second time means the aliases form a cycle.

    Only names are tracked, not the arguments that come with them. A name that
    comes back with fewer arguments (``a = ["b"]``, ``b = ["-q"]``, invoked as
    ``a a``) is reported as a cycle even though the expansion would end.
    """

    def __init__(self) -> None:
        self._chain: list[str] = []

    @property
    def chain(self) -> tuple[str, ...]:
        """Alias names expanded so far, in order."""
        return tuple(self._chain)

    def expand(self, name: str, tokens: Sequence[str], args: Sequence[str]) -> list[str]:
        """Expand alias ``name`` with the caller's remaining ``args``.

        Args:
            name (str): Alias being expanded.
            tokens (Sequence[str]): Expansion tokens from the alias table.
            args (Sequence[str]): Caller-supplied arguments, appended after ``tokens``.

        Returns:
            list[str]: The token sequence to re-parse as a new invocation.

        Raises:
            AliasCycleError: If ``name`` was already expanded in this invocation.
            ConfigurationError: If the alias has an empty expansion.
        """
        if name in self._chain:
            raise AliasCycleError([*self._chain, name])
        if not tokens:
            raise ConfigurationError(f"alias `{name}` has an empty expansion")
        self._chain.append(name)

        expanded: list[str] = [*tokens, *args]
        logger.debug("Expanded alias %r to %s", name, expanded)
        return expanded
