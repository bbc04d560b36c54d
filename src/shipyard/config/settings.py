# topmark:header:start
#
#   project      : Shipyard
#   file         : settings.py
#   file_relpath : src/shipyard/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Persisted settings and environment overrides.

This module is the settings collaborator of the dispatcher. It discovers and
reads ``config.toml`` files with `tomlkit`, layers ``SHIPYARD_*`` environment
variables on top, and freezes the result into an immutable `Settings`.

Layers (low → high precedence):
    1. Runtime defaults (no I/O).
    2. ``$SHIPYARD_HOME/config.toml`` (home defaults to ``~/.shipyard``).
    3. ``.shipyard/config.toml`` in every directory from the filesystem root down
       to the current directory; closer directories win.
    4. Environment variables (see [`Env`][shipyard.config.keys.Env]).

Command-line flags are not handled here; they are folded in by
[`configure`][shipyard.config.model.configure].
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from shipyard.cli.errors import ConfigurationError
from shipyard.config.keys import Env, Toml
from shipyard.config.logging import get_logger
from shipyard.constants import (
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    DEFAULT_COMPILER,
    DEFAULT_HOME_DIRNAME,
    HOME_ENV_VAR,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from shipyard.config.logging import ShipyardLogger

TomlTable = dict[str, Any]

logger: ShipyardLogger = get_logger(__name__)

_TRUE_STRINGS: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS: frozenset[str] = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Immutable view of persisted settings merged with environment overrides.

    Attributes:
        home (Path): Shipyard home directory (``$SHIPYARD_HOME`` or ``~/.shipyard``).
        cwd (Path): Directory the settings were discovered from.
        search_path (tuple[Path, ...]): Entries of the executable search path (``PATH``).
        term_verbose (bool | None): ``term.verbose``; None when unset.
        term_quiet (bool | None): ``term.quiet``; None when unset.
        term_color (str | None): ``term.color`` (unvalidated); None when unset.
        offline (bool): ``net.offline``.
        compiler (str): ``build.compiler``; program run by ``--explain``.
        aliases (Mapping[str, tuple[str, ...]]): Alias name → expansion tokens.
        config_files (tuple[Path, ...]): Config files that contributed, in merge order.
    """

    home: Path
    cwd: Path
    search_path: tuple[Path, ...] = ()
    term_verbose: bool | None = None
    term_quiet: bool | None = None
    term_color: str | None = None
    offline: bool = False
    compiler: str = DEFAULT_COMPILER
    aliases: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableSettings:
        """Return a mutable copy of these settings."""
        return MutableSettings(
            home=self.home,
            cwd=self.cwd,
            search_path=list(self.search_path),
            term_verbose=self.term_verbose,
            term_quiet=self.term_quiet,
            term_color=self.term_color,
            offline=self.offline,
            compiler=self.compiler,
            aliases=dict(self.aliases),
            config_files=list(self.config_files),
        )


@dataclass
class MutableSettings:
    """Mutable builder used while layering settings sources.

    Call `freeze()` to obtain the immutable `Settings` used at runtime.
    """

    home: Path
    cwd: Path
    search_path: list[Path] = field(default_factory=lambda: [])
    term_verbose: bool | None = None
    term_quiet: bool | None = None
    term_color: str | None = None
    offline: bool = False
    compiler: str = DEFAULT_COMPILER
    aliases: dict[str, tuple[str, ...]] = field(default_factory=lambda: {})
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> Settings:
        """Freeze this builder into an immutable `Settings`."""
        return Settings(
            home=self.home,
            cwd=self.cwd,
            search_path=tuple(self.search_path),
            term_verbose=self.term_verbose,
            term_quiet=self.term_quiet,
            term_color=self.term_color,
            offline=self.offline,
            compiler=self.compiler,
            aliases=MappingProxyType(dict(self.aliases)),
            config_files=tuple(self.config_files),
        )

    def apply_toml(self, table: TomlTable, *, source: Path | str) -> None:
        """Merge a parsed TOML document into this builder.

        Keys present in ``table`` override values set by earlier layers; aliases
        are merged per name.

        Args:
            table (TomlTable): Parsed TOML document.
            source (Path | str): Origin of ``table``, used in error messages.

        Raises:
            ConfigurationError: If a known key holds a value of the wrong type.
        """
        term = _get_table(table, Toml.SECTION_TERM, source)
        if Toml.KEY_VERBOSE in term:
            self.term_verbose = _expect_bool(term, Toml.SECTION_TERM, Toml.KEY_VERBOSE, source)
        if Toml.KEY_QUIET in term:
            self.term_quiet = _expect_bool(term, Toml.SECTION_TERM, Toml.KEY_QUIET, source)
        if Toml.KEY_COLOR in term:
            self.term_color = _expect_str(term, Toml.SECTION_TERM, Toml.KEY_COLOR, source)

        net = _get_table(table, Toml.SECTION_NET, source)
        if Toml.KEY_OFFLINE in net:
            self.offline = _expect_bool(net, Toml.SECTION_NET, Toml.KEY_OFFLINE, source)

        build = _get_table(table, Toml.SECTION_BUILD, source)
        if Toml.KEY_COMPILER in build:
            self.compiler = _expect_str(build, Toml.SECTION_BUILD, Toml.KEY_COMPILER, source)

        for name, value in _get_table(table, Toml.SECTION_ALIAS, source).items():
            self.aliases[name] = parse_alias_value(value, key=f"alias.{name}", source=source)

        if isinstance(source, Path):
            self.config_files.append(source)

    def apply_env(self, env: Mapping[str, str]) -> None:
        """Merge ``SHIPYARD_*`` environment overrides into this builder.

        Args:
            env (Mapping[str, str]): Environment mapping (usually ``os.environ``).

        Raises:
            ConfigurationError: If a boolean variable holds an unrecognized value.
        """
        if Env.TERM_VERBOSE in env:
            self.term_verbose = parse_env_bool(env, Env.TERM_VERBOSE)
        if Env.TERM_QUIET in env:
            self.term_quiet = parse_env_bool(env, Env.TERM_QUIET)
        if Env.TERM_COLOR in env:
            self.term_color = env[Env.TERM_COLOR]
        if Env.NET_OFFLINE in env:
            self.offline = parse_env_bool(env, Env.NET_OFFLINE)
        if env.get(Env.BUILD_COMPILER):
            self.compiler = env[Env.BUILD_COMPILER]

        for var, value in env.items():
            if not var.startswith(Env.ALIAS_PREFIX) or var == Env.ALIAS_PREFIX:
                continue
            name = var[len(Env.ALIAS_PREFIX) :].lower().replace("_", "-")
            self.aliases[name] = parse_alias_value(value, key=var, source="environment")
            logger.debug("Alias %r taken from environment variable %s", name, var)


def parse_alias_value(value: object, *, key: str, source: Path | str) -> tuple[str, ...]:
    """Normalize an alias definition into its expansion tokens.

    A string is split on whitespace; a list must contain only strings.

    Args:
        value (object): Raw alias value from TOML or the environment.
        key (str): Dotted key or variable name, used in error messages.
        source (Path | str): Origin of the value, used in error messages.

    Returns:
        tuple[str, ...]: The expansion tokens (possibly empty).

    Raises:
        ConfigurationError: If the value is neither a string nor a list of strings.
    """
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, list) and all(isinstance(item, str) for item in cast("list[Any]", value)):
        return tuple(cast("list[str]", value))
    raise ConfigurationError(
        f"{source}: `{key}` must be a string or a list of strings, found {type(value).__name__}"
    )


def parse_env_bool(env: Mapping[str, str], var: str) -> bool:
    """Parse a boolean environment variable.

    Args:
        env (Mapping[str, str]): Environment mapping.
        var (str): Variable name.

    Returns:
        bool: The parsed value.

    Raises:
        ConfigurationError: If the value is not one of ``true/false/1/0/yes/no/on/off``.
    """
    raw = env[var].strip().lower()
    if raw in _TRUE_STRINGS:
        return True
    if raw in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"environment variable {var} must be a boolean, found `{env[var]}`")


def _get_table(table: TomlTable, section: str, source: Path | str) -> TomlTable:
    value: Any = table.get(section, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"{source}: `{section}` must be a table")
    return cast("TomlTable", value)


def _expect_bool(table: TomlTable, section: str, key: str, source: Path | str) -> bool:
    value: Any = table[key]
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"{source}: expected a boolean for `{section}.{key}`, found {type(value).__name__}"
        )
    return value


def _expect_str(table: TomlTable, section: str, key: str, source: Path | str) -> str:
    value: Any = table[key]
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{source}: expected a string for `{section}.{key}`, found {type(value).__name__}"
        )
    return value


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a ``config.toml`` document.

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as exc:
        raise ConfigurationError(f"could not read configuration file {path}: {exc}") from exc
    except TomlkitParseError as exc:
        raise ConfigurationError(f"could not parse TOML configuration in {path}: {exc}") from exc
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def resolve_home(env: Mapping[str, str]) -> Path:
    """Return the Shipyard home directory.

    Honors ``SHIPYARD_HOME``; otherwise ``~/.shipyard``.
    """
    raw = env.get(HOME_ENV_VAR)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.home() / DEFAULT_HOME_DIRNAME


def discover_config_files(cwd: Path, home: Path) -> Iterator[Path]:
    """Yield existing config files in merge order (lowest precedence first).

    The home config comes first, followed by ``.shipyard/config.toml`` of every
    ancestor of ``cwd`` from the root down to ``cwd`` itself. A file reachable
    both ways is yielded once, at its first position.

    Args:
        cwd (Path): Directory to discover from.
        home (Path): Shipyard home directory.

    Yields:
        Path: Absolute paths of existing config files.
    """
    seen: set[Path] = set()
    candidates: list[Path] = [home / CONFIG_FILENAME]
    candidates.extend(
        directory / CONFIG_DIRNAME / CONFIG_FILENAME for directory in reversed([cwd, *cwd.parents])
    )
    for candidate in candidates:
        if not candidate.is_file():
            continue
        resolved = candidate.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        yield resolved


def split_search_path(raw: str | None) -> list[Path]:
    """Split a ``PATH``-style string into directories, skipping empty entries."""
    if not raw:
        return []
    return [Path(entry) for entry in raw.split(os.pathsep) if entry]


def load_settings(
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Discover, read and merge all settings layers.

    Args:
        cwd (Path | None): Directory to discover project configs from
            (defaults to the current working directory).
        env (Mapping[str, str] | None): Environment mapping (defaults to ``os.environ``).

    Returns:
        Settings: The merged, immutable settings.

    Raises:
        ConfigurationError: If a config file or environment override is invalid.
    """
    environ: Mapping[str, str] = os.environ if env is None else env
    base: Path = (cwd or Path.cwd()).resolve()
    home: Path = resolve_home(environ)

    draft = MutableSettings(
        home=home,
        cwd=base,
        search_path=split_search_path(environ.get("PATH")),
    )
    for path in discover_config_files(base, home):
        logger.debug("Loading settings from %s", path)
        draft.apply_toml(load_toml_dict(path), source=path)
    draft.apply_env(environ)

    settings = draft.freeze()
    logger.trace("Settings: %r", settings)
    return settings
