# topmark:header:start
#
#   project      : Shipyard
#   file         : test_parser.py
#   file_relpath : tests/cli/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for global option parsing (`parse_invocation`)."""

from __future__ import annotations

import pytest

from shipyard.cli.errors import ArgumentParseError
from shipyard.cli.exit_codes import ExitCode
from shipyard.cli.parser import ParsedArgs, parse_invocation
from tests.conftest import parametrize


def test_empty_invocation() -> None:
    """No tokens: no command, no flags."""
    assert parse_invocation([]) == ParsedArgs()


def test_command_and_args_split() -> None:
    """The first non-flag token is the command; the rest are its arguments."""
    parsed = parse_invocation(["build", "--release", "x"])

    assert parsed.command == "build"
    assert parsed.args == ("--release", "x")
    assert not parsed.has_global_flags


def test_flags_after_command_are_not_global() -> None:
    """`build --verbose -Z x` leaves every token to the command."""
    parsed = parse_invocation(["build", "--verbose", "-Z", "x", "--color", "always"])

    assert parsed.verbose == 0
    assert parsed.unstable_features == ()
    assert parsed.color is None
    assert parsed.args == ("--verbose", "-Z", "x", "--color", "always")


def test_all_global_flags() -> None:
    """Every global flag is recognized before the command name."""
    parsed = parse_invocation(
        [
            "-vv",
            "--color",
            "always",
            "--frozen",
            "--locked",
            "-Z",
            "offline",
            "-Z",
            "minimal-versions=no",
            "test",
            "--",
            "--nocapture",
        ]
    )

    assert parsed.verbose == 2
    assert parsed.color == "always"
    assert parsed.frozen and parsed.locked
    assert parsed.unstable_features == ("offline", "minimal-versions=no")
    assert parsed.command == "test"
    assert parsed.args == ("--", "--nocapture")
    assert parsed.has_global_flags


@parametrize(
    "tokens, attr, expected",
    [
        (["-V"], "version", True),
        (["--version"], "version", True),
        (["--list"], "list_commands", True),
        (["--explain", "E0001"], "explain", "E0001"),
        (["-h"], "show_help", True),
        (["--help"], "show_help", True),
        (["-q"], "quiet", True),
        (["--quiet"], "quiet", True),
        (["-v", "--verbose", "-v"], "verbose", 3),
    ],
)
def test_individual_flags(tokens: list[str], attr: str, expected: object) -> None:
    """Each flag lands in its own field."""
    parsed = parse_invocation(tokens)

    assert getattr(parsed, attr) == expected
    assert parsed.command is None


def test_double_dash_before_command() -> None:
    """`--` ends global flag parsing; the next token is the command."""
    parsed = parse_invocation(["-v", "--", "-weird", "a"])

    assert parsed.verbose == 1
    assert parsed.command == "-weird"
    assert parsed.args == ("a",)


def test_parse_is_pure() -> None:
    """Parsing the same tokens twice gives equal results and leaves the input intact."""
    tokens = ["-v", "b", "--release"]

    first = parse_invocation(tokens)
    second = parse_invocation(tokens)

    assert first == second
    assert tokens == ["-v", "b", "--release"]


@parametrize(
    "tokens",
    [
        ["--bogus"],
        ["-x", "build"],
        ["--color"],
        ["--explain"],
        ["-Z"],
    ],
)
def test_parse_errors(tokens: list[str]) -> None:
    """Unknown flags and missing values raise `ArgumentParseError` (exit code 64)."""
    with pytest.raises(ArgumentParseError) as excinfo:
        parse_invocation(tokens)

    assert excinfo.value.exit_code == ExitCode.USAGE_ERROR


def test_color_value_is_not_validated_while_parsing() -> None:
    """`--color` accepts any word; validation happens when configuring."""
    assert parse_invocation(["--color", "sometimes"]).color == "sometimes"
