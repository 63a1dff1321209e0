"""Tests for tmuxlib.common."""

from __future__ import annotations

import typing as t

import pytest

from tmuxlib import exc
from tmuxlib.common import (
    decode,
    parse_records,
    require_empty,
    require_success,
    resolve_runner,
    split_records,
)
from tmuxlib.parse import digits
from tmuxlib.runner import SubprocessRunner
from tmuxlib.testing import MockRunner, result

if t.TYPE_CHECKING:
    from tmuxlib._types import CommandResult


class ValidatorFixture(t.NamedTuple):
    """Test fixture for the output validators."""

    test_id: str
    output: CommandResult
    empty_ok: bool
    success_ok: bool


VALIDATOR_FIXTURES: list[ValidatorFixture] = [
    ValidatorFixture(
        test_id="silent_success",
        output=result(),
        empty_ok=True,
        success_ok=True,
    ),
    ValidatorFixture(
        test_id="stdout_on_success",
        output=result(stdout=b"$1\n"),
        empty_ok=False,
        success_ok=True,
    ),
    ValidatorFixture(
        test_id="stderr_on_success",
        output=result(stderr=b"warning"),
        empty_ok=False,
        success_ok=True,
    ),
    ValidatorFixture(
        test_id="silent_failure",
        output=result(returncode=1),
        empty_ok=True,
        success_ok=False,
    ),
    ValidatorFixture(
        test_id="failure_with_stderr",
        output=result(stderr=b"no server running", returncode=1),
        empty_ok=False,
        success_ok=False,
    ),
]


@pytest.mark.parametrize(
    list(ValidatorFixture._fields),
    VALIDATOR_FIXTURES,
    ids=[f.test_id for f in VALIDATOR_FIXTURES],
)
def test_validators(
    test_id: str,
    output: CommandResult,
    empty_ok: bool,
    success_ok: bool,
) -> None:
    """require_empty looks at the streams, require_success at the status."""
    if empty_ok:
        require_empty(output, "intent")
    else:
        with pytest.raises(exc.UnexpectedTmuxOutput):
            require_empty(output, "intent")

    if success_ok:
        require_success(output, "intent")
    else:
        with pytest.raises(exc.UnexpectedTmuxOutput):
            require_success(output, "intent")


def test_validator_error_is_lossy() -> None:
    """Invalid UTF-8 in the streams does not hide the failure."""
    with pytest.raises(exc.UnexpectedTmuxOutput) as excinfo:
        require_success(result(stderr=b"bad \xff", returncode=1), "kill-session")

    err = excinfo.value
    assert err.intent == "kill-session"
    assert err.stdout == ""
    assert err.stderr == "bad �"


def test_decode_is_strict() -> None:
    """Invalid UTF-8 raises Utf8Error chained to the decode error."""
    with pytest.raises(exc.Utf8Error) as excinfo:
        decode(b"\xff\xfe")
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_split_records() -> None:
    """Lines are split and the trailing newline dropped."""
    assert split_records("a\nb\n") == ["a", "b"]
    assert split_records("a") == ["a"]
    assert split_records("\n") == []
    assert split_records("") == []


def test_parse_records_stops_on_first_bad_line() -> None:
    """A malformed line fails the whole list."""
    assert parse_records(result(), digits, desc="n", intent="n") == []
    assert parse_records(
        result(stdout=b"1\n22\n"),
        digits,
        desc="n",
        intent="n",
    ) == ["1", "22"]

    with pytest.raises(exc.ParseError):
        parse_records(result(stdout=b"1\nx\n3\n"), digits, desc="n", intent="n")


def test_resolve_runner() -> None:
    """A given runner is used as is, otherwise a SubprocessRunner is built."""
    runner = MockRunner()
    assert resolve_runner(runner) is runner
    assert isinstance(resolve_runner(None), SubprocessRunner)
