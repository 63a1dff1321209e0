"""Tests for tmuxlib.client."""

from __future__ import annotations

import typing as t

import pytest

from tmuxlib import client, exc
from tmuxlib.client import CLIENT_FORMAT, Client
from tmuxlib.testing import MockRunner, failure, result


class ClientParseFixture(t.NamedTuple):
    """Test fixture for test_client_from_str()."""

    test_id: str
    line: str
    expected: Client | None


CLIENT_PARSE_FIXTURES: list[ClientParseFixture] = [
    ClientParseFixture(
        test_id="both_sessions",
        line="'current-session':'last-session'",
        expected=Client("current-session", "last-session"),
    ),
    ClientParseFixture(
        test_id="no_last_session",
        line="'my-session':''",
        expected=Client("my-session", ""),
    ),
    ClientParseFixture(test_id="empty_current", line="'':'x'", expected=None),
    ClientParseFixture(test_id="unquoted", line="a:b", expected=None),
    ClientParseFixture(test_id="missing_colon", line="'a''b'", expected=None),
    ClientParseFixture(test_id="trailing_field", line="'a':'b':c", expected=None),
]


@pytest.mark.parametrize(
    list(ClientParseFixture._fields),
    CLIENT_PARSE_FIXTURES,
    ids=[f.test_id for f in CLIENT_PARSE_FIXTURES],
)
def test_client_from_str(test_id: str, line: str, expected: Client | None) -> None:
    """Client lines parse, or fail with ParseError."""
    if expected is None:
        with pytest.raises(exc.ParseError) as excinfo:
            Client.from_str(line)
        assert excinfo.value.desc == "Client"
    else:
        assert Client.from_str(line) == expected


@pytest.mark.asyncio
async def test_current() -> None:
    """current() asks tmux for the client's sessions."""
    runner = MockRunner(
        script={
            ("display-message", "-p", "-F", CLIENT_FORMAT): result(
                stdout=b"'work':'play'\n",
            ),
        },
    )
    assert await client.current(runner=runner) == Client("work", "play")


@pytest.mark.asyncio
async def test_current_fails_on_tmux_error() -> None:
    """A tmux failure surfaces before parsing."""
    runner = MockRunner(
        script={
            ("display-message", "-p", "-F", CLIENT_FORMAT): failure(
                stderr=b"no current client",
            ),
        },
    )
    with pytest.raises(exc.UnexpectedTmuxOutput) as excinfo:
        await client.current(runner=runner)
    assert excinfo.value.intent == "display-message"
    assert excinfo.value.stderr == "no current client"


@pytest.mark.asyncio
async def test_display_message_ignores_output() -> None:
    """display_message does not validate what tmux prints."""
    runner = MockRunner(
        script={("display-message", "saved"): failure(stderr=b"no client")},
    )
    await client.display_message("saved", runner=runner)
    assert runner.calls == [("display-message", "saved")]


@pytest.mark.asyncio
async def test_switch_client_targets_exact_name() -> None:
    """switch_client uses an exact-match target."""
    runner = MockRunner()
    await client.switch_client("dev", runner=runner)
    assert runner.calls == [("switch-client", "-t", "=dev")]


@pytest.mark.asyncio
async def test_switch_client_io_error_is_fatal() -> None:
    """Failing to run tmux propagates as TmuxIOError."""
    runner = MockRunner(
        script={("switch-client", "-t", "=dev"): exc.TmuxIOError("broken pipe")},
    )
    with pytest.raises(exc.TmuxIOError):
        await client.switch_client("dev", runner=runner)
