"""Tests for tmuxlib.pane."""

from __future__ import annotations

import pathlib

import pytest

from tmuxlib import exc, pane
from tmuxlib.capture import cleanup_captured_buffer
from tmuxlib.ids import PaneId, WindowId
from tmuxlib.pane import PANE_FORMAT, Pane
from tmuxlib.testing import MockRunner, failure, result

CAPTURE = ("capture-pane", "-t", "%4", "-J", "-e", "-p", "-S", "-", "-E", "-")


def test_pane_from_str() -> None:
    """Pane lines carry geometry, title, command and path."""
    parsed = Pane.from_str("%4:@2:1:false:79x23:'host: ~':'zsh':/home/dev/my dir")
    assert parsed == Pane(
        id=PaneId("%4"),
        window_id=WindowId("@2"),
        index=1,
        is_active=False,
        width=79,
        height=23,
        title="host: ~",
        command="zsh",
        dirpath=pathlib.Path("/home/dev/my dir"),
    )


@pytest.mark.parametrize(
    "line",
    [
        "%4:@2:1:false:79:'t':'zsh':/tmp",
        "%4:$2:1:false:79x23:'t':'zsh':/tmp",
        "%4:@2:1:false:79x23:t:'zsh':/tmp",
    ],
    ids=["no_height", "session_as_window", "unquoted_title"],
)
def test_pane_from_str_rejects(line: str) -> None:
    """Malformed pane lines raise ParseError."""
    with pytest.raises(exc.ParseError) as excinfo:
        Pane.from_str(line)
    assert excinfo.value.desc == "Pane"


@pytest.mark.asyncio
async def test_available_panes() -> None:
    """Panes of every window are listed."""
    runner = MockRunner(
        script={
            ("list-panes", "-a", "-F", PANE_FORMAT): result(
                stdout=(
                    b"%1:@1:0:true:40x24:'a':'nvim':/src\n"
                    b"%2:@1:1:false:39x24:'b':'zsh':/src\n"
                ),
            ),
        },
    )
    panes = await pane.available_panes(runner=runner)
    assert [p.id for p in panes] == [PaneId("%1"), PaneId("%2")]
    assert panes[0].is_active


@pytest.mark.asyncio
async def test_capture() -> None:
    """capture() returns tmux's raw bytes, ready for cleanup."""
    src_pane = Pane.from_str("%4:@2:1:false:79x23:'t':'zsh':/tmp")
    runner = MockRunner(
        script={CAPTURE: result(stdout=b"\x1b[1m$ ls\x1b[0m   \nfile\n\n")},
    )
    buffer = await src_pane.capture(runner=runner)
    assert buffer == b"\x1b[1m$ ls\x1b[0m   \nfile\n\n"
    assert cleanup_captured_buffer(buffer) == b"\x1b[1m$ ls\x1b[0m\nfile\x1b[0m\n"


@pytest.mark.asyncio
async def test_capture_fails_on_tmux_error() -> None:
    """A pane that vanished is reported."""
    src_pane = Pane.from_str("%4:@2:1:false:79x23:'t':'zsh':/tmp")
    runner = MockRunner(script={CAPTURE: failure(stderr=b"can't find pane: %4")})
    with pytest.raises(exc.UnexpectedTmuxOutput) as excinfo:
        await src_pane.capture(runner=runner)
    assert excinfo.value.intent == "capture-pane"


@pytest.mark.asyncio
async def test_new_pane() -> None:
    """new_pane splits the window in the reference pane's directory."""
    reference = Pane.from_str("%4:@2:1:false:79x23:'t':'zsh':/srv/app")
    argv = (
        "split-window",
        "-h",
        "-c",
        "/srv/app",
        "-t",
        "@6",
        "-P",
        "-F",
        "#{pane_id}",
        "make watch",
    )
    runner = MockRunner(script={argv: result(stdout=b"%15\n")})

    new_id = await pane.new_pane(reference, "make watch", WindowId("@6"), runner=runner)
    assert new_id == PaneId("%15")


@pytest.mark.asyncio
async def test_select_pane() -> None:
    """select-pane must be silent."""
    runner = MockRunner()
    await pane.select_pane(PaneId("%4"), runner=runner)
    assert runner.calls == [("select-pane", "-t", "%4")]
