"""Tests for tmuxlib pytest plugin."""

from __future__ import annotations

import typing as t

from tmuxlib.constants import TEST_SESSION_PREFIX, TEST_SOCKET_PREFIX

if t.TYPE_CHECKING:
    import pathlib

    from tmuxlib.runner import SubprocessRunner


def test_tmux_runner_is_isolated(
    tmux_runner: SubprocessRunner,
    config_file: pathlib.Path,
) -> None:
    """The runner uses a private socket and the test config."""
    assert tmux_runner.socket_name is not None
    assert tmux_runner.socket_name.startswith(TEST_SOCKET_PREFIX)
    assert tmux_runner.base_args()[:2] == ["-L", tmux_runner.socket_name]
    assert tmux_runner.config_file == str(config_file)
    assert config_file.read_text(encoding="utf-8").strip() == "set -g base-index 1"


def test_session_name(session_name: str) -> None:
    """Session names carry the test prefix."""
    assert session_name.startswith(TEST_SESSION_PREFIX)
    assert len(session_name) == len(TEST_SESSION_PREFIX) + 8
