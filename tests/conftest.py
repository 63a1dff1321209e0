"""Shared fixtures for tmuxlib tests."""

from __future__ import annotations

import logging
import typing as t

import pytest_asyncio

from tmuxlib import server

if t.TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from tmuxlib.runner import SubprocessRunner

logger = logging.getLogger(__name__)


@pytest_asyncio.fixture
async def started_session(
    tmux_runner: SubprocessRunner,
    session_name: str,
) -> AsyncIterator[str]:
    """Start the isolated test server and yield its first session name.

    Safety: the server lives on the ``tmux_runner`` socket, killed by that
    fixture's finalizer.
    """
    await server.start(session_name, runner=tmux_runner)
    yield session_name
