"""Constants for tmuxlib."""

from __future__ import annotations

import os

#: Seconds :func:`tmuxlib.server.wait_for_server_ready` waits for tmux to
#: answer. Configurable via :envvar:`TMUXLIB_SERVER_READY_TIMEOUT`.
SERVER_READY_TIMEOUT_SECONDS = float(os.getenv("TMUXLIB_SERVER_READY_TIMEOUT", 5))

#: Delay in seconds between readiness polls (50ms). Configurable via
#: :envvar:`TMUXLIB_SERVER_READY_INTERVAL`.
SERVER_READY_INTERVAL_SECONDS = float(
    os.getenv("TMUXLIB_SERVER_READY_INTERVAL", 0.05),
)

#: Prefix used for test session names to identify and cleanup test sessions
TEST_SESSION_PREFIX = "tmuxlib_"

#: Prefix of socket names used by isolated test servers
TEST_SOCKET_PREFIX = "tmuxlib_test"

#: ANSI SGR reset appended to the last line of a captured pane buffer
ANSI_RESET = b"\x1b[0m"
