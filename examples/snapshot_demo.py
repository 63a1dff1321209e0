#!/usr/bin/env python
"""Snapshot the panes of a private tmux server.

Starts a throwaway server on its own socket, lists what it holds, captures
each pane for replay and shuts the server down.
"""

from __future__ import annotations

import asyncio
import subprocess
import uuid

from tmuxlib import cleanup_captured_buffer, pane, server, session, window
from tmuxlib.runner import SubprocessRunner


async def snapshot(runner: SubprocessRunner) -> None:
    """Print sessions, windows and cleaned pane captures."""
    await server.start("demo", runner=runner)

    for s in await session.available_sessions(runner=runner):
        print(f"session {s.id} {s.name!r} in {s.dirpath}")

    for w in await window.available_windows(runner=runner):
        panes = ", ".join(str(p) for p in w.pane_ids())
        print(f"window {w.id} {w.name!r} panes: {panes}")

    for p in await pane.available_panes(runner=runner):
        buffer = cleanup_captured_buffer(await p.capture(runner=runner))
        print(f"pane {p.id} ({p.command}) captured {len(buffer)} bytes")

    print(f"default command: {await server.default_command(runner=runner)}")


def main() -> None:
    """Run the demo on an isolated socket."""
    runner = SubprocessRunner(socket_name=f"tmuxlib_demo{uuid.uuid4().hex[:8]}")
    try:
        asyncio.run(snapshot(runner))
    finally:
        subprocess.run(
            ["tmux", *runner.base_args(), "kill-server"],
            capture_output=True,
            check=False,
        )


if __name__ == "__main__":
    main()
