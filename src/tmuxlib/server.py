"""Start, probe and configure the :term:`tmux(1)` server.

tmuxlib.server
~~~~~~~~~~~~~~

"""

from __future__ import annotations

import asyncio
import logging
import typing as t

from tmuxlib import exc
from tmuxlib.common import (
    decode,
    exact,
    require_empty,
    require_success,
    resolve_runner,
    run,
)
from tmuxlib.constants import (
    SERVER_READY_INTERVAL_SECONDS,
    SERVER_READY_TIMEOUT_SECONDS,
)

if t.TYPE_CHECKING:
    from tmuxlib._types import ProcessRunner

logger = logging.getLogger(__name__)

#: Options whose value tmux prints as one of these are treated as unset
_UNSET_VALUES = ("", "''")


async def start(
    initial_session_name: str,
    *,
    runner: ProcessRunner | None = None,
) -> None:
    """Start the tmux server with a detached session, then wait for it.

    ``$ tmux new-session -d -s <initial_session_name>``

    The session keeps the server alive; remove it later with
    :func:`kill_session`.

    Raises
    ------
    :exc:`tmuxlib.exc.UnexpectedTmuxOutput`
        ``new-session`` printed something, or the server did not become
        ready in time.
    """
    runner = resolve_runner(runner)
    output = await run(
        ["new-session", "-d", "-s", initial_session_name],
        runner=runner,
    )
    require_empty(output, "new-session")
    await wait_for_server_ready(runner=runner)


async def _poll_until_ready(runner: ProcessRunner, interval: float) -> None:
    attempt = 0
    while True:
        attempt += 1
        output = await runner.run(["list-sessions", "-F", "#{session_name}"])
        if output["returncode"] == 0:
            logger.debug("tmux server ready", extra={"tmux_attempts": attempt})
            return
        logger.debug(
            "tmux server not ready yet",
            extra={"tmux_attempt": attempt, "tmux_returncode": output["returncode"]},
        )
        await asyncio.sleep(interval)


async def wait_for_server_ready(
    *,
    runner: ProcessRunner | None = None,
    timeout: float = SERVER_READY_TIMEOUT_SECONDS,
    interval: float = SERVER_READY_INTERVAL_SECONDS,
) -> None:
    """Poll ``list-sessions`` until the server answers, or ``timeout`` expires.

    Each poll runs ``tmux list-sessions -F '#{session_name}'``; the first
    zero exit status means the server is ready. Failed polls are retried
    every ``interval`` seconds.

    Parameters
    ----------
    timeout : float
        Seconds to wait, see :data:`~tmuxlib.constants.SERVER_READY_TIMEOUT_SECONDS`.
    interval : float
        Seconds between polls, see
        :data:`~tmuxlib.constants.SERVER_READY_INTERVAL_SECONDS`.

    Raises
    ------
    :exc:`tmuxlib.exc.UnexpectedTmuxOutput`
        With intent ``wait-for-server-ready`` once ``timeout`` expires.
    :exc:`tmuxlib.exc.TmuxIOError`
        tmux could not be spawned; not retried.

    Examples
    --------
    >>> import asyncio
    >>> from tmuxlib.testing import MockRunner, failure, result
    >>> runner = MockRunner(script={
    ...     ("list-sessions", "-F", "#{session_name}"): [failure(), result()],
    ... })
    >>> asyncio.run(wait_for_server_ready(runner=runner, interval=0))
    >>> runner.count("list-sessions", "-F", "#{session_name}")
    2
    """
    runner = resolve_runner(runner)
    try:
        await asyncio.wait_for(_poll_until_ready(runner, interval), timeout=timeout)
    except asyncio.TimeoutError:
        logger.debug("tmux server readiness timed out", extra={"tmux_timeout": timeout})
        raise exc.UnexpectedTmuxOutput(
            intent="wait-for-server-ready",
            stdout="",
            stderr=f"server did not become ready within {timeout:g}s",
        ) from None


async def kill_session(name: str, *, runner: ProcessRunner | None = None) -> None:
    """Kill the session exactly named ``name``.

    ``$ tmux kill-session -t =<name>``
    """
    output = await run(["kill-session", "-t", exact(name)], runner=runner)
    require_empty(output, "kill-session")


async def show_option(
    name: str,
    global_: bool = False,
    *,
    runner: ProcessRunner | None = None,
) -> str | None:
    """Return the value of the window option ``name``, or None if unset.

    ``$ tmux show-options -w -q [-g] <name>``
    """
    args = ["show-options", "-w", "-q"]
    if global_:
        args.append("-g")
    args.append(name)

    output = await run(args, runner=runner)
    require_success(output, "show-options")
    value = decode(output["stdout"]).rstrip()
    return value or None


def parse_options(text: str) -> dict[str, str]:
    """Parse ``show-options`` output into a mapping of set options.

    Each line is split at its first space. Options printed with an empty
    value, or as ``''``, are left out.

    >>> parse_options(
    ...     "default-command ''\\n"
    ...     "default-shell /bin/zsh\\n"
    ...     "status-left \\"[#S] \\"\\n"
    ... )
    {'default-shell': '/bin/zsh', 'status-left': '"[#S] "'}
    """
    options: dict[str, str] = {}
    for line in text.rstrip().split("\n"):
        if not line:
            continue
        key, _, value = line.partition(" ")
        value = value.lstrip()
        if value in _UNSET_VALUES:
            continue
        options[key] = value
    return options


async def show_options(
    global_: bool = False,
    *,
    runner: ProcessRunner | None = None,
) -> dict[str, str]:
    """Return the session options, or the global ones with ``global_``.

    ``$ tmux show-options [-g]``
    """
    args = ["show-options"]
    if global_:
        args.append("-g")

    output = await run(args, runner=runner)
    require_success(output, "show-options")
    return parse_options(decode(output["stdout"]))


async def default_command(*, runner: ProcessRunner | None = None) -> str:
    """Return the command tmux runs in new panes.

    That is ``default-command`` when set, else ``default-shell``. A bash
    shell is started as a login shell (``-l``).

    Examples
    --------
    >>> import asyncio
    >>> from tmuxlib.testing import MockRunner, result
    >>> runner = MockRunner(script={
    ...     ("show-options", "-g"): result(
    ...         stdout=b"default-command ''\\ndefault-shell /bin/bash\\n",
    ...     ),
    ... })
    >>> asyncio.run(default_command(runner=runner))
    '-l /bin/bash'

    Raises
    ------
    :exc:`tmuxlib.exc.TmuxConfigError`
        ``default-shell`` is not set.
    """
    options = await show_options(True, runner=runner)

    default_shell = options.get("default-shell")
    if default_shell is None:
        raise exc.TmuxConfigError("no default-shell")
    if default_shell.endswith("bash"):
        default_shell = f"-l {default_shell}"

    return options.get("default-command", default_shell)


__all__ = [
    "default_command",
    "kill_session",
    "parse_options",
    "show_option",
    "show_options",
    "start",
    "wait_for_server_ready",
]
