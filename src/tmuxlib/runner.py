"""Run tmux as a child process.

tmuxlib.runner
~~~~~~~~~~~~~~

:class:`SubprocessRunner` is the default :class:`~tmuxlib._types.ProcessRunner`.
It spawns ``tmux`` through :py:mod:`asyncio.subprocess` and hands back the
exit status with both streams as raw bytes.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import typing as t

from tmuxlib import exc

if t.TYPE_CHECKING:
    from collections.abc import Sequence

    from tmuxlib._types import CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run :term:`tmux(1)` commands through :py:mod:`asyncio.subprocess`.

    Parameters
    ----------
    tmux_bin : str, optional
        Path to the tmux binary. Resolved with :func:`shutil.which` on each
        run when omitted.
    socket_name : str, optional
        Server socket name, passed as ``-L``.
    socket_path : str, optional
        Server socket path, passed as ``-S``.
    config_file : str, optional
        Configuration file for a server started by this runner, passed as
        ``-f``.

    Examples
    --------
    >>> SubprocessRunner(socket_name="tmuxlib_test").base_args()
    ['-L', 'tmuxlib_test']

    Notes
    -----
    Cancelling a pending :meth:`run` stops waiting on the child; the tmux
    process itself may still run to completion.
    """

    def __init__(
        self,
        *,
        tmux_bin: str | None = None,
        socket_name: str | None = None,
        socket_path: str | None = None,
        config_file: str | None = None,
    ) -> None:
        self.tmux_bin = tmux_bin
        self.socket_name = socket_name
        self.socket_path = socket_path
        self.config_file = config_file

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"socket_name={self.socket_name!r}, socket_path={self.socket_path!r})"
        )

    def base_args(self) -> list[str]:
        """Return the global tmux flags placed before the subcommand."""
        args: list[str] = []
        if self.socket_name:
            args += ["-L", self.socket_name]
        if self.socket_path:
            args += ["-S", str(self.socket_path)]
        if self.config_file:
            args += ["-f", str(self.config_file)]
        return args

    def _resolve_tmux_bin(self) -> str:
        if self.tmux_bin:
            return self.tmux_bin
        tmux_bin = shutil.which("tmux")
        if not tmux_bin:
            raise exc.TmuxCommandNotFound
        return tmux_bin

    async def run(self, argv: Sequence[str]) -> CommandResult:
        """Run ``tmux <argv>`` and collect its exit status and output.

        Raises
        ------
        :exc:`tmuxlib.exc.TmuxCommandNotFound`
            tmux is not on ``PATH``.
        :exc:`tmuxlib.exc.TmuxIOError`
            tmux could not be spawned or read from.
        """
        cmd = [self._resolve_tmux_bin(), *self.base_args(), *(str(a) for a in argv)]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            logger.exception(f"Exception for {' '.join(cmd)}")
            raise exc.TmuxIOError(str(e)) from e

        returncode = process.returncode if process.returncode is not None else 0
        logger.debug(
            "tmux command finished",
            extra={"tmux_cmd": cmd, "tmux_returncode": returncode},
        )
        return {"returncode": returncode, "stdout": stdout, "stderr": stderr}


__all__ = ["SubprocessRunner"]
