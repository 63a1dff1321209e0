"""Helpers shared by every tmux operation.

tmuxlib.common
~~~~~~~~~~~~~~

Operations share one shape: build the argv, run tmux, validate the result,
then decode and parse stdout. This module holds the validate and decode
steps plus the runner plumbing.
"""

from __future__ import annotations

import logging
import typing as t

from tmuxlib import exc
from tmuxlib.parse import parse_all
from tmuxlib.runner import SubprocessRunner

if t.TYPE_CHECKING:
    from collections.abc import Sequence

    from tmuxlib._types import CommandResult, ProcessRunner
    from tmuxlib.parse import Parser

    T = t.TypeVar("T")

logger = logging.getLogger(__name__)


def _lossy(buffer: bytes) -> str:
    return buffer.decode("utf-8", errors="replace")


def require_empty(output: CommandResult, intent: str) -> None:
    """Ensure tmux printed nothing on either stream.

    The exit status is not consulted: commands validated this way are
    silent on success.

    >>> require_empty({"returncode": 0, "stdout": b"", "stderr": b""}, "select-pane")

    >>> require_empty(
    ...     {"returncode": 0, "stdout": b"", "stderr": b"can't find pane"},
    ...     "select-pane",
    ... )
    Traceback (most recent call last):
    ...
    tmuxlib.exc.UnexpectedTmuxOutput: unexpected process output: intent: `select-pane`, stdout: ``, stderr: `can't find pane`

    Raises
    ------
    :exc:`tmuxlib.exc.UnexpectedTmuxOutput`
    """
    if output["stdout"] or output["stderr"]:
        raise exc.UnexpectedTmuxOutput(
            intent=intent,
            stdout=_lossy(output["stdout"]),
            stderr=_lossy(output["stderr"]),
        )


def require_success(output: CommandResult, intent: str) -> None:
    """Ensure tmux exited with status zero, whatever it printed.

    Queries run this before parsing so that a tmux failure surfaces with its
    stderr rather than as a confusing parse error.

    Raises
    ------
    :exc:`tmuxlib.exc.UnexpectedTmuxOutput`
    """
    if output["returncode"] != 0:
        raise exc.UnexpectedTmuxOutput(
            intent=intent,
            stdout=_lossy(output["stdout"]),
            stderr=_lossy(output["stderr"]),
        )


def decode(buffer: bytes) -> str:
    """Decode tmux stdout as strict UTF-8.

    Raises
    ------
    :exc:`tmuxlib.exc.Utf8Error`
    """
    try:
        return buffer.decode("utf-8")
    except UnicodeDecodeError as e:
        raise exc.Utf8Error(e) from e


def split_records(text: str) -> list[str]:
    """Split tmux stdout into record lines, dropping the trailing newline(s).

    >>> split_records("$0:'a':/tmp\\n$1:'b':/home\\n")
    ["$0:'a':/tmp", "$1:'b':/home"]
    >>> split_records("")
    []
    """
    text = text.rstrip("\n")
    if not text:
        return []
    return text.split("\n")


def parse_records(
    output: CommandResult,
    parser: Parser[T],
    *,
    desc: str,
    intent: str,
) -> list[T]:
    """Decode stdout and parse one record per line."""
    return [
        parse_all(parser, line, desc=desc, intent=intent)
        for line in split_records(decode(output["stdout"]))
    ]


def resolve_runner(runner: ProcessRunner | None) -> ProcessRunner:
    """Return ``runner``, or a :class:`~tmuxlib.runner.SubprocessRunner`."""
    if runner is not None:
        return runner
    return SubprocessRunner()


async def run(argv: Sequence[str], *, runner: ProcessRunner | None) -> CommandResult:
    """Run ``tmux <argv>`` through ``runner``."""
    return await resolve_runner(runner).run(argv)


def exact(name: str) -> str:
    """Return a target matching ``name`` exactly rather than by prefix.

    >>> exact("mysession")
    '=mysession'
    """
    return f"={name}"
