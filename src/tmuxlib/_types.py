"""Shared typed structures for tmuxlib."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypedDict, runtime_checkable


class CommandResult(TypedDict):
    """Exit status and raw streams of one tmux invocation."""

    returncode: int
    stdout: bytes
    stderr: bytes


@runtime_checkable
class ProcessRunner(Protocol):
    """Protocol that tmux process runners must satisfy.

    ``argv`` holds the tmux subcommand and its flags, without the ``tmux``
    binary itself.
    """

    async def run(self, argv: Sequence[str]) -> CommandResult: ...


__all__ = ["CommandResult", "ProcessRunner"]
