"""Testing helpers for tmuxlib.

:class:`MockRunner` replays scripted tmux results so operations can be
exercised without a tmux binary.

>>> import asyncio
>>> from tmuxlib import session
>>> runner = MockRunner(script={
...     ("list-sessions", "-F", session.SESSION_FORMAT): result(
...         stdout=b"$1:'dev':/home/dev\\n$2:'db':/srv/db\\n",
...     ),
... })
>>> sessions = asyncio.run(session.available_sessions(runner=runner))
>>> [s.name for s in sessions]
['dev', 'db']
"""

from __future__ import annotations

import asyncio
import typing as t
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ._types import CommandResult, ProcessRunner

if t.TYPE_CHECKING:
    ScriptValue = t.Union[
        CommandResult,
        BaseException,
        Sequence[t.Union[CommandResult, BaseException]],
    ]


def result(
    *,
    stdout: bytes = b"",
    stderr: bytes = b"",
    returncode: int = 0,
) -> CommandResult:
    """Return a scripted command result."""
    return {"returncode": returncode, "stdout": stdout, "stderr": stderr}


def failure(*, stderr: bytes = b"error", returncode: int = 1) -> CommandResult:
    """Return a scripted non-zero command result."""
    return result(stderr=stderr, returncode=returncode)


@dataclass
class _ScriptEntry:
    values: list[CommandResult | BaseException]
    delay: float = 0.0
    position: int = 0

    def next(self) -> CommandResult | BaseException:
        # The last value repeats once the sequence is exhausted.
        value = self.values[min(self.position, len(self.values) - 1)]
        self.position += 1
        return value


@dataclass
class MockRunner(ProcessRunner):
    """In-memory runner used in doctests and unit tests.

    Parameters
    ----------
    script : mapping
        Maps an argv tuple to a result, an exception to raise, or a sequence
        of those replayed in order (the last one repeats). Unscripted argv
        succeed silently.
    delays : mapping
        Seconds to sleep before answering a given argv.
    """

    script: Mapping[tuple[str, ...], ScriptValue] = field(default_factory=dict)
    delays: Mapping[tuple[str, ...], float] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list, init=False)
    _entries: dict[tuple[str, ...], _ScriptEntry] = field(
        default_factory=dict,
        init=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        for key, value in self.script.items():
            values = (
                list(value)
                if isinstance(value, Sequence) and not isinstance(value, Mapping)
                else [value]
            )
            self._entries[tuple(key)] = _ScriptEntry(
                values=values,
                delay=self.delays.get(tuple(key), 0.0),
            )

    async def run(self, argv: Sequence[str]) -> CommandResult:
        """Replay a scripted result or raise a scripted error."""
        key = tuple(argv)
        self.calls.append(key)
        entry = self._entries.get(key)
        if entry is None:
            return result()
        if entry.delay:
            await asyncio.sleep(entry.delay)
        value = entry.next()
        if isinstance(value, BaseException):
            raise value
        return value

    def count(self, *argv: str) -> int:
        """Return how many times ``argv`` was run."""
        return self.calls.count(tuple(argv))


__all__ = ["MockRunner", "failure", "result"]
