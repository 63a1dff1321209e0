"""Opaque ids tmux assigns to sessions, windows and panes.

tmuxlib.ids
~~~~~~~~~~~

Each id keeps the raw tmux token (``$3``, ``@12``, ``%7``) so it can be
passed straight back to tmux as a target. The three kinds are distinct
types: a :class:`PaneId` never compares equal to a :class:`WindowId`, even
when the digits match.

>>> SessionId.from_str("$99999")
SessionId('$99999')
>>> str(WindowId.from_str("@4"))
'@4'
>>> PaneId.from_str("%1") == WindowId.from_str("@1")
False
"""

from __future__ import annotations

import dataclasses
import typing as t

from tmuxlib.parse import Parser, mapped, parse_all, tmux_id

if t.TYPE_CHECKING:
    import sys

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self


@dataclasses.dataclass(frozen=True)
class _TmuxId:
    """Base for the typed opaque ids."""

    raw: str

    prefix: t.ClassVar[str]
    desc: t.ClassVar[str]
    intent: t.ClassVar[str]

    def __post_init__(self) -> None:
        parse_all(tmux_id(self.prefix), self.raw, desc=self.desc, intent=self.intent)

    @classmethod
    def from_str(cls, value: str) -> Self:
        """Parse ``value``, which must be exactly ``<prefix><digits>``.

        Raises
        ------
        :exc:`tmuxlib.exc.ParseError`
        """
        raw = parse_all(tmux_id(cls.prefix), value, desc=cls.desc, intent=cls.intent)
        return cls(raw)

    @classmethod
    def parser(cls) -> Parser[Self]:
        """Return a grammar matching this id kind, leaving trailing input."""
        return mapped(tmux_id(cls.prefix), cls)

    def as_str(self) -> str:
        """Return the raw tmux representation."""
        return self.raw

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.raw!r})"


@dataclasses.dataclass(frozen=True, repr=False)
class SessionId(_TmuxId):
    """Id of a tmux session, such as ``$11``."""

    prefix: t.ClassVar[str] = "$"
    desc: t.ClassVar[str] = "SessionId"
    intent: t.ClassVar[str] = "##{session_id}"


@dataclasses.dataclass(frozen=True, repr=False)
class WindowId(_TmuxId):
    """Id of a tmux window, such as ``@41``."""

    prefix: t.ClassVar[str] = "@"
    desc: t.ClassVar[str] = "WindowId"
    intent: t.ClassVar[str] = "##{window_id}"


@dataclasses.dataclass(frozen=True, repr=False)
class PaneId(_TmuxId):
    """Id of a tmux pane, such as ``%5``."""

    prefix: t.ClassVar[str] = "%"
    desc: t.ClassVar[str] = "PaneId"
    intent: t.ClassVar[str] = "##{pane_id}"


__all__ = ["PaneId", "SessionId", "WindowId"]
