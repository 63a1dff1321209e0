"""Pythonization of the :term:`tmux(1)` session.

tmuxlib.session
~~~~~~~~~~~~~~~

"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import typing as t

from tmuxlib.common import decode, parse_records, require_success, run
from tmuxlib.ids import PaneId, SessionId, WindowId
from tmuxlib.parse import (
    char,
    mapped,
    parse_all,
    quoted_nonempty_string,
    rest,
    sequence,
)

if t.TYPE_CHECKING:
    from tmuxlib._types import ProcessRunner
    from tmuxlib.pane import Pane
    from tmuxlib.parse import Parser
    from tmuxlib.window import Window

logger = logging.getLogger(__name__)

#: Format requested from ``list-sessions``
SESSION_FORMAT = "#{session_id}:'#{session_name}':#{session_path}"

#: Format printed by ``new-session -P``
NEW_SESSION_FORMAT = "#{session_id}:#{window_id}:#{pane_id}"


def _session_parser() -> Parser[Session]:
    return mapped(
        sequence(
            SessionId.parser(),
            char(":"),
            quoted_nonempty_string,
            char(":"),
            rest,
        ),
        lambda fields: Session(
            id=fields[0],
            name=fields[2],
            dirpath=pathlib.Path(fields[4]),
        ),
    )


@dataclasses.dataclass(frozen=True)
class Session:
    """A tmux session.

    Attributes
    ----------
    id : :class:`~tmuxlib.ids.SessionId`
    name : str
    dirpath : :class:`pathlib.Path`
        Working directory of the session.
    """

    id: SessionId
    name: str
    dirpath: pathlib.Path

    @classmethod
    def from_str(cls, value: str) -> Session:
        """Parse a line printed with :data:`SESSION_FORMAT`.

        >>> Session.from_str("$1:'pytest':/home/user/dev")
        Session(id=SessionId('$1'), name='pytest', dirpath=PosixPath('/home/user/dev'))
        """
        return parse_all(
            _session_parser(),
            value,
            desc="Session",
            intent="##{session_id}:'##{session_name}':##{session_path}",
        )


async def available_sessions(*, runner: ProcessRunner | None = None) -> list[Session]:
    """Return all sessions of the server.

    ``$ tmux list-sessions -F "#{session_id}:'#{session_name}':#{session_path}"``
    """
    output = await run(["list-sessions", "-F", SESSION_FORMAT], runner=runner)
    require_success(output, "list-sessions")
    return parse_records(
        output,
        _session_parser(),
        desc="Session",
        intent="##{session_id}:'##{session_name}':##{session_path}",
    )


async def new_session(
    session: Session,
    window: Window,
    pane: Pane,
    pane_command: str | None = None,
    *,
    runner: ProcessRunner | None = None,
) -> tuple[SessionId, WindowId, PaneId]:
    """Create a detached session shaped after ``session``, ``window`` and ``pane``.

    The new session is named like ``session``, its first window like
    ``window``, and its first pane starts in the directory of ``pane``,
    running ``pane_command`` if given.

    Returns
    -------
    tuple
        Ids of the new session, its window and its pane.
    """
    args = [
        "new-session",
        "-d",
        "-c",
        str(pane.dirpath),
        "-s",
        session.name,
        "-n",
        window.name,
        "-P",
        "-F",
        NEW_SESSION_FORMAT,
    ]
    if pane_command:
        args.append(pane_command)

    output = await run(args, runner=runner)
    require_success(output, "new-session")

    session_id, _, window_id, _, pane_id = parse_all(
        sequence(
            SessionId.parser(),
            char(":"),
            WindowId.parser(),
            char(":"),
            PaneId.parser(),
        ),
        decode(output["stdout"]).rstrip(),
        desc="new-session",
        intent="##{session_id}:##{window_id}:##{pane_id}",
    )
    return session_id, window_id, pane_id


__all__ = [
    "NEW_SESSION_FORMAT",
    "SESSION_FORMAT",
    "Session",
    "available_sessions",
    "new_session",
]
