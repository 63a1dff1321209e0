"""Pythonization of the :term:`tmux(1)` window.

tmuxlib.window
~~~~~~~~~~~~~~

"""

from __future__ import annotations

import dataclasses
import logging
import typing as t

from tmuxlib.common import (
    decode,
    exact,
    parse_records,
    require_empty,
    require_success,
    run,
)
from tmuxlib.ids import PaneId, WindowId
from tmuxlib.layout import WindowLayout
from tmuxlib.parse import (
    boolean,
    char,
    integer,
    mapped,
    parse_all,
    quoted_nonempty_string,
    quoted_string,
    sequence,
    take_until,
)

if t.TYPE_CHECKING:
    from tmuxlib._types import ProcessRunner
    from tmuxlib.pane import Pane
    from tmuxlib.parse import Parser
    from tmuxlib.session import Session

logger = logging.getLogger(__name__)

#: Format requested from ``list-windows``
WINDOW_FORMAT = (
    "#{window_id}:#{window_index}:#{?window_active,true,false}:"
    "#{window_layout}:'#{window_name}':'#{window_linked_sessions_list}'"
)

#: Format printed by ``new-window -P``
NEW_WINDOW_FORMAT = "#{window_id}:#{pane_id}"

_WINDOW_INTENT = (
    "##{window_id}:##{window_index}:##{?window_active,true,false}:"
    "##{window_layout}:'##{window_name}':'##{window_linked_sessions_list}'"
)


def _window_parser() -> Parser[Window]:
    return mapped(
        sequence(
            WindowId.parser(),
            char(":"),
            integer,
            char(":"),
            boolean,
            char(":"),
            take_until(":"),
            char(":"),
            quoted_string,
            char(":"),
            quoted_nonempty_string,
        ),
        lambda fields: Window(
            id=fields[0],
            index=fields[2],
            is_active=fields[4],
            layout=fields[6],
            name=fields[8],
            sessions=tuple(fields[10].split(",")),
        ),
    )


@dataclasses.dataclass(frozen=True)
class Window:
    """A tmux window.

    Attributes
    ----------
    id : :class:`~tmuxlib.ids.WindowId`
    index : int
        Index of the window in its session.
    is_active : bool
    layout : str
        Raw ``#{window_layout}``, see :class:`~tmuxlib.layout.WindowLayout`.
    name : str
    sessions : tuple of str
        Names of every session the window is linked into.
    """

    id: WindowId
    index: int
    is_active: bool
    layout: str
    name: str
    sessions: tuple[str, ...]

    @classmethod
    def from_str(cls, value: str) -> Window:
        """Parse a line printed with :data:`WINDOW_FORMAT`.

        Examples
        --------
        >>> window = Window.from_str(
        ...     "@1:0:true:b25d,80x24,0,0,0:'ignite':'pytest,dev'"
        ... )
        >>> window.id, window.index, window.is_active, window.name
        (WindowId('@1'), 0, True, 'ignite')
        >>> window.sessions
        ('pytest', 'dev')
        """
        return parse_all(_window_parser(), value, desc="Window", intent=_WINDOW_INTENT)

    def pane_ids(self) -> list[PaneId]:
        """Return the ids of the panes in this window, read from its layout.

        >>> Window.from_str(
        ...     "@2:1:false:020a,80x24,0,0{40x24,0,0,1,39x24,41,0,2}:'w':'s'"
        ... ).pane_ids()
        [PaneId('%1'), PaneId('%2')]

        Raises
        ------
        :exc:`tmuxlib.exc.ParseError`
            The layout could not be parsed.
        """
        return WindowLayout.from_str(self.layout).pane_ids()


async def available_windows(*, runner: ProcessRunner | None = None) -> list[Window]:
    """Return all windows of the server, across sessions.

    ``$ tmux list-windows -a -F <WINDOW_FORMAT>``
    """
    output = await run(["list-windows", "-a", "-F", WINDOW_FORMAT], runner=runner)
    require_success(output, "list-windows")
    return parse_records(output, _window_parser(), desc="Window", intent=_WINDOW_INTENT)


async def new_window(
    session: Session,
    window: Window,
    pane: Pane,
    pane_command: str | None = None,
    *,
    runner: ProcessRunner | None = None,
) -> tuple[WindowId, PaneId]:
    """Create a window in ``session``, named like ``window``.

    Its first pane starts in the directory of ``pane``, running
    ``pane_command`` if given.

    Returns
    -------
    tuple
        Ids of the new window and of its pane.
    """
    args = [
        "new-window",
        "-d",
        "-c",
        str(pane.dirpath),
        "-n",
        window.name,
        "-t",
        f"{exact(session.name)}:",
        "-P",
        "-F",
        NEW_WINDOW_FORMAT,
    ]
    if pane_command:
        args.append(pane_command)

    output = await run(args, runner=runner)
    require_success(output, "new-window")

    window_id, _, pane_id = parse_all(
        sequence(WindowId.parser(), char(":"), PaneId.parser()),
        decode(output["stdout"]).rstrip(),
        desc="new-window",
        intent="##{window_id}:##{pane_id}",
    )
    return window_id, pane_id


async def set_layout(
    layout: str,
    window_id: WindowId,
    *,
    runner: ProcessRunner | None = None,
) -> None:
    """Apply ``layout`` to the window ``window_id``.

    ``layout`` may be a raw layout string or a preset such as
    ``even-horizontal``.
    """
    output = await run(
        ["select-layout", "-t", window_id.as_str(), layout],
        runner=runner,
    )
    require_empty(output, "select-layout")


async def select_window(
    window_id: WindowId,
    *,
    runner: ProcessRunner | None = None,
) -> None:
    """Make ``window_id`` the current window of its session."""
    output = await run(["select-window", "-t", window_id.as_str()], runner=runner)
    require_empty(output, "select-window")


__all__ = [
    "NEW_WINDOW_FORMAT",
    "WINDOW_FORMAT",
    "Window",
    "available_windows",
    "new_window",
    "select_window",
    "set_layout",
]
