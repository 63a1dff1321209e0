"""Pythonization of the :term:`tmux(1)` pane.

tmuxlib.pane
~~~~~~~~~~~~

"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import typing as t

from tmuxlib.common import (
    decode,
    parse_records,
    require_empty,
    require_success,
    run,
)
from tmuxlib.ids import PaneId, WindowId
from tmuxlib.parse import (
    boolean,
    char,
    integer,
    mapped,
    parse_all,
    quoted_string,
    rest,
    sequence,
)

if t.TYPE_CHECKING:
    from tmuxlib._types import ProcessRunner
    from tmuxlib.parse import Parser

logger = logging.getLogger(__name__)

#: Format requested from ``list-panes``
PANE_FORMAT = (
    "#{pane_id}:#{window_id}:#{pane_index}:#{?pane_active,true,false}:"
    "#{pane_width}x#{pane_height}:'#{pane_title}':'#{pane_current_command}':"
    "#{pane_current_path}"
)

_PANE_INTENT = (
    "##{pane_id}:##{window_id}:##{pane_index}:##{?pane_active,true,false}:"
    "##{pane_width}x##{pane_height}:'##{pane_title}':'##{pane_current_command}':"
    "##{pane_current_path}"
)


def _pane_parser() -> Parser[Pane]:
    return mapped(
        sequence(
            PaneId.parser(),
            char(":"),
            WindowId.parser(),
            char(":"),
            integer,
            char(":"),
            boolean,
            char(":"),
            integer,
            char("x"),
            integer,
            char(":"),
            quoted_string,
            char(":"),
            quoted_string,
            char(":"),
            rest,
        ),
        lambda f: Pane(
            id=f[0],
            window_id=f[2],
            index=f[4],
            is_active=f[6],
            width=f[8],
            height=f[10],
            title=f[12],
            command=f[14],
            dirpath=pathlib.Path(f[16]),
        ),
    )


@dataclasses.dataclass(frozen=True)
class Pane:
    """A tmux pane.

    Attributes
    ----------
    id : :class:`~tmuxlib.ids.PaneId`
    window_id : :class:`~tmuxlib.ids.WindowId`
        Window owning the pane.
    index : int
    is_active : bool
    width : int
    height : int
    title : str
    command : str
        Command currently running in the pane.
    dirpath : :class:`pathlib.Path`
        Current working directory of the pane.
    """

    id: PaneId
    window_id: WindowId
    index: int
    is_active: bool
    width: int
    height: int
    title: str
    command: str
    dirpath: pathlib.Path

    @classmethod
    def from_str(cls, value: str) -> Pane:
        """Parse a line printed with :data:`PANE_FORMAT`.

        Examples
        --------
        >>> pane = Pane.from_str(
        ...     "%20:@3:0:true:159x48:'build':'nvim':/home/dev/code/tmuxlib"
        ... )
        >>> pane.id, pane.window_id, pane.command
        (PaneId('%20'), WindowId('@3'), 'nvim')
        >>> pane.width, pane.height
        (159, 48)
        >>> str(pane.dirpath)
        '/home/dev/code/tmuxlib'
        """
        return parse_all(_pane_parser(), value, desc="Pane", intent=_PANE_INTENT)

    async def capture(self, *, runner: ProcessRunner | None = None) -> bytes:
        """Return the pane's history and visible content, escapes included.

        ``$ tmux capture-pane -t <id> -J -e -p -S - -E -``

        The buffer is returned as tmux printed it; see
        :func:`tmuxlib.capture.cleanup_captured_buffer` to prepare it for
        replay.
        """
        output = await run(
            [
                "capture-pane",
                "-t",
                self.id.as_str(),
                "-J",
                "-e",
                "-p",
                "-S",
                "-",
                "-E",
                "-",
            ],
            runner=runner,
        )
        require_success(output, "capture-pane")
        return output["stdout"]


async def available_panes(*, runner: ProcessRunner | None = None) -> list[Pane]:
    """Return all panes of the server, across sessions and windows.

    ``$ tmux list-panes -a -F <PANE_FORMAT>``
    """
    output = await run(["list-panes", "-a", "-F", PANE_FORMAT], runner=runner)
    require_success(output, "list-panes")
    return parse_records(output, _pane_parser(), desc="Pane", intent=_PANE_INTENT)


async def new_pane(
    reference_pane: Pane,
    pane_command: str | None,
    window_id: WindowId,
    *,
    runner: ProcessRunner | None = None,
) -> PaneId:
    """Split ``window_id`` to create a pane like ``reference_pane``.

    The new pane starts in the directory of ``reference_pane``, running
    ``pane_command`` if given.
    """
    args = [
        "split-window",
        "-h",
        "-c",
        str(reference_pane.dirpath),
        "-t",
        window_id.as_str(),
        "-P",
        "-F",
        "#{pane_id}",
    ]
    if pane_command:
        args.append(pane_command)

    output = await run(args, runner=runner)
    require_success(output, "split-window")
    return parse_all(
        PaneId.parser(),
        decode(output["stdout"]).rstrip(),
        desc="PaneId",
        intent="##{pane_id}",
    )


async def select_pane(pane_id: PaneId, *, runner: ProcessRunner | None = None) -> None:
    """Make ``pane_id`` the active pane of its window."""
    output = await run(["select-pane", "-t", pane_id.as_str()], runner=runner)
    require_empty(output, "select-pane")


__all__ = [
    "PANE_FORMAT",
    "Pane",
    "available_panes",
    "new_pane",
    "select_pane",
]
