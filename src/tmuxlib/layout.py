"""Parse and rewrite tmux window layouts.

tmuxlib.layout
~~~~~~~~~~~~~~

A layout, as printed by ``#{window_layout}``, looks like::

    020a,80x24,0,0{40x24,0,0,1,39x24,41,0,2}

that is a 16-bit checksum, then one cell: ``<width>x<height>,<x>,<y>``
followed by either ``,<pane number>`` for a pane, ``{...}`` for cells laid
out left to right or ``[...]`` for cells laid out top to bottom.

>>> layout = WindowLayout.from_str("020a,80x24,0,0{40x24,0,0,1,39x24,41,0,2}")
>>> layout.pane_ids()
[PaneId('%1'), PaneId('%2')]
>>> str(layout.replace_pane_ids({1: 7, 2: 9}))
'8225,80x24,0,0{40x24,0,0,7,39x24,41,0,9}'
"""

from __future__ import annotations

import dataclasses
import enum
import typing as t

from tmuxlib.ids import PaneId
from tmuxlib.parse import (
    ParseFailure,
    char,
    integer,
    parse_all,
    preceded,
    separated_list,
    sequence,
)

if t.TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

HEX_DIGITS = "0123456789abcdef"


class LayoutType(enum.Enum):
    """Kind of a layout cell."""

    PANE = "pane"
    LEFT_RIGHT = "{}"
    TOP_BOTTOM = "[]"


@dataclasses.dataclass(frozen=True)
class LayoutCell:
    """One cell of a window layout: a pane, or a split holding more cells."""

    width: int
    height: int
    x: int
    y: int
    layout_type: LayoutType
    pane_number: int | None = None
    children: tuple[LayoutCell, ...] = ()

    def panes(self) -> Iterator[int]:
        """Yield pane numbers in layout order."""
        if self.layout_type is LayoutType.PANE:
            assert self.pane_number is not None
            yield self.pane_number
            return
        for child in self.children:
            yield from child.panes()

    def replace_pane_numbers(self, mapping: Mapping[int, int]) -> LayoutCell:
        """Return a copy where pane numbers found in ``mapping`` are replaced."""
        if self.layout_type is LayoutType.PANE:
            assert self.pane_number is not None
            return dataclasses.replace(
                self,
                pane_number=mapping.get(self.pane_number, self.pane_number),
            )
        return dataclasses.replace(
            self,
            children=tuple(c.replace_pane_numbers(mapping) for c in self.children),
        )

    def __str__(self) -> str:
        geometry = f"{self.width}x{self.height},{self.x},{self.y}"
        if self.layout_type is LayoutType.PANE:
            return f"{geometry},{self.pane_number}"
        opening, closing = self.layout_type.value
        inner = ",".join(str(c) for c in self.children)
        return f"{geometry}{opening}{inner}{closing}"


def checksum(body: str) -> int:
    """Return the tmux checksum of a layout body (the part after the comma).

    >>> f"{checksum('80x24,0,0,0'):04x}"
    'b25d'
    """
    csum = 0
    for c in body.encode():
        csum = ((csum >> 1) + ((csum & 1) << 15)) & 0xFFFF
        csum = (csum + c) & 0xFFFF
    return csum


def _checksum_field(input: str) -> tuple[str, int]:
    token = input[:4]
    if len(token) != 4 or any(c not in HEX_DIGITS for c in token):
        raise ParseFailure(input, "4 hex digits")
    return input[4:], int(token, 16)


def _cell(input: str) -> tuple[str, LayoutCell]:
    input, (width, _, height, _, x, _, y) = sequence(
        integer,
        char("x"),
        integer,
        char(","),
        integer,
        char(","),
        integer,
    )(input)

    if input.startswith(","):
        input, pane_number = preceded(char(","), integer)(input)
        return input, LayoutCell(width, height, x, y, LayoutType.PANE, pane_number)

    for layout_type in (LayoutType.LEFT_RIGHT, LayoutType.TOP_BOTTOM):
        opening, closing = layout_type.value
        if input.startswith(opening):
            input, (_, children, _) = sequence(
                char(opening),
                separated_list(char(","), _cell),
                char(closing),
            )(input)
            return input, LayoutCell(
                width,
                height,
                x,
                y,
                layout_type,
                children=tuple(children),
            )

    raise ParseFailure(input, "',', '{' or '['")


@dataclasses.dataclass(frozen=True)
class WindowLayout:
    """Parsed ``#{window_layout}``."""

    checksum: int
    cell: LayoutCell

    @classmethod
    def from_str(cls, value: str) -> WindowLayout:
        """Parse a layout string.

        The checksum is read but not verified.

        Raises
        ------
        :exc:`tmuxlib.exc.ParseError`
        """
        csum, _, cell = parse_all(
            sequence(_checksum_field, char(","), _cell),
            value,
            desc="WindowLayout",
            intent="##{window_layout}",
        )
        return cls(checksum=csum, cell=cell)

    def pane_ids(self) -> list[PaneId]:
        """Return the ids of the panes in this layout, in layout order."""
        return [PaneId(f"%{n}") for n in self.cell.panes()]

    def replace_pane_ids(self, mapping: Mapping[int, int]) -> WindowLayout:
        """Return a layout whose pane numbers are replaced through ``mapping``.

        Used when restoring a layout onto panes that tmux numbered anew.
        """
        cell = self.cell.replace_pane_numbers(mapping)
        return WindowLayout(checksum=checksum(str(cell)), cell=cell)

    def __str__(self) -> str:
        body = str(self.cell)
        return f"{checksum(body):04x},{body}"


__all__ = ["LayoutCell", "LayoutType", "WindowLayout", "checksum"]
