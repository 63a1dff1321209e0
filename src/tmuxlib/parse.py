r"""Grammar primitives for tmux format output.

tmuxlib.parse
~~~~~~~~~~~~~

tmux is asked to print records through ``-F`` format strings; every line it
prints is then read back with a small grammar built from the combinators in
this module.

A parser is any callable taking the input ``str`` and returning a
``(remaining_input, value)`` pair. On mismatch it raises :exc:`ParseFailure`,
which owns a copy of the input left at the failure point so it stays usable
after the original buffer is gone.

>>> quoted_string("'first':rest")
(':rest', 'first')

>>> sequence(quoted_nonempty_string, char(":"), quoted_string)("'a':''")
('', ('a', ':', ''))

>>> boolean("false")
('', False)
"""

from __future__ import annotations

import typing as t

from tmuxlib import exc

T = t.TypeVar("T")
U = t.TypeVar("U")

Parser = t.Callable[[str], tuple[str, T]]

ASCII_DIGITS = "0123456789"


class ParseFailure(Exception):
    """Grammar mismatch, independent of the position in the original input.

    Parameters
    ----------
    input : str
        Input remaining where the mismatch happened.
    expected : str
        Short label of what the grammar wanted there.
    """

    def __init__(self, input: str, expected: str) -> None:
        self.input = input
        self.expected = expected
        super().__init__(f"expected {expected} at {input!r}")


def tag(literal: str) -> Parser[str]:
    """Match ``literal`` exactly.

    >>> tag("true")("true:next")
    (':next', 'true')
    """

    def parser(input: str) -> tuple[str, str]:
        if not input.startswith(literal):
            raise ParseFailure(input, f"tag {literal!r}")
        return input[len(literal) :], literal

    return parser


def char(c: str) -> Parser[str]:
    """Match the single character ``c``."""
    if len(c) != 1:
        msg = f"char() expects a single character, got {c!r}"
        raise ValueError(msg)
    return tag(c)


def digits(input: str) -> tuple[str, str]:
    """Match one or more ASCII digits.

    >>> digits("42:rest")
    (':rest', '42')
    """
    end = 0
    while end < len(input) and input[end] in ASCII_DIGITS:
        end += 1
    if end == 0:
        raise ParseFailure(input, "digit")
    return input[end:], input[:end]


def integer(input: str) -> tuple[str, int]:
    """Match one or more ASCII digits as an ``int``."""
    remaining, value = digits(input)
    return remaining, int(value)


def take_until(stop: str) -> Parser[str]:
    """Match one or more characters not contained in ``stop``.

    >>> take_until(":")("b25d,80x24,0,0,0:'zsh'")
    (":'zsh'", 'b25d,80x24,0,0,0')
    """

    def parser(input: str) -> tuple[str, str]:
        end = 0
        while end < len(input) and input[end] not in stop:
            end += 1
        if end == 0:
            raise ParseFailure(input, f"characters other than {stop!r}")
        return input[end:], input[:end]

    return parser


def rest(input: str) -> tuple[str, str]:
    """Consume all remaining input, which may be empty."""
    return "", input


def sequence(*parsers: Parser[t.Any]) -> Parser[tuple[t.Any, ...]]:
    """Apply ``parsers`` one after another, collecting their values."""

    def parser(input: str) -> tuple[str, tuple[t.Any, ...]]:
        values = []
        for p in parsers:
            input, value = p(input)
            values.append(value)
        return input, tuple(values)

    return parser


def preceded(first: Parser[t.Any], second: Parser[T]) -> Parser[T]:
    """Apply ``first`` then ``second``, keeping only the value of ``second``."""

    def parser(input: str) -> tuple[str, T]:
        input, _ = first(input)
        return second(input)

    return parser


def alt(*parsers: Parser[T]) -> Parser[T]:
    """Return the result of the first parser in ``parsers`` that matches."""

    def parser(input: str) -> tuple[str, T]:
        expected = []
        for p in parsers:
            try:
                return p(input)
            except ParseFailure as e:
                expected.append(e.expected)
        raise ParseFailure(input, " or ".join(expected))

    return parser


def mapped(p: Parser[T], fn: t.Callable[[T], U]) -> Parser[U]:
    """Transform the value produced by ``p`` with ``fn``."""

    def parser(input: str) -> tuple[str, U]:
        input, value = p(input)
        return input, fn(value)

    return parser


def separated_list(separator: Parser[t.Any], item: Parser[T]) -> Parser[list[T]]:
    """Match one or more ``item`` separated by ``separator``.

    >>> separated_list(char(","), digits)("1,2,3}")
    ('}', ['1', '2', '3'])
    """

    def parser(input: str) -> tuple[str, list[T]]:
        input, first = item(input)
        items = [first]
        while True:
            try:
                after_sep, _ = separator(input)
                after_item, value = item(after_sep)
            except ParseFailure:
                return input, items
            input = after_item
            items.append(value)

    return parser


def all_consuming(p: Parser[T]) -> Parser[T]:
    """Fail unless ``p`` consumes the whole input.

    >>> all_consuming(digits)("12")
    ('', '12')
    >>> all_consuming(digits)("12:extra")
    Traceback (most recent call last):
    ...
    tmuxlib.parse.ParseFailure: expected eof at ':extra'
    """

    def parser(input: str) -> tuple[str, T]:
        remaining, value = p(input)
        if remaining:
            raise ParseFailure(remaining, "eof")
        return remaining, value

    return parser


def _escaped_body(input: str, *, allow_empty: bool) -> tuple[str, str]:
    # Body chars are anything but ' and \; the only escape is \'.
    end = 0
    while end < len(input):
        c = input[end]
        if c == "'":
            break
        if c == "\\":
            if input[end + 1 : end + 2] != "'":
                raise ParseFailure(input[end + 1 :], "tag \"'\"")
            end += 2
            continue
        end += 1
    if end == 0 and not allow_empty:
        raise ParseFailure(input, "escaped")
    return input[end:], input[:end]


def _quoted(input: str, *, allow_empty: bool) -> tuple[str, str]:
    input, _ = tag("'")(input)
    input, body = _escaped_body(input, allow_empty=allow_empty)
    input, _ = tag("'")(input)
    return input, body


def quoted_string(input: str) -> tuple[str, str]:
    r"""Return the text between single quotes, which may be empty.

    Escapes are preserved verbatim.

    >>> quoted_string("''")
    ('', '')
    >>> quoted_string(r"'it\'s working'")
    ('', "it\\'s working")
    """
    return _quoted(input, allow_empty=True)


def quoted_nonempty_string(input: str) -> tuple[str, str]:
    """Return the text between single quotes, which may not be empty.

    >>> quoted_nonempty_string("'  '")
    ('', '  ')
    >>> quoted_nonempty_string("''")
    Traceback (most recent call last):
    ...
    tmuxlib.parse.ParseFailure: expected escaped at "'"
    """
    return _quoted(input, allow_empty=False)


def boolean(input: str) -> tuple[str, bool]:
    """Match ``true`` or ``false``."""
    return alt(
        mapped(tag("true"), lambda _: True),
        mapped(tag("false"), lambda _: False),
    )(input)


def tmux_id(prefix: str) -> Parser[str]:
    """Match an opaque tmux id: ``prefix`` followed by one or more digits.

    Trailing input is left to the caller.

    >>> tmux_id("%")("%42:rest")
    (':rest', '%42')
    """

    def parser(input: str) -> tuple[str, str]:
        input, number = preceded(char(prefix), digits)(input)
        return input, f"{prefix}{number}"

    return parser


def parse_all(p: Parser[T], input: str, *, desc: str, intent: str) -> T:
    """Run ``p`` over the whole of ``input``.

    Raises
    ------
    :exc:`tmuxlib.exc.ParseError`
        When the grammar does not match or leaves trailing input.
    """
    try:
        _, value = all_consuming(p)(input)
    except ParseFailure as e:
        raise exc.ParseError(desc=desc, intent=intent, err=e) from e
    return value
