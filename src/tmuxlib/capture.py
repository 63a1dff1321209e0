r"""Clean up pane buffers captured with ``capture-pane -e``.

tmuxlib.capture
~~~~~~~~~~~~~~~

tmux cannot both keep escape sequences and trim lines when capturing, and it
does not emit a final attribute reset. :func:`cleanup_captured_buffer` fixes
both so the buffer can be replayed into a fresh terminal.

>>> cleanup_captured_buffer(b"line1   \nline2   \n")
b'line1\nline2\x1b[0m\n'
"""

from __future__ import annotations

from tmuxlib.constants import ANSI_RESET

WHITESPACE = b" \t"


def trim_trailing(line: bytes) -> bytes:
    r"""Strip trailing spaces and tabs; leading whitespace is kept.

    >>> trim_trailing(b"\t\ttext\t\t")
    b'\t\ttext'
    """
    return line.rstrip(WHITESPACE)


def buf_trim_trailing(buffer: bytes) -> list[bytes]:
    r"""Split ``buffer`` on ``\n`` and trim each line.

    >>> buf_trim_trailing(b"line1\n\nline3   ")
    [b'line1', b'', b'line3']
    """
    return [trim_trailing(line) for line in buffer.split(b"\n")]


def drop_last_empty_lines(lines: list[bytes]) -> list[bytes]:
    """Drop trailing empty lines, unless every line is empty.

    >>> drop_last_empty_lines([b"a", b"b", b"", b""])
    [b'a', b'b']
    >>> drop_last_empty_lines([b"", b""])
    [b'', b'']
    """
    for last in range(len(lines) - 1, -1, -1):
        if lines[last]:
            return lines[: last + 1]
    return list(lines)


def cleanup_captured_buffer(buffer: bytes, drop_n_last_lines: int = 0) -> bytes:
    r"""Return a captured pane ``buffer`` ready to be replayed.

    - each line loses its trailing spaces and tabs,
    - trailing empty lines are removed,
    - the last ``drop_n_last_lines`` lines are dropped (shell prompts that a
      restored shell prints again),
    - the final line gets an ANSI reset before its newline.

    Parameters
    ----------
    buffer : bytes
        Raw output of ``capture-pane -e -p``.
    drop_n_last_lines : int
        Number of lines to drop at the end, after trimming.

    Returns
    -------
    bytes
        ``b""`` when every line was dropped.

    Examples
    --------
    >>> cleanup_captured_buffer(b"line1\nline2\n\n\n   \n")
    b'line1\nline2\x1b[0m\n'

    >>> cleanup_captured_buffer(b"a\nb\nc\nd\n", 2)
    b'a\nb\x1b[0m\n'
    """
    if drop_n_last_lines < 0:
        msg = f"drop_n_last_lines must be >= 0, got {drop_n_last_lines}"
        raise ValueError(msg)

    lines = drop_last_empty_lines(buf_trim_trailing(buffer))
    lines = lines[: max(len(lines) - drop_n_last_lines, 0)]
    if not lines:
        return b""

    return b"\n".join(lines) + ANSI_RESET + b"\n"


__all__ = ["buf_trim_trailing", "cleanup_captured_buffer", "drop_last_empty_lines"]
