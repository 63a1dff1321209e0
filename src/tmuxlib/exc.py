"""Exceptions raised by tmuxlib.

tmuxlib.exc
~~~~~~~~~~~

Every error raised by an operation derives from :exc:`TmuxLibError`. Each
carries enough context (the *intent* label of the tmux command, the captured
streams, the grammar that failed) to attribute a failure without matching on
message strings.
"""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from tmuxlib.parse import ParseFailure


class TmuxLibError(Exception):
    """Root exception for tmuxlib."""


class UnexpectedTmuxOutput(TmuxLibError):
    """tmux printed output where none was expected, or exited non-zero.

    Examples
    --------
    >>> err = UnexpectedTmuxOutput(intent="kill-session", stdout="", stderr="no server")
    >>> str(err)
    'unexpected process output: intent: `kill-session`, stdout: ``, stderr: `no server`'
    >>> err.intent
    'kill-session'
    """

    def __init__(self, *, intent: str, stdout: str, stderr: str) -> None:
        self.intent = intent
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"unexpected process output: intent: `{intent}`, "
            f"stdout: `{stdout}`, stderr: `{stderr}`",
        )


class TmuxConfigError(TmuxLibError):
    """tmux lacks a required option, such as ``default-shell``."""

    def __init__(self, reason: str, *args: object) -> None:
        self.reason = reason
        super().__init__(f"unexpected tmux config: `{reason}`")


class ParseError(TmuxLibError):
    """A line of tmux output did not match the grammar of its record.

    ``desc`` names the record, ``intent`` is the ``-F`` format string the
    parser expects (with ``##{...}`` escaped placeholders) and ``err`` is the
    underlying :class:`~tmuxlib.parse.ParseFailure`.
    """

    def __init__(self, *, desc: str, intent: str, err: ParseFailure) -> None:
        self.desc = desc
        self.intent = intent
        self.err = err
        super().__init__(f"failed parsing: `{intent}`")


class Utf8Error(TmuxLibError):
    """tmux output could not be decoded as UTF-8."""

    def __init__(self, source: UnicodeDecodeError) -> None:
        self.source = source
        super().__init__(f"failed parsing utf-8 string: `{source}`")


class TmuxIOError(TmuxLibError):
    """tmux could not be spawned, waited on or read from."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(f"failed with io: `{message}`")


class TmuxCommandNotFound(TmuxIOError):
    """Application binary for tmux not found."""

    def __init__(self, *args: object) -> None:
        super().__init__("tmux executable not found in PATH")


__all__ = sorted(
    {
        "ParseError",
        "TmuxCommandNotFound",
        "TmuxConfigError",
        "TmuxIOError",
        "TmuxLibError",
        "UnexpectedTmuxOutput",
        "Utf8Error",
    }
)
