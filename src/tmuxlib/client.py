"""Client state and reporting inside tmux.

tmuxlib.client
~~~~~~~~~~~~~~

"""

from __future__ import annotations

import dataclasses
import logging
import typing as t

from tmuxlib.common import decode, exact, require_success, run
from tmuxlib.parse import (
    char,
    parse_all,
    quoted_nonempty_string,
    quoted_string,
    sequence,
)

if t.TYPE_CHECKING:
    from tmuxlib._types import ProcessRunner

logger = logging.getLogger(__name__)

#: Format requested from ``display-message``
CLIENT_FORMAT = "'#{client_session}':'#{client_last_session}'"


@dataclasses.dataclass(frozen=True)
class Client:
    """A tmux client.

    Attributes
    ----------
    session_name : str
        The current session, never empty.
    last_session_name : str
        The previous session, empty when there is none.
    """

    session_name: str
    last_session_name: str

    @classmethod
    def from_str(cls, value: str) -> Client:
        """Parse a line printed with :data:`CLIENT_FORMAT`.

        Examples
        --------
        >>> Client.from_str("'current-session':'last-session'")
        Client(session_name='current-session', last_session_name='last-session')

        >>> Client.from_str("'my-session':''")
        Client(session_name='my-session', last_session_name='')

        >>> Client.from_str("'':'x'")
        Traceback (most recent call last):
        ...
        tmuxlib.exc.ParseError: failed parsing: `'##{client_session}':'##{client_last_session}'`
        """
        session_name, _, last_session_name = parse_all(
            sequence(quoted_nonempty_string, char(":"), quoted_string),
            value,
            desc="Client",
            intent="'##{client_session}':'##{client_last_session}'",
        )
        return cls(session_name=session_name, last_session_name=last_session_name)


async def current(*, runner: ProcessRunner | None = None) -> Client:
    """Return the current client's sessions.

    ``$ tmux display-message -p -F "'#{client_session}':'#{client_last_session}'"``
    """
    output = await run(
        ["display-message", "-p", "-F", CLIENT_FORMAT],
        runner=runner,
    )
    require_success(output, "display-message")
    return Client.from_str(decode(output["stdout"]).rstrip())


async def display_message(message: str, *, runner: ProcessRunner | None = None) -> None:
    """Show ``message`` in the tmux status line.

    The output of tmux is not checked; failing to run tmux at all raises
    :exc:`tmuxlib.exc.TmuxIOError`.
    """
    await run(["display-message", message], runner=runner)


async def switch_client(
    session_name: str,
    *,
    runner: ProcessRunner | None = None,
) -> None:
    """Switch the current client to the session exactly named ``session_name``.

    The output of tmux is not checked; failing to run tmux at all raises
    :exc:`tmuxlib.exc.TmuxIOError`.
    """
    await run(["switch-client", "-t", exact(session_name)], runner=runner)


__all__ = ["CLIENT_FORMAT", "Client", "current", "display_message", "switch_client"]
