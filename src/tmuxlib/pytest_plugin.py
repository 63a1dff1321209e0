"""tmuxlib pytest plugin.

Fixtures for tests that drive a real tmux. Each test gets its own server
through a unique ``-L`` socket, killed when the test finishes, so the
developer's own sessions are never touched.
"""

from __future__ import annotations

import getpass
import logging
import random
import shutil
import subprocess
import typing as t

import pytest

from tmuxlib.constants import TEST_SESSION_PREFIX, TEST_SOCKET_PREFIX
from tmuxlib.runner import SubprocessRunner

if t.TYPE_CHECKING:
    import pathlib

logger = logging.getLogger(__name__)


class RandomStrSequence:
    """Factory to generate random string."""

    def __init__(
        self,
        characters: str = "abcdefghijklmnopqrstuvwxyz0123456789_",
    ) -> None:
        """Create a random letter / number generator. 8 chars in length.

        >>> rng = RandomStrSequence()
        >>> len(next(rng))
        8
        >>> type(next(rng))
        <class 'str'>
        """
        self.characters: str = characters

    def __iter__(self) -> RandomStrSequence:
        """Return self."""
        return self

    def __next__(self) -> str:
        """Return next random string."""
        return "".join(random.sample(self.characters, k=8))


namer = RandomStrSequence()


@pytest.fixture(scope="session")
def home_path(tmp_path_factory: pytest.TempPathFactory) -> pathlib.Path:
    """Temporary `/home/` path."""
    return tmp_path_factory.mktemp("home")


@pytest.fixture(scope="session")
def home_user_name() -> str:
    """Return default username to set for :func:`user_path` fixture."""
    return getpass.getuser()


@pytest.fixture(scope="session")
def user_path(home_path: pathlib.Path, home_user_name: str) -> pathlib.Path:
    """Ensure and return temporary user directory."""
    p = home_path / home_user_name
    p.mkdir()
    return p


@pytest.fixture(scope="session")
def config_file(user_path: pathlib.Path) -> pathlib.Path:
    """Return fixture for ``.tmux.conf`` configuration.

    - ``base-index -g 1``

    This keeps window indexes predictable across hosts.
    """
    c = user_path / ".tmux.conf"
    c.write_text(
        """
set -g base-index 1
    """,
        encoding="utf-8",
    )
    return c


@pytest.fixture
def tmux_runner(
    request: pytest.FixtureRequest,
    config_file: pathlib.Path,
) -> SubprocessRunner:
    """Return a :class:`~tmuxlib.runner.SubprocessRunner` on a private server.

    The socket name starts with :data:`~tmuxlib.constants.TEST_SOCKET_PREFIX`.
    The server, if any was started, is killed on teardown. Skips the test when
    tmux is not installed.

    >>> def test_example(tmux_runner) -> None:
    ...     assert tmux_runner.socket_name.startswith("tmuxlib_test")
    """
    tmux_bin = shutil.which("tmux")
    if tmux_bin is None:
        pytest.skip("tmux not found in PATH")

    runner = SubprocessRunner(
        tmux_bin=tmux_bin,
        socket_name=f"{TEST_SOCKET_PREFIX}{next(namer)}",
        config_file=str(config_file),
    )

    def fin() -> None:
        proc = subprocess.run(
            [tmux_bin, *runner.base_args(), "kill-server"],
            capture_output=True,
            check=False,
        )
        logger.debug(
            "killed test server",
            extra={
                "tmux_socket": runner.socket_name,
                "tmux_returncode": proc.returncode,
            },
        )

    request.addfinalizer(fin)

    return runner


@pytest.fixture
def session_name() -> str:
    """Return a unique session name starting with ``tmuxlib_``.

    >>> def test_example(session_name: str) -> None:
    ...     assert session_name.startswith("tmuxlib_")
    """
    return f"{TEST_SESSION_PREFIX}{next(namer)}"
