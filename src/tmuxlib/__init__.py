"""tmuxlib, a typed, async client for the tmux terminal multiplexer."""

from .__about__ import (
    __author__,
    __copyright__,
    __description__,
    __email__,
    __license__,
    __package_name__,
    __title__,
    __version__,
)
from .capture import cleanup_captured_buffer
from .client import Client
from .ids import PaneId, SessionId, WindowId
from .layout import WindowLayout
from .pane import Pane
from .runner import SubprocessRunner
from .session import Session
from .window import Window

__all__ = (
    "Client",
    "Pane",
    "PaneId",
    "Session",
    "SessionId",
    "SubprocessRunner",
    "Window",
    "WindowId",
    "WindowLayout",
    "__author__",
    "__copyright__",
    "__description__",
    "__email__",
    "__license__",
    "__package_name__",
    "__title__",
    "__version__",
    "cleanup_captured_buffer",
)
