"""Metadata for tmuxlib package."""

from __future__ import annotations

__title__ = "tmuxlib"
__package_name__ = "tmuxlib"
__version__ = "0.4.0"
__description__ = "Typed async client for the tmux terminal multiplexer"
__email__ = "maintainers@tmuxlib.dev"
__author__ = "tmuxlib contributors"
__github__ = "https://github.com/tmuxlib/tmuxlib"
__docs__ = "https://tmuxlib.readthedocs.io"
__tracker__ = "https://github.com/tmuxlib/tmuxlib/issues"
__changes__ = "https://github.com/tmuxlib/tmuxlib/blob/master/CHANGES"
__pypi__ = "https://pypi.org/project/tmuxlib/"
__license__ = "MIT"
__copyright__ = "Copyright 2024- tmuxlib contributors"
