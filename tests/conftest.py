from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a fresh filesystem state, output buffers and a
   helper that runs shell lines against a state.
"""

import io
import os
import sys
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from inodefs.core.filesystem.state import FilesystemState  # noqa: E402
from inodefs.core.shell.session import ShellSession  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fs_state() -> FilesystemState:
    """Return a freshly constructed filesystem (root is inode 1)."""
    return FilesystemState()


@pytest.fixture
def out() -> io.StringIO:
    """Output buffer handed to command handlers."""
    return io.StringIO()


@pytest.fixture
def quiet_session(fs_state: FilesystemState) -> ShellSession:
    """Session without prompt or echo writing to in-memory buffers."""
    return ShellSession(
        fs_state,
        out=io.StringIO(),
        err=io.StringIO(),
        show_prompt=False,
        echo=False,
    )


@pytest.fixture
def run_lines(quiet_session: ShellSession) -> Callable[..., ShellSession]:
    """
    Execute command lines on the quiet session.

    Returns the session so tests can inspect out/err buffers and status.
    """
    def _run(*lines: str) -> ShellSession:
        for line in lines:
            if not quiet_session.execute(line):
                break
        return quiet_session

    return _run
