from __future__ import annotations

"""
Error Taxonomy.

Every failure raised by the in-memory filesystem derives from
FileSystemError. The shell layer adds usage errors and the exit signal.
All of them unwind to the session loop, which reports and continues.
"""

from typing import Optional


# -----------------------------------------------------------------------------
# FILESYSTEM CORE
# -----------------------------------------------------------------------------

class FileSystemError(RuntimeError):
    """Base class for errors raised by nodes, contents and the resolver."""


class KindMismatchError(FileSystemError):
    """Operation invoked on the wrong content variant."""


class NotFoundError(FileSystemError):
    """Named entry absent from a directory table."""


class AlreadyExistsError(FileSystemError):
    """Creation collides with an existing entry of any kind."""


class NotEmptyError(FileSystemError):
    """Removal of a directory holding entries beyond '.' and '..'."""


class InvalidNameError(FileSystemError):
    """Entry name that can never be created or removed by a user."""


class PathNotFoundError(FileSystemError):
    """The resolver could not walk the full segment sequence."""

    DEFAULT_MESSAGE = "file system: path does not exist"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.DEFAULT_MESSAGE)


# -----------------------------------------------------------------------------
# SHELL LAYER
# -----------------------------------------------------------------------------

class CommandError(RuntimeError):
    """Unknown command or invalid operands."""


class ShellExit(Exception):
    """Raised by the exit command to stop the session loop."""

    def __init__(self, status: int = 0):
        super().__init__(f"exit({status})")
        self.status = status
