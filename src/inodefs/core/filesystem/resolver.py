from __future__ import annotations

"""
Path Resolver.

Walks slash-separated paths through the tree, either from the root or
from the current directory. Any missing segment, or a segment that
tries to descend through a plain file, collapses into a single
PathNotFoundError.
"""

import logging
from typing import List, Sequence, Tuple

from inodefs.core.filesystem.inode import Node
from inodefs.core.filesystem.state import FilesystemState
from inodefs.domain.constants import PATH_SEPARATOR
from inodefs.domain.errors import PathNotFoundError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def split_path(path: str) -> Tuple[List[str], bool]:
    """
    Split a path operand into segments.

    Args:
        path: Raw operand, e.g. '/a/b' or 'b/../c'.

    Returns:
        Tuple[List[str], bool]: Non-empty segments and whether resolution
                                starts at the root (leading '/').
    """
    from_root = path.startswith(PATH_SEPARATOR)
    segments = [s for s in path.split(PATH_SEPARATOR) if s]
    return segments, from_root


def resolve(state: FilesystemState, segments: Sequence[str], from_root: bool) -> Node:
    """
    Walk segments from the root or from the current directory.

    Empty segments return the starting point unchanged. '.' and '..' need
    no special handling: they are ordinary entries of every directory.

    Raises:
        PathNotFoundError: At the first segment that cannot be walked.
    """
    position = state.root_directory() if from_root else state.current_directory()

    for segment in segments:
        child = position.find_child(segment)
        if child is None:
            logger.debug(f"resolve: {segment!r} not found under {position!r}")
            raise PathNotFoundError()
        position = child

    return position


def resolve_path(state: FilesystemState, path: str) -> Node:
    """Split and resolve a path operand in one step."""
    segments, from_root = split_path(path)
    return resolve(state, segments, from_root)


def absolute_path(state: FilesystemState, node: Node) -> str:
    """
    Render the absolute path of a directory node.

    Follows '..' links up to the root; the root itself renders as '/'.
    """
    root = state.root_directory()
    names: List[str] = []

    position = node
    while position is not root:
        names.append(position.name)
        position = position.parent()

    if not names:
        return PATH_SEPARATOR
    return PATH_SEPARATOR + PATH_SEPARATOR.join(reversed(names))
