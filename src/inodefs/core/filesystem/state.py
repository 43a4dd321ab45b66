from __future__ import annotations

"""
Filesystem Session State.

Holds the root of the tree, the current directory cursor and the prompt
string. Every command and every path resolution starts from here.
"""

import logging
from typing import Optional

from inodefs.core.filesystem.inode import InodeAllocator, Node, make_root
from inodefs.domain.constants import DEFAULT_PROMPT

logger = logging.getLogger(__name__)


class FilesystemState:
    """
    One instance per session.

    The root never changes identity after construction. The cwd cursor is
    rebound by the change-directory command only.

    Args:
        prompt: Initial prompt text.
        allocator: Inode number source. A fresh allocator numbers the root 1.
    """

    def __init__(self, prompt: str = DEFAULT_PROMPT, allocator: Optional[InodeAllocator] = None):
        self._allocator = allocator or InodeAllocator()
        self._root = make_root(self._allocator)
        self._cwd = self._root
        self._prompt = prompt

        logger.debug(f"root = {self._root!r}, cwd = {self._cwd!r}, prompt = {self._prompt!r}")

    def __repr__(self) -> str:
        return f"FilesystemState(root={self._root!r}, cwd={self._cwd!r})"

    @property
    def allocator(self) -> InodeAllocator:
        return self._allocator

    def root_directory(self) -> Node:
        return self._root

    def current_directory(self) -> Node:
        return self._cwd

    def set_directory(self, node: Node) -> None:
        """Rebind the cwd cursor. Callers pass resolved directory nodes only."""
        logger.debug(f"cwd {self._cwd!r} -> {node!r}")
        self._cwd = node

    def prompt_text(self) -> str:
        return self._prompt

    def set_prompt(self, text: str) -> None:
        self._prompt = text
