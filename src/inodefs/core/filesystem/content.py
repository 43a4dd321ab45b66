from __future__ import annotations

"""
Node Content Variants.

Implements the storage body owned by every node: a token payload for
plain files and an entry table for directories. Both variants expose the
same contract; each rejects the operations that do not apply to its kind
with a KindMismatchError.

Ownership inside a directory table:
- Child entries are strong references. The table owns its children.
- '.' and '..' are weak references. They never keep a node alive, so the
  navigable graph may be cyclic while the ownership graph stays a tree.
"""

import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from inodefs.domain.constants import (
    LISTING_COLUMN_GAP,
    LISTING_COLUMN_WIDTH,
    PARENT_ENTRY,
    PATH_SEPARATOR,
    RESERVED_ENTRIES,
    SELF_ENTRY,
)
from inodefs.domain.errors import (
    AlreadyExistsError,
    InvalidNameError,
    KindMismatchError,
    NotEmptyError,
    NotFoundError,
)
from inodefs.domain.node_models import FileType, Wordvec

if TYPE_CHECKING:
    from inodefs.core.filesystem.inode import Node

logger = logging.getLogger(__name__)

NodeFactory = Callable[[FileType, str], "Node"]

IS_A_DIRECTORY = "is a directory"
IS_A_PLAIN_FILE = "is a plain file"


# -----------------------------------------------------------------------------
# CONTRACT
# -----------------------------------------------------------------------------

class BaseContent(ABC):
    """Uniform contract shared by both content variants."""

    @abstractmethod
    def size(self) -> int:
        """Return the size metric of this body."""

    @abstractmethod
    def read(self) -> Wordvec:
        """Return the stored tokens."""

    @abstractmethod
    def write(self, words: Wordvec) -> None:
        """Replace the stored tokens."""

    @abstractmethod
    def remove(self, name: str) -> None:
        """Remove the named entry."""

    @abstractmethod
    def make_directory(self, name: str) -> Node:
        """Create a child directory."""

    @abstractmethod
    def make_file(self, name: str) -> Node:
        """Create (or re-open) a child plain file."""

    @abstractmethod
    def render(self) -> List[str]:
        """Return the display lines of this body."""


# -----------------------------------------------------------------------------
# PLAIN FILE
# -----------------------------------------------------------------------------

class PlainFile(BaseContent):
    """Ordered sequence of text tokens."""

    def __init__(self) -> None:
        self._data: Wordvec = []

    def size(self) -> int:
        # Token count, not byte count
        size = len(self._data)
        logger.debug(f"size = {size}")
        return size

    def read(self) -> Wordvec:
        logger.debug(f"read {self._data}")
        return list(self._data)

    def write(self, words: Wordvec) -> None:
        logger.debug(f"write {words}")
        self._data = list(words)

    def remove(self, name: str) -> None:
        raise KindMismatchError(IS_A_PLAIN_FILE)

    def make_directory(self, name: str) -> Node:
        raise KindMismatchError(IS_A_PLAIN_FILE)

    def make_file(self, name: str) -> Node:
        raise KindMismatchError(IS_A_PLAIN_FILE)

    def render(self) -> List[str]:
        return [" ".join(self._data)]


# -----------------------------------------------------------------------------
# DIRECTORY TABLE
# -----------------------------------------------------------------------------

class Directory(BaseContent):
    """
    Name-ordered entry table of a directory node.

    The table is always seeded with '.' and '..'. Both start unbound; the
    owning node binds them once it exists (a node cannot reference its
    creator before it has been created).

    Args:
        make_node: Factory used to allocate new child nodes. Children share
                   the inode allocator of the tree through it.
    """

    def __init__(self, make_node: NodeFactory) -> None:
        self._make_node = make_node
        self._links: Dict[str, Optional[weakref.ref]] = {
            SELF_ENTRY: None,
            PARENT_ENTRY: None,
        }
        self._children: Dict[str, Node] = {}

    # --- Uniform contract ---

    def size(self) -> int:
        size = len(self._links) + len(self._children)
        logger.debug(f"size = {size}")
        return size

    def read(self) -> Wordvec:
        raise KindMismatchError(IS_A_DIRECTORY)

    def write(self, words: Wordvec) -> None:
        raise KindMismatchError(IS_A_DIRECTORY)

    def remove(self, name: str) -> None:
        """
        Erase a child entry.

        A directory child must hold nothing but '.' and '..'. Its own links
        are cleared before the entry is dropped so a detached subtree never
        points back into the live tree.

        Raises:
            InvalidNameError: For '.' and '..'.
            NotFoundError: If the entry does not exist.
            NotEmptyError: If the entry is a non-empty directory.
        """
        logger.debug(f"remove {name!r}")
        if name in RESERVED_ENTRIES:
            raise InvalidNameError(f"{name} cannot be removed")

        node = self._children.get(name)
        if node is None:
            raise NotFoundError(f"{name} cannot be removed because it does not exist")

        if node.file_type is FileType.DIRECTORY:
            if node.size() > len(RESERVED_ENTRIES):
                raise NotEmptyError(f"{name} cannot be removed because it is not empty")
            node.bind_self(None)
            node.bind_parent(None)

        del self._children[name]

    def make_directory(self, name: str) -> Node:
        """
        Allocate a new directory and insert it.

        The new node's '.' is bound to itself; binding '..' is left to the
        caller, which is the parent node.

        Raises:
            AlreadyExistsError: If any entry, '.' and '..' included, has that name.
        """
        logger.debug(f"mkdir {name!r}")
        self._check_new_name(name)
        if self._has_entry(name):
            raise AlreadyExistsError(f"{name} already exists")

        node = self._make_node(FileType.DIRECTORY, name)
        self._children[name] = node
        return node

    def make_file(self, name: str) -> Node:
        """
        Allocate a new plain file, or return the existing entry of that name.

        Re-opening an existing name is a success, whatever the entry's kind.
        """
        logger.debug(f"mkfile {name!r}")
        if self._has_entry(name):
            return self.lookup(name)

        self._check_new_name(name)
        node = self._make_node(FileType.PLAIN, name)
        self._children[name] = node
        return node

    def render(self) -> List[str]:
        """One listing line per bound entry, in table order."""
        lines: List[str] = []
        for name in self.list_names():
            node = self.get(name)
            if node is None:
                continue
            lines.append(format_entry(node, name))
        return lines

    # --- Table operations ---

    def get(self, name: str) -> Optional[Node]:
        """Return the entry bound to name, or None when absent or unbound."""
        if name in self._links:
            ref = self._links[name]
            return ref() if ref is not None else None
        return self._children.get(name)

    def lookup(self, name: str) -> Node:
        """
        Return the entry bound to name.

        Raises:
            NotFoundError: If the entry is absent or its link is cleared.
        """
        node = self.get(name)
        if node is None:
            raise NotFoundError(f"{name}: no such file or directory")
        return node

    def list_names(self) -> List[str]:
        """'.' and '..' first, then child names in sorted order."""
        return list(RESERVED_ENTRIES) + sorted(self._children)

    def set_entry(self, name: str, node: Optional[Node]) -> None:
        """
        Upsert an entry.

        '.' and '..' are stored as weak references; None clears the binding
        but keeps the key. For any other name None drops the entry.
        """
        if name in self._links:
            self._links[name] = weakref.ref(node) if node is not None else None
            return

        if node is None:
            self._children.pop(name, None)
        else:
            self._children[name] = node

    # --- Internals ---

    def _has_entry(self, name: str) -> bool:
        return name in self._links or name in self._children

    @staticmethod
    def _check_new_name(name: str) -> None:
        if not name or PATH_SEPARATOR in name:
            raise InvalidNameError(f"{name!r}: invalid entry name")


# -----------------------------------------------------------------------------
# DISPLAY HELPERS
# -----------------------------------------------------------------------------

def format_entry(node: Node, name: str) -> str:
    """
    Format one directory listing line.

    Layout: right-aligned inode number and size in fixed-width columns,
    then the entry name. Directories other than '.' and '..' get a
    trailing '/'.
    """
    suffix = ""
    if node.file_type is FileType.DIRECTORY and name not in RESERVED_ENTRIES:
        suffix = PATH_SEPARATOR

    width = LISTING_COLUMN_WIDTH
    return (
        f"{node.inode_nr:>{width}}{LISTING_COLUMN_GAP}"
        f"{node.size():>{width}}{LISTING_COLUMN_GAP}"
        f"{name}{suffix}"
    )
