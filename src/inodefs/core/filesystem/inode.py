from __future__ import annotations

"""
Inode Model.

Defines the identity-bearing unit of the tree. A Node carries a unique
inode number, a name and an immutable kind tag, and exclusively owns one
content body matching that kind. Navigation and mutation are delegated
to the content.
"""

import functools
import logging
from typing import List, Optional

from inodefs.core.filesystem.content import (
    IS_A_PLAIN_FILE,
    BaseContent,
    Directory,
    PlainFile,
)
from inodefs.domain.constants import (
    FIRST_INODE_NR,
    PARENT_ENTRY,
    ROOT_NAME,
    SELF_ENTRY,
)
from inodefs.domain.errors import KindMismatchError
from inodefs.domain.node_models import FileType, Wordvec

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# INODE NUMBERING
# -----------------------------------------------------------------------------

class InodeAllocator:
    """
    Monotonic inode number source.

    One allocator belongs to one filesystem state and is shared by every
    node of that tree. Numbers are never reused.
    """

    def __init__(self, start: int = FIRST_INODE_NR):
        self._next_inode_nr = start

    @property
    def next_inode_nr(self) -> int:
        return self._next_inode_nr

    def allocate(self) -> int:
        inode_nr = self._next_inode_nr
        self._next_inode_nr += 1
        return inode_nr


# -----------------------------------------------------------------------------
# NODE
# -----------------------------------------------------------------------------

class Node:
    """
    Filesystem object (plain file or directory).

    Args:
        file_type: Kind tag, fixed for the lifetime of the node.
        name: Entry name. Empty only for the root.
        allocator: Inode number source of the owning tree.
    """

    def __init__(self, file_type: FileType, name: str, allocator: InodeAllocator):
        self._inode_nr = allocator.allocate()
        self._file_type = file_type
        self._name = name
        self._contents: BaseContent

        if file_type is FileType.PLAIN:
            self._contents = PlainFile()
        elif file_type is FileType.DIRECTORY:
            directory = Directory(functools.partial(Node, allocator=allocator))
            self._contents = directory
            directory.set_entry(SELF_ENTRY, self)
        else:
            raise ValueError(f"Unknown file type: {file_type!r}")

        logger.debug(f"inode {self._inode_nr}, type = {file_type}, name = {name!r}")

    def __repr__(self) -> str:
        return f"Node(inode_nr={self._inode_nr}, type={self._file_type}, name={self._name!r})"

    # --- Identity ---

    @property
    def inode_nr(self) -> int:
        return self._inode_nr

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_directory(self) -> bool:
        return self._file_type is FileType.DIRECTORY

    # --- Navigation ---

    def child_directory(self, name: str) -> Node:
        """
        Return the entry called name.

        Raises:
            KindMismatchError: If this node is a plain file.
            NotFoundError: If there is no such entry.
        """
        return self._directory().lookup(name)

    def find_child(self, name: str) -> Optional[Node]:
        """Return the entry called name, or None when absent or not a directory."""
        if self._file_type is FileType.DIRECTORY:
            return self._directory().get(name)
        return None

    def child_names(self) -> List[str]:
        return self._directory().list_names()

    def parent(self) -> Node:
        return self._directory().lookup(PARENT_ENTRY)

    # --- Mutation ---

    def make_child_directory(self, name: str) -> Node:
        """Create a subdirectory and bind its '..' back to this node."""
        child = self._contents.make_directory(name)
        child.bind_parent(self)
        return child

    def make_child_file(self, name: str) -> Node:
        return self._contents.make_file(name)

    def remove(self, name: str) -> None:
        self._contents.remove(name)

    def read(self) -> Wordvec:
        return self._contents.read()

    def write(self, words: Wordvec) -> None:
        self._contents.write(words)

    def size(self) -> int:
        return self._contents.size()

    def bind_self(self, node: Optional[Node]) -> None:
        self._directory().set_entry(SELF_ENTRY, node)

    def bind_parent(self, node: Optional[Node]) -> None:
        self._directory().set_entry(PARENT_ENTRY, node)

    # --- Display ---

    def to_text(self) -> str:
        """
        Render the node for the shell.

        A directory renders a '/<name>:' header followed by one listing line
        per entry; a plain file renders its tokens separated by spaces.
        """
        lines = self._contents.render()
        if self._file_type is FileType.DIRECTORY:
            lines.insert(0, f"/{self._name}:")
        return "\n".join(lines)

    # --- Internals ---

    def _directory(self) -> Directory:
        if self._file_type is not FileType.DIRECTORY:
            raise KindMismatchError(IS_A_PLAIN_FILE)
        return self._contents  # type: ignore[return-value]


def make_root(allocator: InodeAllocator) -> Node:
    """Allocate a root directory whose '.' and '..' both refer to itself."""
    root = Node(FileType.DIRECTORY, ROOT_NAME, allocator)
    root.bind_self(root)
    root.bind_parent(root)
    return root
