from __future__ import annotations

"""
Node Type Definitions.

Provides the closed set of node kinds and the token sequence type used
as file payload and as command argument vector.
"""

from enum import Enum
from typing import List

Wordvec = List[str]


class FileType(Enum):
    """Kind tag of a node. Fixed for the lifetime of the node."""
    PLAIN = "PLAIN_TYPE"
    DIRECTORY = "DIRECTORY_TYPE"

    def __str__(self) -> str:
        return self.value
