from __future__ import annotations

"""
Domain Constants.

Reserved directory entry names, display geometry and session defaults
shared by the filesystem core and the shell layer.
"""

# -----------------------------------------------------------------------------
# DIRECTORY ENTRIES
# -----------------------------------------------------------------------------

SELF_ENTRY = "."
PARENT_ENTRY = ".."
RESERVED_ENTRIES = (SELF_ENTRY, PARENT_ENTRY)

# The root directory is the only node with an empty name
ROOT_NAME = ""
PATH_SEPARATOR = "/"

FIRST_INODE_NR = 1

# -----------------------------------------------------------------------------
# DISPLAY
# -----------------------------------------------------------------------------

LISTING_COLUMN_WIDTH = 5
LISTING_COLUMN_GAP = "  "

# -----------------------------------------------------------------------------
# SESSION
# -----------------------------------------------------------------------------

APP_NAME = "inodefs"
DEFAULT_PROMPT = "% "
CURRENT_CONFIG_VERSION = "1.0.0"
EXIT_STATUS_BAD_OPERAND = 127
