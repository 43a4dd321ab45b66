from __future__ import annotations

"""
Logging Configuration Models.

Defines the data structures and constants required to initialize the
logging subsystem: the configuration dataclass, severity level mappings
and the debug flag table inherited from the shell's '-@' option.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LEVEL_NAMES: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Debug flag -> logger subtree switched to DEBUG
DEBUG_FLAG_LOGGERS: Dict[str, str] = {
    "i": "inodefs.core.filesystem",
    "c": "inodefs.core.shell",
    "@": "inodefs",
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        log_file: Optional path for persistent file storage.
        debug_flags: Characters from DEBUG_FLAG_LOGGERS enabling DEBUG per subsystem.
        max_bytes: Maximum size per log segment before rotation.
        backup_count: Number of historical log segments to preserve.
        console_fmt: Structural format for terminal output.
        file_fmt: Structural format for file entries.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None
    debug_flags: str = ""

    max_bytes: int = 1024 * 1024  # Default: 1MB
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
