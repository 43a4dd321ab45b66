from __future__ import annotations

from .config import DEBUG_FLAG_LOGGERS, LEVEL_NAMES, LoggingConfig
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    apply_debug_flags,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "DEBUG_FLAG_LOGGERS",
    "LEVEL_NAMES",
    "LoggingConfig",
    "apply_debug_flags",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
    "_CONFIGURED_FLAG_ATTR",
    "_HANDLER_TAG_ATTR",
    "_QUEUE_LISTENER_ATTR",
]
