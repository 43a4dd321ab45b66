from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. Records are
pushed through a QueueHandler and written by a QueueListener thread so
file I/O never stalls the command loop.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from inodefs.infra.logging.config import _LEVEL_MAP, DEBUG_FLAG_LOGGERS, LoggingConfig
from inodefs.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_inodefs_configured"
_QUEUE_LISTENER_ATTR: str = "_inodefs_queue_listener"
_DEBUG_LOGGERS_ATTR: str = "_inodefs_debug_loggers"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once.

    Args:
        cfg: Structural configuration for the logging system.
        force: If True, drop our previous handlers and re-initialize.

    Returns:
        logging.Logger: The initialized root logger instance.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)
    _reset_debug_loggers(root)

    # Flagged subsystems log below the root level; handlers must let them through
    handler_level = logging.DEBUG if cfg.debug_flags else level_int

    handlers_list: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(handler_level)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        _tag_handler(sh)
        handlers_list.append(sh)

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            handler_level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers_list.append(fh)

    apply_debug_flags(cfg.debug_flags)

    if not handlers_list:
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on shutdown
    atexit.register(_safe_stop_listener, listener)

    return root


def apply_debug_flags(flags: str) -> List[str]:
    """
    Switch the logger subtrees selected by the debug flags to DEBUG.

    Args:
        flags: Flag characters, e.g. 'ic'. Unknown characters are ignored.

    Returns:
        List[str]: Names of the loggers that were switched.
    """
    root = logging.getLogger()
    enabled: List[str] = list(getattr(root, _DEBUG_LOGGERS_ATTR, None) or [])

    for flag in flags or "":
        name = DEBUG_FLAG_LOGGERS.get(flag)
        if name is None or name in enabled:
            continue
        logging.getLogger(name).setLevel(logging.DEBUG)
        enabled.append(name)

    setattr(root, _DEBUG_LOGGERS_ATTR, enabled)
    return enabled


def shutdown_logging() -> None:
    """Stop the listener, flushing queued records, and detach our handlers."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    _reset_debug_loggers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger instance (usually __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _reset_debug_loggers(root: logging.Logger) -> None:
    for name in getattr(root, _DEBUG_LOGGERS_ATTR, None) or []:
        logging.getLogger(name).setLevel(logging.NOTSET)
    setattr(root, _DEBUG_LOGGERS_ATTR, [])


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener, tolerating listeners that were already stopped."""
    if listener is None:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()
        for h in listener.handlers:
            h.close()
