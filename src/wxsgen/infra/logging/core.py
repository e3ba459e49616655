from __future__ import annotations

"""
Logging lifecycle for wxsgen.

The CLI configures logging once per process. Records go through a
QueueHandler on the root logger; a QueueListener thread owns the stderr
and rotating-file handlers, so a verbose debug run does not block the
directory walk on handler I/O.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from wxsgen.infra.logging.config import (
    _LEVEL_MAP,
    CONSOLE_FORMAT,
    FILE_DATE_FORMAT,
    FILE_FORMAT,
    LoggingConfig,
)
from wxsgen.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Root logger attributes recording what this package installed
_CONFIGURED_FLAG_ATTR: str = "_wxsgen_configured"
_QUEUE_LISTENER_ATTR: str = "_wxsgen_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the wxsgen handlers on the root logger.

    A second call is a no-op unless 'force' is set, in which case the
    previously installed handlers and listener are torn down first.
    Handlers added by anything else (pytest's caplog, an embedding
    application) are left alone.

    Args:
        cfg: Level and destinations for this process.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()

    level = _parse_level(cfg.level)
    root.setLevel(level)

    targets = _build_targets(cfg, level)
    if not targets:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    front = QueueHandler(records)
    _tag_handler(front)

    listener = QueueListener(records, *targets, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    root.addHandler(front)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Drain queued records and detach every handler this package installed."""
    root = logging.getLogger()

    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in [h for h in root.handlers if _is_our_handler(h)]:
        root.removeHandler(h)
        h.close()

    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    return _LEVEL_MAP.get(str(level or "").strip().upper(), logging.INFO)


def _build_targets(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    targets: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        _tag_handler(console)
        targets.append(console)

    if cfg.log_file:
        file_handler = _create_rotating_file_handler(
            cfg.log_file,
            level,
            logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT),
            cfg.rotate_bytes,
            cfg.keep_files,
        )
        if file_handler:
            targets.append(file_handler)

    return targets


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() fails on a listener whose thread was already joined, which
    # happens when both atexit and shutdown_logging reach it
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
