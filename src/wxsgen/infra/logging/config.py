from __future__ import annotations

"""
Logging settings for a wxsgen run.

A run always reports to stderr; `--log-file` adds a size-capped file that
keeps the last few manifest runs for later inspection.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

CONSOLE_FORMAT = "wxsgen %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# A debug run over a large tree logs one line per file identifier
LOG_FILE_ROTATE_BYTES = 512 * 1024
LOG_FILE_KEEP = 2


@dataclass(frozen=True)
class LoggingConfig:
    """
    Where and how verbosely a run logs.

    Attributes:
        level: Minimum severity level name.
        console: Emit records to stderr.
        log_file: Optional rotating log file.
        rotate_bytes: Size at which the log file rolls over.
        keep_files: Rolled-over log files retained next to it.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    rotate_bytes: int = LOG_FILE_ROTATE_BYTES
    keep_files: int = LOG_FILE_KEEP

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str]) -> LoggingConfig:
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file or None)
