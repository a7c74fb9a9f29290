from __future__ import annotations

"""
Logging Configuration Models.

Holds the settings the CLI passes to configure_logging: verbosity, where
records go, and how the reorganizer's progress lines are laid out.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Progress lines ("Lerna packages found", "put X stuff into Y") read as plain text.
CONSOLE_FORMAT = "lernadocs: %(message)s"
DEBUG_CONSOLE_FORMAT = "lernadocs [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Write records to stderr.
        log_file: Optional rotating diagnostics file.
        max_bytes: Rollover threshold of the log file.
        backup_count: Rolled-over files to keep.
        console_fmt: Format of stderr records.
        file_fmt: Format of log file records.
        datefmt: Timestamp format of log file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 256 * 1024
    backup_count: int = 2

    console_fmt: str = CONSOLE_FORMAT
    file_fmt: str = FILE_FORMAT
    datefmt: str = "%Y-%m-%dT%H:%M:%S"

    @classmethod
    def for_cli(cls, *, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Build the configuration used by the command line entry point."""
        if debug:
            return cls(level="DEBUG", console_fmt=DEBUG_CONSOLE_FORMAT, log_file=log_file)
        return cls(level="INFO", log_file=log_file)
