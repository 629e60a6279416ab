"""
System Reporter - line-oriented logging for execution policies.

Provides SystemReporter, the default sink for guarded failures and
throttle batch progress. Lines go to stderr and, when a log directory
is configured, to a log file as well.
"""

import logging
import os
import sys
from typing import Optional, TextIO

from asynchof.config import Settings, load_settings

_default_reporter: Optional["SystemReporter"] = None


class SystemReporter:
    """
    Logger with verbose filtering.

    Verbose Levels:
        0 = Critical only (always visible)
        1 = Important messages (default)
        2 = Detailed information
        3 = Debug/verbose
    """

    def __init__(
        self,
        name: str = "asynchof",
        log_dir: Optional[str] = None,
        level: int = logging.INFO,
        verbose: int = 1,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize SystemReporter.

        Args:
            name: Logger name (used for filename if log_dir provided)
            log_dir: Directory for log files. If None, logs to stream only.
            level: Python logging level
            verbose: Verbosity filter (0-3)
            stream: Console stream (default: sys.stderr)
        """
        self.name = name
        self.verbose = max(0, min(3, verbose))
        self.log_file: Optional[str] = None
        self._init_logger(name, log_dir, level, stream or sys.stderr)

    def _init_logger(
        self, name: str, log_dir: Optional[str], level: int, stream: TextIO
    ) -> None:
        """Initialize logger with console and optional file handlers."""
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers.clear()
        self.logger.propagate = False

        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            self.log_file = os.path.join(log_dir, f"{name}.log")
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SystemReporter":
        """Build a reporter from loaded settings."""
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {settings.LOG_LEVEL}")
        return cls(
            name=settings.REPORTER_NAME,
            log_dir=settings.LOG_DIR,
            level=level,
            verbose=settings.LOG_VERBOSE,
        )

    def set_verbose(self, level: int) -> None:
        """Update verbosity level."""
        self.verbose = max(0, min(3, level))

    def _should_log(self, verbose_level: int) -> bool:
        """Check if message should be logged."""
        return self.verbose >= verbose_level

    def _format(self, msg: str, context: Optional[str]) -> str:
        return f"[{context}] {msg}" if context else msg

    # Core logging methods
    def debug(
        self, msg: str, context: Optional[str] = None, verbose_level: int = 3
    ) -> None:
        """Log debug message."""
        if self._should_log(verbose_level):
            self.logger.debug(self._format(msg, context))

    def info(
        self, msg: str, context: Optional[str] = None, verbose_level: int = 1
    ) -> None:
        """Log info message."""
        if self._should_log(verbose_level):
            self.logger.info(self._format(msg, context))

    def warning(
        self, msg: str, context: Optional[str] = None, verbose_level: int = 1
    ) -> None:
        """Log warning message."""
        if self._should_log(verbose_level):
            self.logger.warning(self._format(msg, context))

    def error(
        self, msg: str, context: Optional[str] = None, verbose_level: int = 0
    ) -> None:
        """Log error message."""
        if self._should_log(verbose_level):
            self.logger.error(self._format(msg, context))


def get_reporter() -> SystemReporter:
    """Return the process-wide reporter, building it from settings on first use."""
    global _default_reporter
    if _default_reporter is None:
        _default_reporter = SystemReporter.from_settings(load_settings())
    return _default_reporter


def set_reporter(reporter: Optional[SystemReporter]) -> None:
    """Replace the process-wide reporter (None rebuilds it lazily)."""
    global _default_reporter
    _default_reporter = reporter
