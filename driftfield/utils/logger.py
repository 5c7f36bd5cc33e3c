"""
Logger - Central logging system for driftfield

Usage:
    from driftfield.utils.logger import logger

    logger.debug("Detailed debug info")
    logger.info("Normal operation")
    logger.warning("Something unexpected")
    logger.error("Something failed")

    # With context
    logger.info("Grid rebuilt", component="FIELD")
    logger.warning("Frame dropped", component="SKETCH", details=str(e))
"""

import logging
import sys
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """Log levels matching Python logging."""
    DEBUG = logging.DEBUG      # 10
    INFO = logging.INFO        # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR      # 40


class DriftFieldLogger:
    """
    Central logger for driftfield.

    Features:
    - Component tagging for filtering
    - Console (terminal) output
    - Optional file output
    """

    def __init__(self):
        self._logger = logging.getLogger("driftfield")
        self._logger.setLevel(logging.DEBUG)  # Capture all, filter on handlers
        self._logger.propagate = False  # Don't pass to root logger

        # Console handler (terminal output)
        self._console_handler = logging.StreamHandler(sys.stdout)
        self._console_handler.setLevel(logging.INFO)  # Default: INFO and above
        self._console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S"
        ))
        self._logger.addHandler(self._console_handler)

        # File handler (optional, for long headless runs)
        self._file_handler: Optional[logging.FileHandler] = None

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger (for caplog and extra handlers)."""
        return self._logger

    def set_level(self, level: LogLevel):
        """Set minimum log level for console output."""
        self._console_handler.setLevel(level)

    def enable_file_logging(self, filepath: str):
        """Enable logging to file."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)

        self._file_handler = logging.FileHandler(filepath)
        self._file_handler.setLevel(logging.DEBUG)
        self._file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s"
        ))
        self._logger.addHandler(self._file_handler)

    def disable_file_logging(self):
        """Disable file logging."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def _format_message(self, msg: str, component: Optional[str] = None,
                        details: Optional[str] = None) -> str:
        """Format message with optional component tag and details."""
        parts = []
        if component:
            parts.append(f"[{component}]")
        parts.append(msg)
        if details:
            parts.append(f"- {details}")
        return " ".join(parts)

    def debug(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        """Log debug message (detailed info for troubleshooting)."""
        self._logger.debug(self._format_message(msg, component, details))

    def info(self, msg: str, component: Optional[str] = None,
             details: Optional[str] = None):
        """Log info message (normal operation)."""
        self._logger.info(self._format_message(msg, component, details))

    def warning(self, msg: str, component: Optional[str] = None,
                details: Optional[str] = None):
        """Log warning message (unexpected but recoverable)."""
        self._logger.warning(self._format_message(msg, component, details))

    def error(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        """Log error message (something failed)."""
        self._logger.error(self._format_message(msg, component, details))

    def field(self, msg: str, details: Optional[str] = None):
        """Convenience: log force-field grid message."""
        self.debug(msg, component="FIELD", details=details)

    def dots(self, msg: str, details: Optional[str] = None):
        """Convenience: log particle population message."""
        self.debug(msg, component="DOTS", details=details)


# Global logger instance
logger = DriftFieldLogger()


def set_log_level(level: LogLevel):
    """Set the console log level."""
    logger.set_level(level)
