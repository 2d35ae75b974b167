"""
Structured Logging Configuration

Console and file logging for the engine, service and API layers. Records
emitted with ``extra={"protocol": ..., "patient": ...}`` carry that context
into the formatted line, so one evaluation can be followed across steps.
"""
import logging
import sys
from typing import Callable, Optional
from datetime import datetime, timezone

from gentreat import config

ROOT_LOGGER_NAME = "gentreat"


class StructuredFormatter(logging.Formatter):
    """Colourised console formatter: timestamp, level, logger, evaluation context, message."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    @staticmethod
    def context(record: logging.LogRecord) -> str:
        parts = [
            f"{key}={getattr(record, key)}"
            for key in ("protocol", "patient")
            if getattr(record, key, None) is not None
        ]
        return f"[{' '.join(parts)}] " if parts else ""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).isoformat()
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        log_message = (
            f"{color}[{timestamp}] "
            f"{record.levelname:8} "
            f"[{record.name}] "
            f"{self.context(record)}"
            f"{record.getMessage()}{reset}"
        )

        if record.exc_info:
            log_message += f"\n{self.formatException(record.exc_info)}"

        return log_message


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level name; defaults to GENTREAT_LOG_LEVEL
        log_file: Optional file path; defaults to GENTREAT_LOG_FILE
    """
    level = level or config.LOG_LEVEL
    log_file = log_file or config.LOG_FILE or None

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
        ))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``gentreat`` hierarchy.

    Args:
        name: Module name (typically __name__); bare names such as
              "demo" are placed under ``gentreat.``

    Returns:
        Configured logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def trace_sink(logger: logging.Logger, protocol: str) -> Callable[[str], None]:
    """Diagnostic sink that writes evaluation trace lines to ``logger`` at DEBUG."""
    def sink(line: str) -> None:
        logger.debug(line, extra={"protocol": protocol})
    return sink


# Initialize logging on module import
setup_logging()
