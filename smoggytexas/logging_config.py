"""Logging configuration for smoggytexas"""

import logging
import sys
import time

LOGGER_NAME = "smoggytexas"


class MillisecondFormatter(logging.Formatter):
    """Custom formatter that includes milliseconds in timestamps"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format time with milliseconds"""
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt.replace('.%f', ''), ct)
            return f"{s}.{int(record.msecs):03d}"
        else:
            t = time.strftime("%Y-%m-%d %H:%M:%S", ct)
            return f"{t}.{int(record.msecs):03d}"


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None
) -> logging.Logger:
    """
    Set up logging configuration

    Console output goes to stderr so the price report on stdout stays
    machine-readable.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(MillisecondFormatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)
        # The file always receives debug detail
        logger.setLevel(logging.DEBUG)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance

    Args:
        name: Logger name (defaults to main app logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
