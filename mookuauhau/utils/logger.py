"""
Logging for Mookuauhau, built on Loguru.

Modules log through get_logger(__name__), which tags every record with the
module name. configure_logging() is called once at startup with the
``logging`` config section; it installs the sinks and routes uvicorn's
standard-library loggers into Loguru so server and query logs share one
stream.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{line} - {message}"
LOG_FILE_NAME = "mookuauhau_{time:YYYY-MM-DD}.log"
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point {line} at the caller, not at the logging module
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(module=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = True,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """
    Replace Loguru's default sink.

    Args:
        level: Minimum level for every sink
        log_to_file: Also write a rotating file under log_dir
        log_dir: Directory for log files, created if missing
        file_rotation: Size or interval at which the file rotates
        file_retention: How long rotated files are kept
        compression: Archive format for rotated files
        serialize: Write the file as JSON lines
    """
    logger.remove()
    logger.configure(extra={"module": "mookuauhau"})

    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if not log_to_file:
        return

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path / LOG_FILE_NAME,
        level=level,
        format=FILE_FORMAT,
        rotation=file_rotation,
        retention=file_retention,
        compression=compression,
        serialize=serialize,
        enqueue=True,
    )


def intercept_server_logging() -> None:
    """Send uvicorn's loggers through Loguru instead of their own handlers."""
    handler = InterceptHandler()
    for name in SERVER_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False


def configure_logging(config) -> None:
    """
    Apply a LoggingConfig section.

    Args:
        config: mookuauhau.config.LoggingConfig
    """
    setup_logging(**config.model_dump())
    intercept_server_logging()


def get_logger(name: str):
    """Logger whose records carry the given module name."""
    return logger.bind(module=name)
