"""Utility modules for Mookuauhau."""

from mookuauhau.utils.exceptions import (
    ConfigurationError,
    DatasetError,
    MookuauhauError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from mookuauhau.utils.logger import configure_logging, get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "configure_logging",
    # Exceptions
    "MookuauhauError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "DatasetError",
    "ConfigurationError",
]
