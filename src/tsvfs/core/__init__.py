"""Core module exports."""

from tsvfs.core.errors import (
    ConfigurationError,
    EditError,
    ErrorCode,
    TsVfsError,
    VirtualFileError,
)
from tsvfs.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigurationError",
    "EditError",
    "ErrorCode",
    "TsVfsError",
    "VirtualFileError",
    # Logging
    "configure_logging",
    "get_logger",
]
