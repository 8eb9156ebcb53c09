"""
Logging system for Smart HTTP Client.

Example:
    >>> from smart_http.core.logging import HTTPClientLogger, LoggingConfig
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="colored")
    >>> logger = HTTPClientLogger(config)
    >>> logger.info("Request started", method="GET", url="https://api.com")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import HTTPClientLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "HTTPClientLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
