"""
Structured logger used by the dispatchers.
"""

import logging
from typing import Any, List, Optional

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class HTTPClientLogger:
    """
    Обёртка над именованным stdlib логгером.

    Поля, переданные как ``**kwargs``, проходят через mask_sensitive_data
    и попадают в запись через ``extra``.

    Example:
        >>> logger = HTTPClientLogger(LoggingConfig.create(level="DEBUG", format="json"))
        >>> logger.info("Request completed", method="GET", status_code=200)
        >>> logger.close()
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "smart_http"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = getattr(logging, self.config.level.value)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        # Reinitialising with the same name replaces the handlers
        for handler in self._logger.handlers[:]:
            self._logger.removeHandler(handler)
            handler.close()

        filters: List[logging.Filter] = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters,
            ))

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    def _log(self, level: int, message: str, fields: dict, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR with the current traceback (call from an except block)."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close every handler.

        Idempotent: repeated calls do nothing.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            try:
                handler.flush()
                handler.close()
            except (OSError, ValueError):
                pass
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
