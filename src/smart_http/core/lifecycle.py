# src/smart_http/core/lifecycle.py
"""
Correlation id, timing and log events for a single dispatch.

Shared by HTTPClient and AsyncHTTPClient. Without a configured
HTTPClientLogger the events go to the ``smart_http`` stdlib logger
(NullHandler by default).
"""

import logging
import time
import uuid
from typing import Any, Optional, TYPE_CHECKING

from .exceptions import ApiError, HTTPClientException, TimeoutError
from .logging.filters import clear_correlation_id, set_correlation_id
from .request_builder import PreparedHTTPRequest
from ..utils.sanitizer import mask_sensitive_data, mask_url

if TYPE_CHECKING:
    from .logging import HTTPClientLogger

_module_logger = logging.getLogger(__name__)


class RequestLifecycle:
    """
    Context manager вокруг одной отправки запроса.

    Example:
        >>> with RequestLifecycle(logger, prepared, timeout=30.0) as lifecycle:
        ...     response = session.request(...)
        ...     lifecycle.completed(response.status_code)
    """

    def __init__(
        self,
        logger: Optional['HTTPClientLogger'],
        prepared: PreparedHTTPRequest,
        timeout: float,
    ):
        self._logger = logger
        self.method = prepared.method
        self.url = mask_url(prepared.url)
        self.timeout = timeout
        self.correlation_id = str(uuid.uuid4())
        self._token = None
        self._start = 0.0

    def __enter__(self) -> "RequestLifecycle":
        self._token = set_correlation_id(self.correlation_id)
        self._start = time.monotonic()
        self._emit(logging.DEBUG, "Request started", timeout=self.timeout)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        clear_correlation_id(self._token)
        return False

    @property
    def duration_ms(self) -> float:
        return round((time.monotonic() - self._start) * 1000, 2)

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        fields.update(
            method=self.method,
            url=self.url,
            correlation_id=self.correlation_id,
        )
        if self._logger is not None:
            log_method = getattr(self._logger, logging.getLevelName(level).lower())
            log_method(message, **fields)
        else:
            _module_logger.log(level, message, extra=mask_sensitive_data(fields))

    def completed(self, status_code: int) -> None:
        self._emit(
            logging.INFO,
            "Request completed",
            status_code=status_code,
            duration_ms=self.duration_ms,
        )

    def failed(self, error: HTTPClientException) -> None:
        """Записать ошибку: таймаут как warning, остальное как error."""
        if isinstance(error, TimeoutError):
            self._emit(
                logging.WARNING,
                "Request timed out",
                timeout=self.timeout,
                duration_ms=self.duration_ms,
            )
            return

        self._emit(
            logging.ERROR,
            "Request failed",
            error=str(error),
            error_type=type(error).__name__,
            status_code=error.status_code if isinstance(error, ApiError) else None,
            duration_ms=self.duration_ms,
        )

    def cancelled(self) -> None:
        self._emit(logging.INFO, "Request cancelled", duration_ms=self.duration_ms)
