"""
Log filters: correlation id and static extra fields.

The correlation id lives in a ContextVar, so every thread and every asyncio
task sees its own value.
"""

import contextvars
import logging
from typing import Any, Dict, Optional

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "smart_http_correlation_id", default=None
)


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """
    Установить correlation id для текущего контекста.

    Returns:
        Token для восстановления предыдущего значения
    """
    return _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def clear_correlation_id(token: Optional[contextvars.Token] = None) -> None:
    """Сбросить correlation id (или вернуть значение, сохранённое в token)."""
    if token is not None:
        _correlation_id.reset(token)
    else:
        _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to records logged inside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id and not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service name, environment...) to every record.

    Fields already present on the record are left alone.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
