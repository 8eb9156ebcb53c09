# src/smart_http/core/request.py
"""Immutable description of a single outbound HTTP request."""

from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .auth import Authenticator
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class HTTPClientRequest:
    """
    Описание HTTP запроса до его построения.

    Args:
        base_uri: Целевой URI (может уже содержать query и fragment)
        method: HTTP метод
        headers: Дополнительные заголовки
        authenticator: Аутентификация запроса
        content: Готовое тело запроса (bytes или str)
        content_type: Content-Type для ``content``
        timeout: Таймаут в секундах или timedelta (0 = таймаут по умолчанию)
        request_body: Объект, который будет сериализован в JSON
        endpoint_params: Query параметры (mapping или pydantic модель)

    Raises:
        ConfigurationError: пустой base_uri, отрицательный таймаут или
            одновременно заданы ``content`` и ``request_body``

    Examples:
        >>> HTTPClientRequest(
        ...     base_uri="https://api.example.com/users",
        ...     method="POST",
        ...     request_body={"name": "alice"},
        ...     authenticator=Authenticator.bearer("xyz"),
        ... )
    """
    base_uri: str
    method: str = "GET"
    headers: Optional[Mapping[str, str]] = None
    authenticator: Optional[Authenticator] = None
    content: Optional[Union[bytes, str]] = None
    content_type: Optional[str] = None
    timeout: Union[float, timedelta] = 0
    request_body: Any = None
    endpoint_params: Optional[Union[Mapping[str, Any], BaseModel]] = field(default=None)

    def __post_init__(self):
        """Валидация и нормализация."""
        if not self.base_uri:
            raise ConfigurationError("base_uri is required")

        if not self.method:
            raise ConfigurationError("method is required")
        object.__setattr__(self, 'method', self.method.upper())

        if self.headers is not None:
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

        timeout = self.timeout
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        if timeout is None:
            timeout = 0
        if timeout < 0:
            raise ConfigurationError("timeout must be non-negative")
        object.__setattr__(self, 'timeout', float(timeout))

        if self.content is not None and self.request_body is not None:
            raise ConfigurationError(
                "content and request_body are mutually exclusive - set only one of them"
            )

    @property
    def has_timeout(self) -> bool:
        """True если задан собственный таймаут запроса."""
        return self.timeout > 0
