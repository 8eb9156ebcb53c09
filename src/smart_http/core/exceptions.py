"""
Иерархия исключений Smart HTTP Client.

Классификация:
- ApiError - сервер ответил не-2xx статусом (несёт status_code и detail)
- TimeoutError - запрос не уложился в таймаут (ApiError со статусом 408)
- ConnectionError - транспорт не смог установить соединение
- InvalidResponseError - успешный ответ не удалось десериализовать
- ConfigurationError - ошибка вызывающего кода (фатальная, не ретраится)

Отмена со стороны вызывающего (asyncio.CancelledError) никогда не оборачивается.
"""

from typing import Optional

import httpx
import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPClientException(Exception):
    """Базовое исключение Smart HTTP Client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ApiError(HTTPClientException):
    """
    Сервер вернул неуспешный HTTP статус.

    Args:
        detail: Человекочитаемое описание ошибки
        status_code: HTTP статус ответа
        url: URL запроса (опционально)

    Examples:
        >>> err = ApiError("not found", 404)
        >>> err.status_code, str(err)
        (404, 'not found')
    """

    def __init__(self, detail: str, status_code: int, url: Optional[str] = None):
        self.detail = detail
        self.status_code = status_code
        self.url = url
        super().__init__(detail)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, detail={self.detail!r})"

class TimeoutError(ApiError):
    """
    Таймаут запроса.

    Всегда несёт статус 408 (Request Timeout), чтобы вызывающий код мог
    обрабатывать его как обычный ApiError.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (сек)
    """

    STATUS_CODE = 408

    def __init__(
        self,
        message: str = "Request timed out.",
        url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.timeout = timeout

        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"

        super().__init__(msg, self.STATUS_CODE, url)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ И ОТВЕТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConnectionError(HTTPClientException):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - DNS resolution failed
    - Network unreachable
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class InvalidResponseError(HTTPClientException):
    """
    Невалидный успешный ответ.

    Примеры:
    - Битый JSON
    - JSON не соответствует запрошенному типу
    - Файловый ответ, когда ожидался другой тип
    """
    pass

class ConfigurationError(HTTPClientException, ValueError):
    """Ошибка конфигурации или нарушение контракта вызывающим кодом."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_transport_exception(
    exc: Exception,
    url: str,
    timeout: Optional[float] = None
) -> HTTPClientException:
    """
    Конвертировать исключения requests/httpx в наши исключения.

    Args:
        exc: Исключение транспорта
        url: URL запроса
        timeout: Использованный таймаут (для сообщения)

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.Timeout()
        >>> our_exc = classify_transport_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.status_code == 408
    """
    if isinstance(exc, HTTPClientException):
        return exc

    if isinstance(exc, (requests.exceptions.Timeout, httpx.TimeoutException)):
        return TimeoutError("Request timed out.", url, timeout)

    elif isinstance(exc, (requests.exceptions.ConnectionError, httpx.ConnectError, httpx.NetworkError)):
        return ConnectionError(f"Connection error: {exc}", url)

    elif isinstance(exc, (requests.exceptions.RequestException, httpx.HTTPError)):
        return HTTPClientException(f"Request failed: {exc}")

    else:
        # Неизвестная ошибка - оборачиваем
        return HTTPClientException(str(exc))
