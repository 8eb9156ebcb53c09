# src/smart_http/core/error_handler.py
"""
Классификация неуспешных ответов и ошибок транспорта.

Работает одинаково с requests.Response и httpx.Response.
"""

from typing import Any, List, Optional

from .exceptions import ApiError, HTTPClientException, InvalidResponseError, classify_transport_exception
from .models import Problem
from ..utils.serialization import coerce, from_json

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"

INVALID_JSON_MESSAGE = "Invalid JSON error format."
UNKNOWN_JSON_MESSAGE = "Unknown error in JSON response."


def media_type(response: Any) -> Optional[str]:
    """Media type ответа без параметров, в нижнем регистре."""
    content_type = response.headers.get("Content-Type")
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


def reason_phrase(response: Any) -> str:
    # httpx: reason_phrase, requests: reason
    reason = getattr(response, "reason_phrase", None)
    if reason is None:
        reason = getattr(response, "reason", None)
    return reason or ""


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class ErrorHandler:
    """Класс для обработки ошибок HTTP запросов"""

    @staticmethod
    def handle_request_exception(error: Exception, url: str, timeout: Optional[float] = None) -> None:
        """
        Преобразовать исключение транспорта в исключение библиотеки и выбросить его.

        Raises:
            TimeoutError, ConnectionError, HTTPClientException
        """
        raise classify_transport_exception(error, url, timeout) from error

    @staticmethod
    def problem_details(body: str) -> str:
        """
        Сообщение из JSON тела ошибки.

        Массив problem-объектов склеивается по ``detail`` через перевод строки,
        одиночный объект считается массивом из одного элемента.

        Examples:
            >>> ErrorHandler.problem_details('[{"detail": "a"}, {"detail": "b"}]')
            'a\\nb'
            >>> ErrorHandler.problem_details('{"title": "Bad", "detail": "oops"}')
            'oops'
            >>> ErrorHandler.problem_details('not json')
            'Invalid JSON error format.'
        """
        try:
            payload = from_json(body, Any)
            if payload is None:
                # Пустое тело или JSON null
                return UNKNOWN_JSON_MESSAGE
            if isinstance(payload, dict):
                payload = [payload]
            problems: List[Problem] = coerce(payload, List[Problem])
        except InvalidResponseError:
            return INVALID_JSON_MESSAGE

        if not problems:
            return UNKNOWN_JSON_MESSAGE

        return "\n".join(problem.detail or "" for problem in problems)

    @classmethod
    def error_message(cls, response: Any) -> str:
        """Текст ошибки по Content-Type ответа."""
        body = response.text or ""
        kind = media_type(response)

        if kind == JSON_MEDIA_TYPE:
            return cls.problem_details(body)

        if kind == TEXT_MEDIA_TYPE:
            return body

        return f"HTTP {response.status_code} {reason_phrase(response)}: {body}"

    @classmethod
    def ensure_success(cls, response: Any) -> None:
        """
        Проверить статус ответа.

        Raises:
            ApiError: статус вне диапазона 200-299
        """
        if response is None:
            raise HTTPClientException("HTTP error occurred but no response object available")

        if is_success(response.status_code):
            return

        raise ApiError(cls.error_message(response), response.status_code, str(response.url))
