# src/smart_http/core/response_handler.py
"""Чтение тела успешного ответа в запрошенный тип."""

import re
from email.message import Message
from typing import Any, Optional

from .error_handler import JSON_MEDIA_TYPE, media_type
from .exceptions import InvalidResponseError
from .models import FileResponse
from ..utils.serialization import default_value, from_json

# Leading/trailing quotes and other non-alphanumerics (underscore included)
_FILENAME_EDGES = re.compile(r"^[\W_]+|[\W_]+$")

_FILE_RESULT_TYPES = (FileResponse, object, Any)


def trim_file_name(file_name: Optional[str]) -> str:
    """
    Убрать кавычки и прочие не-алфавитно-цифровые символы по краям имени.

    Example:
        >>> trim_file_name('"report.pdf"')
        'report.pdf'
    """
    if not file_name:
        return ""
    return _FILENAME_EDGES.sub("", file_name)


def content_disposition_filename(header_value: str) -> Optional[str]:
    """
    Имя файла из Content-Disposition.

    Поддерживает ``filename="..."`` и ``filename*=UTF-8''...`` (RFC 2231).
    """
    message = Message()
    message["Content-Disposition"] = header_value
    return message.get_filename()


class ResponseHandler:
    """
    Десериализация ответа.

    Порядок проверок:
    1. ``application/json`` - JSON в result_type
    2. есть Content-Disposition - FileResponse
    3. иначе - значение по умолчанию для result_type
    """

    @staticmethod
    def is_json(response: Any) -> bool:
        return media_type(response) == JSON_MEDIA_TYPE

    @staticmethod
    def has_content_disposition(response: Any) -> bool:
        return response.headers.get("Content-Disposition") is not None

    @staticmethod
    def read_file(response: Any) -> FileResponse:
        """Собрать FileResponse из заголовка и байтов ответа."""
        file_name = content_disposition_filename(response.headers["Content-Disposition"])
        return FileResponse(file_name=trim_file_name(file_name), file_content=response.content)

    @classmethod
    def read_content(cls, response: Any, result_type: Any) -> Any:
        """
        Прочитать тело успешного ответа.

        Args:
            response: requests.Response или httpx.Response
            result_type: Запрошенный тип результата

        Returns:
            Экземпляр result_type, FileResponse или bytes файла

        Raises:
            InvalidResponseError: невалидный JSON или файл при несовместимом result_type
        """
        if cls.is_json(response):
            return from_json(response.content, result_type)

        if cls.has_content_disposition(response):
            file = cls.read_file(response)

            if result_type in _FILE_RESULT_TYPES:
                return file
            if result_type is bytes:
                return file.file_content

            raise InvalidResponseError(
                f"Response is a file ({file.file_name!r}) but "
                f"{getattr(result_type, '__name__', result_type)} was requested"
            )

        return default_value(result_type)
