# src/smart_http/core/request_builder.py
"""
Превращение HTTPClientRequest в готовый к отправке запрос.

Сборка не зависит от транспорта: результат (PreparedHTTPRequest) одинаково
отправляется через requests и через httpx.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .auth import authorization_header
from .exceptions import ConfigurationError
from .query import add_query_string
from .request import HTTPClientRequest
from ..utils.serialization import to_json_bytes

JSON_MEDIA_TYPE = "application/json"

Header = Tuple[str, str]


@dataclass(frozen=True)
class PreparedHTTPRequest:
    """
    Запрос, готовый к передаче транспорту.

    Attributes:
        method: HTTP метод
        url: Полный URL с query параметрами
        headers: Заголовки в порядке добавления (имена могут повторяться)
        content: Тело запроса или None
    """
    method: str
    url: str
    headers: List[Header] = field(default_factory=list)
    content: Optional[bytes] = None

    def get_header(self, name: str) -> Optional[str]:
        """Первое значение заголовка (без учёта регистра)."""
        folded = name.lower()
        for key, value in self.headers:
            if key.lower() == folded:
                return value
        return None

    def merged_headers(self) -> Dict[str, str]:
        """
        Заголовки как dict: повторяющиеся имена склеиваются через запятую.

        Example:
            >>> PreparedHTTPRequest("GET", "/", [("X-Tag", "a"), ("x-tag", "b")]).merged_headers()
            {'X-Tag': 'a, b'}
        """
        merged: Dict[str, Tuple[str, List[str]]] = {}
        for key, value in self.headers:
            entry = merged.setdefault(key.lower(), (key, []))
            entry[1].append(value)
        return {key: ", ".join(values) for key, values in merged.values()}


def _param_name(name: str) -> str:
    return name[:1].lower() + name[1:]


def _param_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return str(value)


def query_pairs(params: Union[Mapping[str, Any], BaseModel]) -> List[Header]:
    """
    Преобразовать endpoint_params в список пар для query строки.

    Первая буква каждого ключа переводится в нижний регистр, None и пустые
    строки пропускаются, list/tuple дают повторяющийся ключ.

    Example:
        >>> query_pairs({"Page": 2, "Tags": ["a", "b"], "Filter": None})
        [('page', '2'), ('tags', 'a'), ('tags', 'b')]
    """
    if isinstance(params, BaseModel):
        params = params.model_dump(by_alias=True)
    elif not isinstance(params, Mapping):
        raise ConfigurationError(
            f"endpoint_params must be a mapping or a pydantic model, got {type(params).__name__}"
        )

    pairs: List[Header] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            text = _param_value(item)
            if text == "":
                continue
            pairs.append((_param_name(key), text))
    return pairs


class RequestBuilder:
    """
    Сборщик транспортных запросов.

    Порядок заголовков: ``Accept: application/json``, затем заголовки
    запроса (дописываются, не заменяют), затем Authorization. Authorization
    всегда один: значение от authenticator заменяет переданное вручную.
    """

    @staticmethod
    def build_url(request: HTTPClientRequest) -> str:
        """base_uri + query из endpoint_params."""
        if request.endpoint_params is None:
            return request.base_uri

        pairs = query_pairs(request.endpoint_params)
        if not pairs:
            return request.base_uri
        return add_query_string(request.base_uri, pairs)

    @staticmethod
    def build_headers(request: HTTPClientRequest) -> List[Header]:
        headers: List[Header] = [("Accept", JSON_MEDIA_TYPE)]

        authorization = authorization_header(request.authenticator)

        for name, value in (request.headers or {}).items():
            if authorization is not None and name.lower() == "authorization":
                continue
            headers.append((name, value))

        if authorization is not None:
            headers.append(("Authorization", authorization))

        return headers

    @staticmethod
    def build_content(request: HTTPClientRequest) -> Tuple[Optional[bytes], Optional[str]]:
        """Тело запроса и его Content-Type."""
        if request.content is not None:
            content = request.content
            if isinstance(content, str):
                content = content.encode("utf-8")
            return content, request.content_type

        if request.request_body is not None:
            try:
                return to_json_bytes(request.request_body), JSON_MEDIA_TYPE
            except (PydanticSerializationError, TypeError, ValueError) as e:
                raise ConfigurationError(f"request_body is not JSON serializable: {e}") from e

        return None, None

    @classmethod
    def build(cls, request: HTTPClientRequest) -> PreparedHTTPRequest:
        """
        Собрать транспортный запрос.

        Args:
            request: Описание запроса

        Returns:
            PreparedHTTPRequest

        Raises:
            ConfigurationError: request is None, неизвестная схема аутентификации,
                тело не сериализуется в JSON

        Example:
            >>> prepared = RequestBuilder.build(HTTPClientRequest(
            ...     base_uri="https://api.example.com/users",
            ...     endpoint_params={"Page": 1},
            ...     authenticator=Authenticator.bearer("xyz"),
            ... ))
            >>> prepared.url
            'https://api.example.com/users?page=1'
            >>> prepared.headers
            [('Accept', 'application/json'), ('Authorization', 'Bearer xyz')]
        """
        if request is None:
            raise ConfigurationError("request is required")

        headers = cls.build_headers(request)
        content, content_type = cls.build_content(request)

        if content_type is not None:
            headers = [(k, v) for k, v in headers if k.lower() != "content-type"]
            headers.append(("Content-Type", content_type))

        return PreparedHTTPRequest(
            method=request.method,
            url=cls.build_url(request),
            headers=headers,
            content=content,
        )
