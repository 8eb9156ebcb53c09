# src/smart_http/core/http_client.py
from typing import Any, Callable, Optional, TYPE_CHECKING

import requests

from .config import HTTPClientConfig
from .error_handler import ErrorHandler
from .exceptions import ApiError, ConfigurationError, classify_transport_exception
from .lifecycle import RequestLifecycle
from .request import HTTPClientRequest
from .request_builder import PreparedHTTPRequest, RequestBuilder
from .response_handler import ResponseHandler

if TYPE_CHECKING:
    from .logging import HTTPClientLogger


def _is_raw_response_type(result_type: Any) -> bool:
    return isinstance(result_type, type) and issubclass(result_type, requests.Response)


class HTTPClient:
    """
    Синхронный диспетчер запросов на базе requests.

    Каждый вызов send() получает собственную сессию из session_factory и
    закрывает её перед возвратом, поэтому клиент можно разделять между
    потоками.

    Режимы send():
        - result_type=None: проверить статус, вернуть None
        - result_type=requests.Response: вернуть ответ как есть, без проверки статуса
        - любой другой тип: проверить статус и десериализовать тело

    Example:
        >>> with HTTPClient() as client:
        ...     user = client.send(
        ...         HTTPClientRequest(base_uri="https://api.example.com/users/1"),
        ...         User,
        ...     )
    """

    def __init__(
        self,
        config: Optional[HTTPClientConfig] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        logger_name: str = "smart_http.client",
    ):
        """
        Args:
            config: Конфигурация (по умолчанию HTTPClientConfig())
            session_factory: Фабрика сессий (по умолчанию requests.Session с заголовками конфига)
            logger_name: Имя логгера, если в конфиге задано логирование
        """
        self._config = config or HTTPClientConfig()
        self._session_factory = session_factory or self._create_session

        logger_instance: Optional['HTTPClientLogger'] = None
        if self._config.logging:
            from .logging import HTTPClientLogger
            logger_instance = HTTPClientLogger(config=self._config.logging, name=logger_name)
        self._logger = logger_instance

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def config(self) -> HTTPClientConfig:
        return self._config

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()
        if self._config.headers:
            session.headers.update(self._config.headers)
        return session

    def close(self) -> None:
        """Закрыть логгер (сессии живут только внутри send())."""
        if self._logger is not None:
            self._logger.close()

    # ==================== Отправка ====================

    def _transmit(
        self,
        session: requests.Session,
        prepared: PreparedHTTPRequest,
        timeout: float,
    ) -> requests.Response:
        response = session.request(
            method=prepared.method,
            url=prepared.url,
            headers=prepared.merged_headers(),
            data=prepared.content,
            timeout=timeout,
            verify=self._config.verify_ssl,
            allow_redirects=self._config.allow_redirects,
        )
        # Body is read before the session closes
        response.content
        return response

    def send(self, request: HTTPClientRequest, result_type: Any = None) -> Any:
        """
        Отправить запрос.

        Args:
            request: Описание запроса
            result_type: Тип результата (None, requests.Response, FileResponse,
                bytes, pydantic модель, dataclass, List[...], ...)

        Returns:
            None, requests.Response, FileResponse или экземпляр result_type

        Raises:
            ConfigurationError: request is None или некорректное описание запроса
            ApiError: сервер вернул не-2xx статус
            TimeoutError: запрос не уложился в таймаут (ApiError со статусом 408)
            ConnectionError: не удалось соединиться
            InvalidResponseError: тело успешного ответа не соответствует result_type
        """
        if request is None:
            raise ConfigurationError("request is required")

        prepared = RequestBuilder.build(request)
        timeout = self._config.resolve_timeout(request.timeout)

        with RequestLifecycle(self._logger, prepared, timeout) as lifecycle:
            try:
                with self._session_factory() as session:
                    response = self._transmit(session, prepared, timeout)
            except requests.exceptions.RequestException as e:
                error = classify_transport_exception(e, prepared.url, timeout)
                lifecycle.failed(error)
                raise error from e

            if _is_raw_response_type(result_type):
                lifecycle.completed(response.status_code)
                return response

            try:
                ErrorHandler.ensure_success(response)
            except ApiError as e:
                lifecycle.failed(e)
                raise

            lifecycle.completed(response.status_code)

            if result_type is None:
                return None

            return ResponseHandler.read_content(response, result_type)
