# src/smart_http/async_client.py
"""
Асинхронный диспетчер запросов на базе httpx.

Тот же конвейер, что и у HTTPClient: сборка запроса, отправка,
классификация ошибок, десериализация. Дополнительно поддерживает
кооперативную отмену: asyncio.CancelledError от вызывающего кода
пробрасывается как есть и никогда не превращается в TimeoutError.
"""

import asyncio
from typing import Any, Callable, Optional, TYPE_CHECKING

import httpx

from .core.config import HTTPClientConfig
from .core.error_handler import ErrorHandler
from .core.exceptions import (
    ApiError,
    ConfigurationError,
    TimeoutError,
    classify_transport_exception,
)
from .core.lifecycle import RequestLifecycle
from .core.request import HTTPClientRequest
from .core.request_builder import PreparedHTTPRequest, RequestBuilder
from .core.response_handler import ResponseHandler

if TYPE_CHECKING:
    from .core.logging import HTTPClientLogger


def _is_raw_response_type(result_type: Any) -> bool:
    return isinstance(result_type, type) and issubclass(result_type, httpx.Response)


class AsyncHTTPClient:
    """
    Асинхронный диспетчер запросов.

    Каждый вызов send() открывает собственный httpx.AsyncClient из
    client_factory и закрывает его на любом пути выхода.

    Example:
        >>> async with AsyncHTTPClient() as client:
        ...     users = await client.send(
        ...         HTTPClientRequest(base_uri="https://api.example.com/users"),
        ...         List[User],
        ...     )
    """

    def __init__(
        self,
        config: Optional[HTTPClientConfig] = None,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
        logger_name: str = "smart_http.async_client",
    ):
        """
        Args:
            config: Конфигурация (по умолчанию HTTPClientConfig())
            client_factory: Фабрика httpx.AsyncClient
            logger_name: Имя логгера, если в конфиге задано логирование
        """
        self._config = config or HTTPClientConfig()
        self._client_factory = client_factory or self._create_client

        logger_instance: Optional['HTTPClientLogger'] = None
        if self._config.logging:
            from .core.logging import HTTPClientLogger
            logger_instance = HTTPClientLogger(config=self._config.logging, name=logger_name)
        self._logger = logger_instance

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def config(self) -> HTTPClientConfig:
        return self._config

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=dict(self._config.headers),
            verify=self._config.verify_ssl,
            follow_redirects=self._config.allow_redirects,
        )

    async def close(self) -> None:
        """Закрыть логгер."""
        if self._logger is not None:
            self._logger.close()

    # ==================== Отправка ====================

    async def _transmit(
        self,
        client: httpx.AsyncClient,
        prepared: PreparedHTTPRequest,
        timeout: float,
    ) -> httpx.Response:
        # Non-streaming request: the body is fully read before returning
        return await client.request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
            timeout=timeout,
        )

    async def _dispatch(self, prepared: PreparedHTTPRequest, timeout: float) -> httpx.Response:
        async with self._client_factory() as client:
            return await asyncio.wait_for(self._transmit(client, prepared, timeout), timeout)

    async def send(self, request: HTTPClientRequest, result_type: Any = None) -> Any:
        """
        Отправить запрос.

        Args:
            request: Описание запроса
            result_type: None, httpx.Response или тип результата

        Returns:
            None, httpx.Response, FileResponse или экземпляр result_type

        Raises:
            ConfigurationError: request is None или некорректное описание запроса
            ApiError: сервер вернул не-2xx статус
            TimeoutError: запрос не уложился в таймаут (статус 408)
            ConnectionError: не удалось соединиться
            InvalidResponseError: тело успешного ответа не соответствует result_type
            asyncio.CancelledError: задача отменена вызывающим кодом
        """
        if request is None:
            raise ConfigurationError("request is required")

        prepared = RequestBuilder.build(request)
        timeout = self._config.resolve_timeout(request.timeout)

        with RequestLifecycle(self._logger, prepared, timeout) as lifecycle:
            try:
                response = await self._dispatch(prepared, timeout)
            except asyncio.CancelledError:
                lifecycle.cancelled()
                raise
            except asyncio.TimeoutError as e:
                error = TimeoutError("Request timed out.", prepared.url, timeout)
                lifecycle.failed(error)
                raise error from e
            except httpx.HTTPError as e:
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
