"""
Tests for AsyncHTTPClient.send() using respx mocks.
"""

import asyncio
import json
import logging
from typing import List, Optional

import httpx
import pytest
import respx
from pydantic import BaseModel

from src.smart_http.async_client import AsyncHTTPClient
from src.smart_http.core.auth import Authenticator
from src.smart_http.core.config import HTTPClientConfig
from src.smart_http.core.exceptions import (
    ApiError,
    ConfigurationError,
    ConnectionError,
    HTTPClientException,
    InvalidResponseError,
    TimeoutError,
)
from src.smart_http.core.logging.filters import get_correlation_id
from src.smart_http.core.models import FileResponse
from src.smart_http.core.request import HTTPClientRequest

BASE_URL = "https://api.test.com"


class User(BaseModel):
    id: int
    name: str
    email: Optional[str] = None


class SlowTransport(httpx.AsyncBaseTransport):
    """Transport that never answers in time."""

    def __init__(self, delay: float = 10.0):
        self.delay = delay
        self.started = asyncio.Event()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.started.set()
        await asyncio.sleep(self.delay)
        return httpx.Response(200, json={}, request=request)


class TestAsyncResults:
    """Typed, raw, file and void results."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_typed_result(self):
        respx.get(f"{BASE_URL}/users").mock(
            return_value=httpx.Response(200, json=[{"ID": 1, "NAME": "alice"}])
        )

        async with AsyncHTTPClient() as client:
            users = await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/users"), List[User])

        assert users == [User(id=1, name="alice")]

    @respx.mock
    @pytest.mark.asyncio
    async def test_raw_response_skips_classification(self):
        respx.get(f"{BASE_URL}/broken").mock(return_value=httpx.Response(502, text="bad gateway"))

        async with AsyncHTTPClient() as client:
            response = await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/broken"), httpx.Response)

        assert response.status_code == 502
        assert response.text == "bad gateway"

    @respx.mock
    @pytest.mark.asyncio
    async def test_file_result(self):
        respx.get(f"{BASE_URL}/export").mock(return_value=httpx.Response(
            200,
            content=b"a,b\n1,2\n",
            headers={"Content-Type": "text/csv", "Content-Disposition": "attachment; filename=export.csv"},
        ))

        async with AsyncHTTPClient() as client:
            file = await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/export"), FileResponse)

        assert file.file_name == "export.csv"
        assert file.file_content == b"a,b\n1,2\n"

    @respx.mock
    @pytest.mark.asyncio
    async def test_void_result(self):
        respx.post(f"{BASE_URL}/events").mock(return_value=httpx.Response(202))

        async with AsyncHTTPClient() as client:
            result = await client.send(HTTPClientRequest(
                base_uri=f"{BASE_URL}/events", method="POST", request_body={"kind": "ping"},
            ))

        assert result is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_mismatched_body(self):
        respx.get(f"{BASE_URL}/users/1").mock(return_value=httpx.Response(200, json={"id": "x"}))

        async with AsyncHTTPClient() as client:
            with pytest.raises(InvalidResponseError):
                await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/users/1"), User)


class TestAsyncWireFormat:
    """Headers, query and body sent by the async dispatcher."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_request_shape(self):
        route = respx.post(f"{BASE_URL}/users").mock(
            return_value=httpx.Response(201, json={"id": 3, "name": "carol"})
        )
        config = HTTPClientConfig.create(headers={"User-Agent": "svc/2.0"})

        async with AsyncHTTPClient(config=config) as client:
            await client.send(
                HTTPClientRequest(
                    base_uri=f"{BASE_URL}/users?source=import",
                    method="POST",
                    authenticator=Authenticator.basic("user", "pass"),
                    request_body={"name": "carol", "email": None},
                    endpoint_params={"Notify": "yes"},
                ),
                User,
            )

        sent = route.calls.last.request
        assert str(sent.url) == f"{BASE_URL}/users?source=import&notify=yes"
        assert sent.headers["Authorization"] == "Basic dXNlcjpwYXNz"
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["User-Agent"] == "svc/2.0"
        assert sent.headers["Content-Type"] == "application/json"
        assert json.loads(sent.content) == {"name": "carol"}

    @respx.mock
    @pytest.mark.asyncio
    async def test_same_header_in_two_spellings_sent_twice(self):
        route = respx.get(f"{BASE_URL}/tags").mock(return_value=httpx.Response(204))

        async with AsyncHTTPClient() as client:
            await client.send(HTTPClientRequest(
                base_uri=f"{BASE_URL}/tags", headers={"X-Tag": "a", "x-tag": "b"},
            ))

        assert route.calls.last.request.headers.get_list("X-Tag") == ["a", "b"]


class TestAsyncErrors:
    """Error classification in the async path."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_api_error(self):
        respx.get(f"{BASE_URL}/users/9").mock(return_value=httpx.Response(
            404, json={"title": "Not Found", "detail": "user 9 does not exist"},
        ))

        async with AsyncHTTPClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/users/9"), User)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "user 9 does not exist"

    @respx.mock
    @pytest.mark.asyncio
    async def test_transport_timeout(self):
        respx.get(f"{BASE_URL}/slow").mock(side_effect=httpx.ReadTimeout)

        async with AsyncHTTPClient() as client:
            with pytest.raises(TimeoutError) as exc_info:
                await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/slow"))

        assert exc_info.value.status_code == 408

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self):
        respx.get(f"{BASE_URL}/down").mock(side_effect=httpx.ConnectError)

        async with AsyncHTTPClient() as client:
            with pytest.raises(ConnectionError):
                await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/down"))

    @respx.mock
    @pytest.mark.asyncio
    async def test_protocol_error(self):
        respx.get(f"{BASE_URL}/garbled").mock(side_effect=httpx.RemoteProtocolError)

        async with AsyncHTTPClient() as client:
            with pytest.raises(HTTPClientException):
                await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/garbled"))

    @pytest.mark.asyncio
    async def test_none_request(self):
        async with AsyncHTTPClient() as client:
            with pytest.raises(ConfigurationError):
                await client.send(None)


class TestAsyncTimeoutAndCancellation:
    """Whole-send deadline and cooperative cancellation."""

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self, caplog, package_logger):
        caplog.set_level(logging.DEBUG, logger=package_logger)
        transport = SlowTransport()
        client = AsyncHTTPClient(client_factory=lambda: httpx.AsyncClient(transport=transport))

        with pytest.raises(TimeoutError) as exc_info:
            await client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/slow", timeout=0.05))

        assert exc_info.value.status_code == 408
        assert exc_info.value.timeout == 0.05
        assert caplog.records[-1].getMessage() == "Request timed out"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, caplog, package_logger):
        caplog.set_level(logging.DEBUG, logger=package_logger)
        transport = SlowTransport()
        client = AsyncHTTPClient(client_factory=lambda: httpx.AsyncClient(transport=transport))

        task = asyncio.create_task(client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/slow", timeout=30)))
        await transport.started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert caplog.records[-1].getMessage() == "Request cancelled"

    @pytest.mark.asyncio
    async def test_concurrent_sends_have_own_correlation_ids(self, caplog, package_logger):
        caplog.set_level(logging.DEBUG, logger=package_logger)

        def handler(request):
            return httpx.Response(200, json={"seen": get_correlation_id()})

        client = AsyncHTTPClient(
            client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )

        results = await asyncio.gather(*[
            client.send(HTTPClientRequest(base_uri=f"{BASE_URL}/ping/{i}"), dict) for i in range(3)
        ])

        assert len({r["seen"] for r in results}) == 3
        assert get_correlation_id() is None
        completed = {r.correlation_id for r in caplog.records if r.getMessage() == "Request completed"}
        assert completed == {r["seen"] for r in results}
