"""Core Smart HTTP Client модули."""

from .config import HTTPClientConfig, DEFAULT_TIMEOUT
from .exceptions import (
    HTTPClientException,
    ApiError,
    TimeoutError,
    ConnectionError,
    InvalidResponseError,
    ConfigurationError,
    classify_transport_exception,
)
from .auth import AuthenticationMethod, Authenticator, authorization_header
from .models import FileResponse, Problem
from .query import (
    KeyValueAccumulator,
    add_query_param,
    add_query_string,
    parse_nullable_query,
    parse_query,
)
from .request import HTTPClientRequest
from .request_builder import PreparedHTTPRequest, RequestBuilder
from .error_handler import ErrorHandler
from .response_handler import ResponseHandler
from .http_client import HTTPClient

__all__ = [
    "HTTPClientConfig",
    "DEFAULT_TIMEOUT",
    "HTTPClientException",
    "ApiError",
    "TimeoutError",
    "ConnectionError",
    "InvalidResponseError",
    "ConfigurationError",
    "classify_transport_exception",
    "AuthenticationMethod",
    "Authenticator",
    "authorization_header",
    "FileResponse",
    "Problem",
    "KeyValueAccumulator",
    "add_query_param",
    "add_query_string",
    "parse_nullable_query",
    "parse_query",
    "HTTPClientRequest",
    "PreparedHTTPRequest",
    "RequestBuilder",
    "ErrorHandler",
    "ResponseHandler",
    "HTTPClient",
]
