"""Smart HTTP Client - declarative outbound HTTP request pipeline."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.http_client import HTTPClient
from .async_client import AsyncHTTPClient
from .core.config import HTTPClientConfig
from .core.env_config import load_from_env
from .core.logging import LoggingConfig
from .core.auth import AuthenticationMethod, Authenticator
from .core.models import FileResponse, Problem
from .core.request import HTTPClientRequest
from .core.query import add_query_param, add_query_string, parse_nullable_query, parse_query
from .core.exceptions import (
    HTTPClientException,
    ApiError,
    TimeoutError,
    ConnectionError,
    InvalidResponseError,
    ConfigurationError,
)

# Library logging is silent until the application configures the package logger
logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = version("smart-http-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Dispatchers
    "HTTPClient",
    "AsyncHTTPClient",

    # Config
    "HTTPClientConfig",
    "LoggingConfig",
    "load_from_env",

    # Request / response models
    "HTTPClientRequest",
    "AuthenticationMethod",
    "Authenticator",
    "FileResponse",
    "Problem",

    # Query codec
    "add_query_param",
    "add_query_string",
    "parse_query",
    "parse_nullable_query",

    # Exceptions
    "HTTPClientException",
    "ApiError",
    "TimeoutError",
    "ConnectionError",
    "InvalidResponseError",
    "ConfigurationError",
]
