# src/smart_http/core/auth.py
"""
Authentication descriptors and Authorization header construction.

Each AuthenticationMethod has exactly one handler; the scheme token sent
on the wire is the enum value itself ("Basic", "Bearer", "ApiKey").
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from .exceptions import ConfigurationError
from ..utils.encoding import base64_encode


class AuthenticationMethod(str, Enum):
    """Поддерживаемые схемы аутентификации."""
    NONE = "None"
    BASIC = "Basic"
    BEARER = "Bearer"
    API_KEY = "ApiKey"


@dataclass(frozen=True)
class Authenticator:
    """
    Описание аутентификации для одного запроса.

    Создаётся вызывающим кодом, только для чтения, нигде не сохраняется.

    Examples:
        >>> Authenticator.bearer("xyz")
        >>> Authenticator.basic("alice", "s3cret")
        >>> Authenticator.api_key_auth("key-123")
    """
    method: AuthenticationMethod = AuthenticationMethod.NONE
    username: Optional[str] = None
    password: Optional[str] = None
    access_token: Optional[str] = None
    api_key: Optional[str] = None

    def __post_init__(self):
        # Plain scheme names ("Bearer") are accepted
        if not isinstance(self.method, AuthenticationMethod):
            try:
                object.__setattr__(self, "method", AuthenticationMethod(self.method))
            except ValueError:
                # Unknown scheme kept as is: authorization_header raises ConfigurationError for it
                pass

    @classmethod
    def none(cls) -> "Authenticator":
        return cls(method=AuthenticationMethod.NONE)

    @classmethod
    def basic(cls, username: str, password: str) -> "Authenticator":
        return cls(method=AuthenticationMethod.BASIC, username=username, password=password)

    @classmethod
    def bearer(cls, token: str) -> "Authenticator":
        return cls(method=AuthenticationMethod.BEARER, access_token=token)

    @classmethod
    def api_key_auth(cls, key: str) -> "Authenticator":
        return cls(method=AuthenticationMethod.API_KEY, api_key=key)

    def __repr__(self) -> str:
        # Credentials never end up in reprs/logs
        method = getattr(self.method, "value", self.method)
        return f"Authenticator(method={method})"


def _require(value: Optional[str], name: str, method: AuthenticationMethod) -> str:
    if value is None:
        raise ConfigurationError(f"{method.value} authentication requires '{name}'")
    return value


def _basic(auth: Authenticator) -> str:
    username = _require(auth.username, "username", auth.method)
    password = _require(auth.password, "password", auth.method)
    return f"{auth.method.value} {base64_encode(f'{username}:{password}')}"


def _bearer(auth: Authenticator) -> str:
    return f"{auth.method.value} {_require(auth.access_token, 'access_token', auth.method)}"


def _api_key(auth: Authenticator) -> str:
    return f"{auth.method.value} {_require(auth.api_key, 'api_key', auth.method)}"


_SCHEME_HANDLERS: Dict[AuthenticationMethod, Callable[[Authenticator], Optional[str]]] = {
    AuthenticationMethod.NONE: lambda auth: None,
    AuthenticationMethod.BASIC: _basic,
    AuthenticationMethod.BEARER: _bearer,
    AuthenticationMethod.API_KEY: _api_key,
}


def authorization_header(authenticator: Optional[Authenticator]) -> Optional[str]:
    """
    Построить значение заголовка Authorization.

    Args:
        authenticator: Описание аутентификации (None = без аутентификации)

    Returns:
        Значение заголовка или None

    Raises:
        ConfigurationError: неизвестная схема или не хватает учётных данных

    Examples:
        >>> authorization_header(Authenticator.bearer("xyz"))
        'Bearer xyz'
        >>> authorization_header(Authenticator.basic("user", "pass"))
        'Basic dXNlcjpwYXNz'
    """
    if authenticator is None:
        return None

    handler = _SCHEME_HANDLERS.get(authenticator.method)
    if handler is None:
        raise ConfigurationError("Invalid authorization type.")

    return handler(authenticator)
