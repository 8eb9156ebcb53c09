"""
Конфигурация Smart HTTP Client.

Конфиг immutable (frozen dataclass), поэтому один экземпляр можно
разделять между потоками и задачами.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_TIMEOUT = 100.0

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """
    Convert mapping to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-API-Key": "secret"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


def _seconds(timeout: Union[int, float, timedelta]) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


@dataclass(frozen=True)
class HTTPClientConfig:
    """
    Главная конфигурация HTTPClient и AsyncHTTPClient.

    Args:
        default_timeout: Таймаут запроса (сек), если у запроса нет своего
        headers: Заголовки по умолчанию для каждого запроса
        verify_ssl: Проверять SSL сертификаты
        allow_redirects: Следовать редиректам
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = HTTPClientConfig()
        >>> config = HTTPClientConfig.create(timeout=30, headers={"User-Agent": "svc/1.0"})
    """
    default_timeout: float = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    verify_ssl: bool = True
    allow_redirects: bool = True
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и заморозка заголовков."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

        timeout = _seconds(self.default_timeout)
        if timeout <= 0:
            raise ConfigurationError("default_timeout must be positive")
        object.__setattr__(self, 'default_timeout', timeout)

    @classmethod
    def create(
        cls,
        timeout: Union[int, float, timedelta] = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        verify_ssl: bool = True,
        allow_redirects: bool = True,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'HTTPClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            timeout: Таймаут по умолчанию (секунды или timedelta)
            headers: Заголовки
            verify_ssl: Проверять SSL
            allow_redirects: Следовать редиректам
            logging: Конфигурация логирования (None = отключить логирование)

        Examples:
            >>> config = HTTPClientConfig.create(timeout=60)
            >>> config = HTTPClientConfig.create(timeout=timedelta(minutes=2), verify_ssl=False)
        """
        return cls(
            default_timeout=_seconds(timeout),
            headers=headers or {},
            verify_ssl=verify_ssl,
            allow_redirects=allow_redirects,
            logging=logging,
        )

    def with_timeout(self, timeout: Union[int, float, timedelta]) -> 'HTTPClientConfig':
        """
        Создать новый конфиг с изменённым таймаутом.

        Example:
            >>> new_config = config.with_timeout(60)
        """
        return replace(self, default_timeout=_seconds(timeout))

    def with_headers(self, headers: Dict[str, str]) -> 'HTTPClientConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-API-Key": "secret"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def resolve_timeout(self, request_timeout: float) -> float:
        """Таймаут запроса, а если он 0 - таймаут по умолчанию."""
        return request_timeout if request_timeout > 0 else self.default_timeout
