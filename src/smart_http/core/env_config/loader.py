"""
Build HTTPClientConfig from environment variables and .env files.
"""

from typing import Any, Optional

from pydantic import ValidationError

from ..config import HTTPClientConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .validator import SmartHTTPSettings


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> SmartHTTPSettings:
    """
    Прочитать и провалидировать настройки.

    Raises:
        ConfigurationError: значения из окружения не проходят валидацию
    """
    try:
        if env_file is None:
            return SmartHTTPSettings(**overrides)
        return SmartHTTPSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid SMART_HTTP_* settings: {e}") from e


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> HTTPClientConfig:
    """
    Load HTTPClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (field names without the prefix)
    2. Environment variables (SMART_HTTP_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: Explicit overrides, e.g. ``default_timeout=5``

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.production", log_enabled=True)
    """
    settings = load_settings(env_file, **overrides)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
            enable_correlation_id=settings.log_enable_correlation_id,
        )

    return HTTPClientConfig(
        default_timeout=settings.default_timeout,
        verify_ssl=settings.verify_ssl,
        allow_redirects=settings.allow_redirects,
        logging=logging_config,
    )
