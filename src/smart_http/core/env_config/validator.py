"""
Pydantic settings model for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmartHTTPSettings(BaseSettings):
    """
    Настройки клиента из переменных окружения.

    Reads from:
    1. Environment variables (SMART_HTTP_*)
    2. .env file
    3. Defaults

    Example .env file:
        SMART_HTTP_DEFAULT_TIMEOUT=30
        SMART_HTTP_VERIFY_SSL=true
        SMART_HTTP_LOG_ENABLED=true
        SMART_HTTP_LOG_LEVEL=DEBUG
        SMART_HTTP_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix='SMART_HTTP_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    default_timeout: float = Field(default=100.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True)
    allow_redirects: bool = Field(default=True)

    # Logging
    log_enabled: bool = Field(default=False, description="Create a logger for the client")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_correlation_id: bool = Field(default=True)

    @model_validator(mode='after')
    def validate_log_file(self) -> 'SmartHTTPSettings':
        """file_path обязателен, если включено логирование в файл."""
        if self.log_enabled and self.log_enable_file and not self.log_file_path:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return self
