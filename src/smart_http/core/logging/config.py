"""
Logging configuration for Smart HTTP Client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Настройки логирования клиента.

    Attributes:
        level: Минимальный уровень
        format: json, text или colored
        enable_console: Писать в stdout
        enable_file: Писать в файл с ротацией
        file_path: Путь к файлу (обязателен при enable_file=True)
        max_bytes: Размер файла до ротации
        backup_count: Сколько старых файлов хранить
        enable_correlation_id: Добавлять correlation_id к каждой записи
        extra_fields: Статические поля для каждой записи (service, env...)
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_correlation_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.level, LogLevel):
            object.__setattr__(self, "level", LogLevel(str(self.level).upper()))
        if not isinstance(self.format, LogFormat):
            object.__setattr__(self, "format", LogFormat(str(self.format).lower()))
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @classmethod
    def create(
        cls,
        level: Union[str, LogLevel] = "INFO",
        format: Union[str, LogFormat] = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_correlation_id: bool = True,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Build a config from plain strings.

        Example:
            >>> LoggingConfig.create(level="debug", format="json")
        """
        return cls(
            level=level,
            format=format,
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            enable_correlation_id=enable_correlation_id,
            extra_fields=dict(extra_fields or {}),
        )
