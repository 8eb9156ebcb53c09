"""
Console and rotating-file handlers.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional


def _configure(handler: logging.Handler, level: int, formatter: logging.Formatter,
               filters: Optional[Iterable[logging.Filter]]) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    for log_filter in filters or ():
        handler.addFilter(log_filter)


def create_console_handler(
    level: int,
    formatter: logging.Formatter,
    filters: Optional[Iterable[logging.Filter]] = None
) -> logging.StreamHandler:
    """Handler на stdout."""
    handler = logging.StreamHandler(sys.stdout)
    _configure(handler, level, formatter, filters)
    return handler


def create_file_handler(
    file_path: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    filters: Optional[Iterable[logging.Filter]] = None
) -> RotatingFileHandler:
    """
    Файловый handler с ротацией по размеру.

    Каталог для файла создаётся при необходимости.

    File rotation:
        client.log    <- current
        client.log.1  <- previous
        ...
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    _configure(handler, level, formatter, filters)
    return handler
