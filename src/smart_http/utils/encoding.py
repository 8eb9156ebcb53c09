# src/smart_http/utils/encoding.py
"""Base64 helpers (UTF-8 text in, UTF-8 text out)."""

import base64


def base64_encode(text: str) -> str:
    """
    Закодировать строку в Base64.

    Example:
        >>> base64_encode("user:pass")
        'dXNlcjpwYXNz'
    """
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(encoded: str) -> str:
    """
    Декодировать Base64 строку.

    Raises:
        binascii.Error: если строка не является корректным Base64
    """
    return base64.b64decode(encoded, validate=True).decode("utf-8")
