"""Utility modules for Smart HTTP Client."""

from .encoding import base64_decode, base64_encode
from .serialization import default_value, from_json, to_json_bytes, to_jsonable
from .sanitizer import mask_sensitive_data, mask_url, mask_headers

__all__ = [
    'base64_encode',
    'base64_decode',
    'default_value',
    'from_json',
    'to_json_bytes',
    'to_jsonable',
    'mask_sensitive_data',
    'mask_url',
    'mask_headers',
]
