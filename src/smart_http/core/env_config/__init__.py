"""
Environment configuration for Smart HTTP Client.

Example:
    >>> from smart_http.core.env_config import load_from_env
    >>> config = load_from_env()
    >>> config = load_from_env(env_file=".env.staging", default_timeout=15)
"""

from .loader import load_from_env, load_settings
from .validator import SmartHTTPSettings

__all__ = [
    "load_from_env",
    "load_settings",
    "SmartHTTPSettings",
]
