"""
Tests for SMART_HTTP_* environment configuration.
"""

import os

import pytest

from src.smart_http.core.env_config import SmartHTTPSettings, load_from_env, load_settings
from src.smart_http.core.exceptions import ConfigurationError
from src.smart_http.core.logging.config import LogFormat, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No SMART_HTTP_* variables and no stray .env in the working directory."""
    for key in list(os.environ):
        if key.startswith("SMART_HTTP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class TestSmartHTTPSettings:
    """Settings model."""

    def test_defaults(self):
        settings = SmartHTTPSettings()
        assert settings.default_timeout == 100.0
        assert settings.verify_ssl is True
        assert settings.log_enabled is False

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("SMART_HTTP_DEFAULT_TIMEOUT", "12.5")
        monkeypatch.setenv("SMART_HTTP_VERIFY_SSL", "false")
        monkeypatch.setenv("smart_http_allow_redirects", "0")

        settings = load_settings()

        assert settings.default_timeout == 12.5
        assert settings.verify_ssl is False
        assert settings.allow_redirects is False

    def test_file_logging_requires_path(self):
        with pytest.raises(ConfigurationError, match="log_file_path"):
            load_settings(log_enabled=True, log_enable_file=True)


class TestLoadFromEnv:
    """HTTPClientConfig assembly."""

    def test_without_logging(self):
        config = load_from_env()
        assert config.default_timeout == 100.0
        assert config.logging is None

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env.test"
        env_file.write_text(
            "SMART_HTTP_DEFAULT_TIMEOUT=7\n"
            "SMART_HTTP_LOG_ENABLED=true\n"
            "SMART_HTTP_LOG_LEVEL=DEBUG\n"
            "SMART_HTTP_LOG_FORMAT=json\n",
            encoding="utf-8",
        )

        config = load_from_env(env_file=str(env_file))

        assert config.default_timeout == 7.0
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON

    def test_default_dotenv_in_working_directory(self, tmp_path):
        (tmp_path / ".env").write_text("SMART_HTTP_DEFAULT_TIMEOUT=9\n", encoding="utf-8")
        assert load_from_env().default_timeout == 9.0

    def test_environment_beats_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env.test"
        env_file.write_text("SMART_HTTP_DEFAULT_TIMEOUT=7\n", encoding="utf-8")
        monkeypatch.setenv("SMART_HTTP_DEFAULT_TIMEOUT", "3")

        assert load_from_env(env_file=str(env_file)).default_timeout == 3.0

    def test_overrides_beat_environment(self, monkeypatch):
        monkeypatch.setenv("SMART_HTTP_DEFAULT_TIMEOUT", "3")
        assert load_from_env(default_timeout=42).default_timeout == 42.0

    @pytest.mark.parametrize("value", ["0", "-5", "soon"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("SMART_HTTP_DEFAULT_TIMEOUT", value)
        with pytest.raises(ConfigurationError):
            load_from_env()

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "client.log"
        config = load_from_env(log_enabled=True, log_enable_file=True, log_file_path=str(log_file))

        assert config.logging.enable_file is True
        assert config.logging.file_path == str(log_file)
