"""
Unit tests for settings configuration

Tests YAML config loading for the REST transport and env overrides.
"""

import pytest

from config.settings import Settings, get_settings


@pytest.mark.unit
class TestRestAPISettings:
    """Test REST API configuration settings"""

    def test_defaults_from_bundled_yaml(self):
        """Test values load from config/providers/market_data.yaml"""
        settings = get_settings()

        assert settings.REST_API_BASE_URL == "https://api.exchange.coinbase.com"
        assert settings.REST_API_TIMEOUT_MS == 10000
        assert settings.REST_API_ENABLE_RATE_LIMIT is True
        assert settings.REST_API_MAX_RETRIES == 3

    def test_retry_backoff_types(self):
        """Test retry settings are numeric and ordered"""
        settings = get_settings()

        assert isinstance(settings.REST_API_RETRY_BACKOFF_SECONDS, float)
        assert isinstance(settings.REST_API_RETRY_MAX_BACKOFF_SECONDS, float)
        assert settings.REST_API_RETRY_BACKOFF_SECONDS <= settings.REST_API_RETRY_MAX_BACKOFF_SECONDS

    def test_custom_yaml_path(self, tmp_path):
        """Test a different YAML file can be supplied"""
        config_file = tmp_path / "market_data.yaml"
        config_file.write_text(
            "coinbase:\n"
            "  rest:\n"
            "    base_url: https://api-public.sandbox.exchange.coinbase.com\n"
            "    timeout_ms: 2500\n"
            "    retry:\n"
            "      max_attempts: 5\n"
        )

        settings = Settings(MARKET_DATA_CONFIG_PATH=str(config_file))

        assert settings.REST_API_BASE_URL == "https://api-public.sandbox.exchange.coinbase.com"
        assert settings.REST_API_TIMEOUT_MS == 2500
        assert settings.REST_API_MAX_RETRIES == 5
        # Unspecified keys fall back to defaults
        assert settings.REST_API_ENABLE_RATE_LIMIT is True

    def test_missing_yaml_uses_defaults(self, tmp_path):
        """Test an absent YAML file falls back to built-in defaults"""
        settings = Settings(MARKET_DATA_CONFIG_PATH=str(tmp_path / "missing.yaml"))

        assert settings.REST_API_BASE_URL == "https://api.exchange.coinbase.com"
        assert settings.REST_API_MAX_RETRIES == 3

    def test_env_base_url_override(self, monkeypatch):
        """Test COINBASE_API_URL takes precedence over YAML"""
        monkeypatch.setenv("COINBASE_API_URL", "http://localhost:8080")

        assert get_settings().REST_API_BASE_URL == "http://localhost:8080"

    def test_get_settings_is_singleton(self):
        """Test get_settings() caches the instance"""
        assert get_settings() is get_settings()
