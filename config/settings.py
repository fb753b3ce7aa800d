"""
Application Settings - Load from YAML configs + .env

Design Philosophy:
- Transport configs (base URL, timeouts, retry policy) → YAML file (public, versioned in git)
- Environment-specific overrides (log level, sandbox URL) → .env / environment

Uses Pydantic for validation and type safety
"""

from pathlib import Path
from typing import Any

from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import get_nested, load_yaml_safe

DEFAULT_MARKET_DATA_CONFIG = Path(__file__).parent / "providers" / "market_data.yaml"


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - REST transport configs → config/providers/market_data.yaml
    - Overrides → .env / environment variables

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.REST_API_BASE_URL)  # From market_data.yaml (or COINBASE_API_URL)
        print(settings.LOG_LEVEL)  # From .env
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    _market_data_config: dict[str, Any] = PrivateAttr(default_factory=dict)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._market_data_config = load_yaml_safe(self.MARKET_DATA_CONFIG_PATH)

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    MARKET_DATA_CONFIG_PATH: str = Field(
        default=str(DEFAULT_MARKET_DATA_CONFIG), description="Path to market_data.yaml"
    )

    # Point the client at the sandbox or a proxy without editing YAML
    COINBASE_API_URL: str | None = Field(default=None)

    # ============================================
    # REST TRANSPORT (from YAML)
    # ============================================
    def _rest(self, key: str, default: Any) -> Any:
        return get_nested(self._market_data_config, f"coinbase.rest.{key}", default)

    @property
    def REST_API_BASE_URL(self) -> str:
        """Exchange REST base URL"""
        if self.COINBASE_API_URL:
            return self.COINBASE_API_URL
        return self._rest("base_url", "https://api.exchange.coinbase.com")

    @property
    def REST_API_TIMEOUT_MS(self) -> int:
        """Per-request timeout in milliseconds"""
        return int(self._rest("timeout_ms", 10000))

    @property
    def REST_API_ENABLE_RATE_LIMIT(self) -> bool:
        """Whether ccxt throttles requests client-side"""
        return bool(self._rest("enable_rate_limit", True))

    @property
    def REST_API_MAX_RETRIES(self) -> int:
        """Total attempts per request for transient failures"""
        return int(self._rest("retry.max_attempts", 3))

    @property
    def REST_API_RETRY_BACKOFF_SECONDS(self) -> float:
        """Delay before the first retry"""
        return float(self._rest("retry.initial_backoff_seconds", 0.5))

    @property
    def REST_API_RETRY_MAX_BACKOFF_SECONDS(self) -> float:
        """Upper bound for a single retry delay"""
        return float(self._rest("retry.max_backoff_seconds", 10.0))


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Example:
        >>> settings = get_settings()
        >>> print(settings.REST_API_BASE_URL)
        https://api.exchange.coinbase.com
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads env and YAML"""
    global _settings_instance
    _settings_instance = None
