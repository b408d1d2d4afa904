"""Application configuration settings.

Provides settings for the database, Redis, realtime channel, exchange
rates, logging, and API behavior.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational backend settings."""

    url: str = Field(
        default="postgresql+asyncpg://localhost:5432/pricecompare",
        description="SQLAlchemy async connection URL",
    )
    pool_size: int = Field(default=10, description="Persistent connections in the pool")
    max_overflow: int = Field(default=20, description="Connections allowed beyond pool_size")
    echo: bool = Field(default=False, description="Log emitted SQL")

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        extra="ignore",
    )


class CacheSettings(BaseSettings):
    """Redis settings."""

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    redis_max_connections: int = Field(
        default=20,
        description="Maximum number of Redis connections",
    )
    price_channel: str = Field(
        default="ai_model_prices:insert",
        description="Pub/sub channel carrying model price insert events",
    )

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        extra="ignore",
    )


class RealtimeSettings(BaseSettings):
    """Insert subscription settings."""

    reconnect_attempts: int = Field(
        default=5,
        description="Reconnect attempts before the subscription fails closed",
    )
    reconnect_min_wait: float = Field(default=1.0, description="Minimum backoff (seconds)")
    reconnect_max_wait: float = Field(default=30.0, description="Maximum backoff (seconds)")
    poll_timeout: float = Field(
        default=1.0,
        description="Seconds to wait for a message before checking for unsubscribe",
    )

    model_config = SettingsConfigDict(
        env_prefix="REALTIME_",
        env_file=".env",
        extra="ignore",
    )


class ExchangeRateSettings(BaseSettings):
    """Exchange rate provider settings."""

    api_key: str | None = Field(
        default=None,
        description="Provider API key. Static fallback rates are used when unset.",
    )
    base_url: str = Field(
        default="https://api.apilayer.com/exchangerates_data",
        description="Provider base URL",
    )
    timeout_seconds: float = Field(default=10.0, description="Request timeout")

    model_config = SettingsConfigDict(
        env_prefix="EXCHANGE_RATES_",
        env_file=".env",
        extra="ignore",
    )


class LoggingSettings(BaseSettings):
    """Structured logging settings."""

    level: str = Field(default="INFO", description="Minimum log level")
    format: str = Field(default="json", description="Renderer: json or console")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore",
    )


class APISettings(BaseSettings):
    """General API settings."""

    title: str = Field(
        default="AI Model Price Comparison API",
        description="API title",
    )
    description: str = Field(
        default="Compare per-token pricing across AI model providers",
        description="API description",
    )
    version: str = Field(
        default="1.0.0",
        description="API version",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    api_prefix: str = Field(default="/api/v1", description="API route prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings."""
    return CacheSettings()


@lru_cache
def get_realtime_settings() -> RealtimeSettings:
    """Get cached realtime settings."""
    return RealtimeSettings()


@lru_cache
def get_exchange_rate_settings() -> ExchangeRateSettings:
    """Get cached exchange rate settings."""
    return ExchangeRateSettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings."""
    return APISettings()
