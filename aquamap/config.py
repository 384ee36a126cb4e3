"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Weather API Configuration (OpenWeatherMap current weather)
    weather_api_key: str = ""
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    weather_timeout: float = 10.0
    weather_cache_ttl: int = 300  # 5 minutes

    # Map defaults (centre of India)
    map_center_latitude: float = 20.5937
    map_center_longitude: float = 78.9629

    # Viewport animation for selected search results
    viewport_zoom: float = 10.0
    viewport_duration_ms: int = 2000

    # Search Configuration
    search_min_query_length: int = 3
    search_match_category: bool = True

    # Notification Feed Configuration
    feed_capacity: int = 5
    feed_tick_interval_seconds: float = 30.0
    feed_tick_threshold: float = 0.7  # random draw must exceed this
    feed_ticker_enabled: bool = True
    feed_seed_welcome: bool = True

    # Rate limiting (slowapi)
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
