"""Application settings loaded from environment variables via pydantic-settings.

Values are read, in priority order, from environment variables and then
from a ``.env`` file in the project root.  Field ``skiddle_api_key`` maps to
env var ``SKIDDLE_API_KEY``.  Defaults below apply when neither source sets
a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Find My Rave application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Events provider (Skiddle) ===
    # Empty key = "not configured"; the health endpoint reports it and
    # every upstream call fails with a provider error.
    skiddle_api_key: str = ""
    skiddle_api_base: str = "https://www.skiddle.com/api/v1"
    upstream_timeout: float = 15.0

    # === Search ===
    # The maximum page size bounds upstream load no matter what the
    # client asks for.  The inflation factor multiplies the page size
    # when a genre filter is active, since filtering happens after fetch.
    search_default_page_size: int = 12
    search_max_page_size: int = 24
    genre_inflation_factor: int = 2
    location_radius_miles: int = 20
    default_order: str = "trending"

    # === Event detail cache ===
    event_cache_ttl: int = 3600
    event_cache_max_size: int = 1000

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
