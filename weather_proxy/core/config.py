"""Application configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    app_name: str = "City Weather Proxy"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Weather API
    api_key: str = ""
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
