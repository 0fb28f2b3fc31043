from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    app_name: str = "WeatherIngest"
    app_version: str = "0.1.0"
    app_env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3002

    # Record store
    database_url: str = "sqlite:///./weather_ingest.db"
    collection: str = "weather_data"
    atomic_ingest: bool = True

    # Forecast provider
    forecast_base_url: str = (
        "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline/"
    )
    forecast_api_key: str = ""
    unit_group: str = "metric"
    timeout_connect: float = 5.0
    timeout_read: float = 30.0

    # .env support and prefix for clarity
    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
