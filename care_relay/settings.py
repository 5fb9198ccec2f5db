from enum import Enum
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEV = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    model_config = SettingsConfigDict(case_sensitive=True)

    APP_TITLE: str = "Care Relay"
    APP_VERSION: str = "1.0.0"

    ENVIRONMENT: Environment = Environment.DEV

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # WebSocket settings
    WS_PATH: str = "/ws"

    # Connection stats used to be exposed in development only
    STATS_ENDPOINT_ENABLED: bool = True

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_CONSOLE_FORMAT: Literal["human", "json"] = "human"
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]

    # Loki settings
    LOKI_ENABLED: bool = False
    LOKI_URL: str = "http://loki:3100"
    LOKI_VERSION: str = "1"


app_settings = Settings()
