# brewhouse/core/config.py

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env first, then the process environment
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Brewhouse Backend"

    DATABASE_URL: str = "sqlite:///./brewhouse.db"

    BACKEND_CORS_ORIGINS: str = ""

    LOG_LEVEL: str = "INFO"

    # alarm evaluator
    ALARM_MONITOR_ENABLED: bool = True
    ALARM_CHECK_INTERVAL: float = 5.0

    # event stream
    SSE_HEARTBEAT_INTERVAL: float = 30.0
    TEMPERATURE_STREAM_INTERVAL: float = 5.0

    MQTT_ENABLED: bool = False
    MQTT_BROKER_HOST: str = "localhost"
    MQTT_BROKER_PORT: int = 1883
    MQTT_CLIENT_ID: str = "brewhouse-backend"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
