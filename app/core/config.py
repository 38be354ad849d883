"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Plantly Care API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    MAX_REQUEST_BODY_BYTES: int = 256_000

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "plantly"

    # Single-user app: one persisted collection document per owner
    COLLECTION_OWNER_ID: str = "default"

    # Reminders
    REMINDER_TIMEZONE: str = "UTC"
    NOTIFICATION_PLATFORM: str = "mongo"  # "mongo" | "memory" (tests, local dev)
    DEFAULT_REMINDER_HOUR: int = 9
    DEFAULT_REMINDER_MINUTE: int = 0
    DEFAULT_DAY_BEFORE_HOUR: int = 20
    DEFAULT_DAY_BEFORE_MINUTE: int = 0
    DEFAULT_OVERDUE_HOUR: int = 18
    DEFAULT_OVERDUE_MINUTE: int = 0

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_DELIVERY_BATCH_SIZE: int = 100

    # AWS SNS
    AWS_REGION: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_SNS_TOPIC_ARN: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"



@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
