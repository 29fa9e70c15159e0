"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database (SQL storage backend)
    DATABASE_URL: str = "sqlite:///habitboard.db"

    # Storage
    STORAGE_BACKEND: Literal["sql", "memory"] = "sql"
    HABITS_STORAGE_KEY: str = "habit-tracker-habits"
    KANBAN_STORAGE_KEY: str = "habit-tracker-kanban"
    TODOS_STORAGE_KEY: str = "habit-tracker-todos"
    COUNTER_STORAGE_KEY: str = "habit-tracker-counter"

    # Habits
    STREAK_LOOKBACK_DAYS: int = 365

    # Application
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to SQLAlchemy format (postgresql+psycopg://)
        """
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
