from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "txscope"
    APP_ENV: str = "development"  # development, production, testing

    # --- Database (SQLAlchemy) ---
    DB_URL: str = "sqlite:///txscope.db"
    ASYNC_DB_URL: Optional[str] = None  # Derived from DB_URL when empty
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        if self.ASYNC_DB_URL:
            return self.ASYNC_DB_URL
        # sqlite:///x.db -> sqlite+aiosqlite:///x.db
        if self.DB_URL.startswith("sqlite://"):
            return self.DB_URL.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if self.DB_URL.startswith("postgresql://"):
            return self.DB_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.DB_URL

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # --- Pydantic ---
    # Priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
