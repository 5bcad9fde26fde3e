# fintrack/core/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Fintrack API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str

    # Session Configuration
    SECRET_KEY: str
    SESSION_LIFETIME_SECONDS: int = 604800  # 7 days
    SESSION_COOKIE_NAME: str = "fintrack_session"
    SESSION_COOKIE_SECURE: bool = True

    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:3000"

    # Optional: Environment
    ENVIRONMENT: str = "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if we're running against a SQLite database (local dev and tests)"""
        return self.DATABASE_URL.startswith("sqlite")

# Create a global settings instance
settings = Settings()
