from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (parent of practice folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = "sqlite:///./practice.db"

    # Fallback when no daily count has been stored yet
    daily_problem_count: int = Field(default=5, ge=3, le=10)

    # Seconds a SQLite writer waits for the database lock
    sqlite_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        extra="ignore",
    )

settings = Settings()
