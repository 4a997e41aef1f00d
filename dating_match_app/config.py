"""
Configuration settings for the Dating Match Application
"""
import logging
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database settings
    database_url: str = "sqlite:///dating_match.db"

    # Ollama settings
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"
    ollama_timeout: float = 5.0
    ollama_temperature: float = 0.1
    ollama_enabled: bool = True
    ollama_retry_after: float = 30.0

    # Ranking settings
    max_scoring_workers: int = Field(8, ge=1)
    default_max_results: int = Field(10, ge=1, le=100)

    # Logging
    log_level: str = "INFO"

    # Application directories
    app_dir: Path = Path.home() / ".dating_match_app"

    @property
    def logs_dir(self) -> Path:
        return self.app_dir / "logs"


def get_settings() -> Settings:
    """Get application settings"""
    return Settings()


def ensure_directories():
    """Ensure all required directories exist"""
    settings = get_settings()
    settings.app_dir.mkdir(parents=True, exist_ok=True)
    settings.logs_dir.mkdir(exist_ok=True)


def configure_logging(level: str = None) -> None:
    """
    Configure root logging to stdout and the application log file

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
    """
    settings = get_settings()
    ensure_directories()

    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.logs_dir / "dating_match.log", encoding="utf-8"),
        ]
    )
