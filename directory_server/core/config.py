# directory_server/core/config.py
import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseSettings):
    """Server settings"""
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./employees.db"
    SQL_ECHO: bool = False

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "server.log"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def setup_logging(settings: Settings) -> None:
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )


settings = Settings()
