# directory_client/config.py
import logging
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """Client settings"""
    # Server connection
    SERVER_URL: str = "http://localhost:3001"
    TIMEOUT: float = 10.0

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create instance of settings
settings = ClientSettings()
