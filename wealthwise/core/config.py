"""Application configuration with environment variables."""
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup and handed to the app; nothing reads the
    environment after that.
    """

    # Database
    DATABASE_URL: str = Field(min_length=1)

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # Application
    APP_NAME: str = "WealthWise API"
    APP_VERSION: str = "0.1.0"
    STATIC_DIR: Path = PACKAGE_DIR / "public"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True
        frozen = True

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def chatbot_enabled(self) -> bool:
        return bool(self.OPENAI_API_KEY)


def load_settings(**overrides) -> Settings:
    """Build the settings, exiting the process if the database URL is missing."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        if "DATABASE_URL" in missing:
            logger.error("DATABASE_URL is not defined in the environment or .env file")
        else:
            logger.error("Invalid configuration: %s", e)
        sys.exit(1)
