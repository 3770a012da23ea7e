"""
Configuration module using Pydantic Settings.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application-wide settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    SWAGGER_UI_DIR: Path | None = None

    # API metadata
    API_TITLE: str = "Swagger Page API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Interactive documentation generated from source annotations."

    # Docs page
    DOCS_PATH: str = "/docs"
    DOCS_HOST: str | None = None
    DOCS_ROUTE_PREFIX: str | None = None
    DOCS_FORCE_SECURE: bool = False
    # Empty string disables the online validator
    DOCS_VALIDATOR_URL: str | None = None

    LOG_LEVEL: str = "INFO"

    def reload(self) -> None:
        """Reload settings from environment variables."""
        new_settings = Settings()
        self.__dict__.update(new_settings.__dict__)


settings = Settings()
