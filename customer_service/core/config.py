import json
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


@dataclass(frozen=True)
class OperationsApiCredentials:
    """Credentials used to authenticate against the operations API."""

    username: str
    password: str


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    API_V1_STR: str = "/api/v1"
    API_V2_STR: str = "/api/v2"
    PROJECT_NAME: str = "Customer Service"
    DEBUG: bool = False

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Database settings
    DATABASE_URI: str = "sqlite+aiosqlite:///./customers.db"
    DATABASE_ECHO: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Pagination defaults for the v2 listing
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Operations API settings
    OPERATIONS_API_BASE_ADDRESS: str = "http://localhost:8080/apioperaciones/"
    OPERATIONS_API_USERNAME: Optional[str] = None
    OPERATIONS_API_PASSWORD: Optional[str] = None
    OPERATIONS_API_TIMEOUT: float = 10.0  # seconds
    OPERATIONS_API_EXCHANGE_RATE_PATH: str = "exchange-rate"
    OPERATIONS_API_LEGAL_HOLIDAYS_PATH: str = "legal-holidays"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    def operations_api_credentials(self) -> OperationsApiCredentials:
        """
        Build the immutable credential set for the operations API client.

        Returns:
            OperationsApiCredentials with the configured username and password
        """
        return OperationsApiCredentials(
            username=self.OPERATIONS_API_USERNAME or "",
            password=self.OPERATIONS_API_PASSWORD or "",
        )


def load_env_file(env_file: str = ".env") -> bool:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".

    Returns:
        True if the file existed and was loaded
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        return load_dotenv(env_path)
    return False


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
