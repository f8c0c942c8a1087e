"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.

    Environment Variables:
        ENVIRONMENT: Deployment environment (docs are hidden in production)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        CORS_ORIGINS: Comma-separated list of allowed origins
        FTP_DEFAULT_PORT / SFTP_DEFAULT_PORT: Ports used when a request omits one
        SFTP_PORTS: Ports that imply SFTP when no protocol is given
        REMOTE_FETCH_TIMEOUT_SECONDS: Connect timeout for fetch operations
        REMOTE_PUBLISH_TIMEOUT_SECONDS: Connect timeout for publish operations
        REMOTE_FTP_PASSIVE: Use passive mode for plain FTP
        FETCH_EXTENSIONS: File extensions pulled from the remote tree
        PUBLISH_FAIL_FAST: Abort a publish batch on the first failed upload
    """

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"

    # Remote transfer
    FTP_DEFAULT_PORT: int = 21
    SFTP_DEFAULT_PORT: int = 22
    SFTP_PORTS: List[int] = [22, 8010]
    REMOTE_FETCH_TIMEOUT_SECONDS: float = 15.0
    REMOTE_PUBLISH_TIMEOUT_SECONDS: float = 20.0
    REMOTE_FTP_PASSIVE: bool = True

    # Sync policy
    FETCH_EXTENSIONS: List[str] = ["html", "htm", "css", "js"]
    PUBLISH_FAIL_FAST: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
