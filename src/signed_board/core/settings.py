"""Application settings and configuration.

This module defines all configuration options for the Signed Board service.
Settings are loaded from environment variables with sensible defaults.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Signed Board", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server and logging
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = Field(default="", alias="API_PREFIX")

    # Demo signing endpoint
    sign_test_enabled: bool = Field(default=True, alias="SIGN_TEST_ENABLED")
    sign_test_content: str = Field(
        default="This is a test message signed by the server.",
        alias="SIGN_TEST_CONTENT",
    )

    # Submitted message limits
    max_content_length: int = Field(default=4096, alias="MAX_CONTENT_LENGTH")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def numeric_log_level(self) -> int:
        """Return the configured log level as a ``logging`` constant.

        Unknown names fall back to ``INFO``.
        """
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


settings = Settings()
