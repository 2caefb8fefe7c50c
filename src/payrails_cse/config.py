"""Configuration management for the client-side encryption library."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttpSettings(BaseModel):
    """HTTP transport settings for the tokenize call."""

    timeout_seconds: float = Field(default=10.0, description="Request timeout")


class LoggingSettings(BaseModel):
    """Structured logging settings."""

    level: str = Field(default="INFO", description="Log level")
    json_output: bool = Field(default=True, description="Render logs as JSON")


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Variables use the ``PAYRAILS_CSE_`` prefix and ``__`` for nesting,
    e.g. ``PAYRAILS_CSE_HTTP__TIMEOUT_SECONDS=5``.
    """

    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="PAYRAILS_CSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
