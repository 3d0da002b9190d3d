"""Client configuration using pydantic-settings.

Values are read from TITAN_* environment variables or a local .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TITAN_API_URL = "https://api.titan.exchange"


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TITAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    auth_token: str = Field(default="", description="Bearer token for the quote API")
    base_url: str = Field(default=TITAN_API_URL, description="Quote API base URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    @field_validator("base_url", mode="before")
    @classmethod
    def _default_empty_base_url(cls, value):
        # An exported-but-empty TITAN_BASE_URL means "use the default"
        if value is None or (isinstance(value, str) and not value.strip()):
            return TITAN_API_URL
        return value

    @property
    def has_auth_token(self) -> bool:
        """Check if an auth token is configured."""
        return bool(self.auth_token.strip())

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "auth_token": "***" if self.has_auth_token else "(not set)",
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
