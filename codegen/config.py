"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
The Gemini API key may be supplied per request instead of being configured here.
"""

import secrets
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    port: int = Field(default=8080, description="HTTP server port")
    host: str = Field(default="0.0.0.0", description="HTTP server host")
    environment: Literal["development", "staging", "production"] = Field(
        default="production", description="Deployment environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    k_revision: str = Field(default="local", description="Cloud Run revision name")
    instance_id: str = Field(
        default_factory=lambda: secrets.token_hex(8),
        description="Unique instance identifier",
    )

    @property
    def full_instance_id(self) -> str:
        """Full instance identifier combining revision and unique ID."""
        return f"{self.k_revision}-{self.instance_id}"

    # ==========================================================================
    # API Security
    # ==========================================================================
    service_secret: str | None = Field(
        default=None,
        description="Shared secret expected in X-API-Key. Unset disables the check.",
    )

    # ==========================================================================
    # Generation Configuration
    # ==========================================================================
    google_api_key: str | None = Field(
        default=None,
        alias="GOOGLE_API_KEY",
        description="Fallback Gemini API key when a request does not carry one",
    )
    default_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model used when a request does not name one",
    )
    generation_max_retries: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts made per model call (1 means no retry)",
    )

    @field_validator("default_model")
    @classmethod
    def strip_provider_prefix(cls, v: str) -> str:
        """Accept 'google_genai:<model>' as well as a bare model name."""
        prefix = "google_genai:"
        if v.startswith(prefix):
            return v[len(prefix):]
        return v

    # ==========================================================================
    # Workspace Configuration
    # ==========================================================================
    workspace_base_dir: str = Field(
        default="/tmp/playground-workspaces",
        description="Base directory for playground workspaces",
    )
    entry_file_path: str = Field(
        default="src/main.ts",
        description="Bootstrap file patched after each generation",
    )

    # ==========================================================================
    # Google Cloud Configuration
    # ==========================================================================
    enable_cloud_logging: bool = Field(
        default=True, description="Emit structured JSON logs for Cloud Logging"
    )

    @property
    def json_logs(self) -> bool:
        """JSON logs unless disabled or running locally."""
        return self.enable_cloud_logging and self.environment != "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
