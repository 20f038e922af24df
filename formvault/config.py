"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./formvault.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Shared secret used to verify bearer tokens from the identity provider",
        min_length=1,
    )
    token_algorithm: str = Field(
        default="HS256", description="Algorithm used to sign bearer tokens"
    )
    max_attachment_bytes: int = Field(
        default=DEFAULT_MAX_ATTACHMENT_BYTES,
        description="Largest decoded attachment accepted, in bytes",
        gt=0,
    )
    storage_backend: Literal["local", "azure"] = Field(
        default="local", description="Content sink used to persist attachment bytes"
    )
    storage_root: str = Field(
        default="./storage",
        description="Directory holding attachment bytes for the local backend",
        min_length=1,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string of the Azure storage account",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container holding attachment bytes",
    )
    otp_expire_seconds: int = Field(
        default=300,
        description="Number of seconds an issued passcode stays valid",
        gt=0,
    )
    otp_console_delivery: bool = Field(
        default=False,
        description="Write passcodes for phone recipients to the log (development only)",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    app_timezone: str | None = Field(
        default=None, description="Timezone used when presenting timestamps"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:4200"],
        description="Origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_storage_backend(self) -> "Settings":
        if self.storage_backend == "azure" and not (
            self.azure_storage_connection_string and self.azure_storage_container_name
        ):
            raise ValueError(
                "AZURE_STORAGE_CONNECTION_STRING and AZURE_STORAGE_CONTAINER_NAME are "
                "required when STORAGE_BACKEND is 'azure'"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
