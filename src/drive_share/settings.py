"""Settings management for Drive Share."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables are prefixed with DSHARE_.
    Example: DSHARE_PROPERTIES_PATH=/etc/drive-share/properties.yaml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DSHARE_",
    )

    # Product property store
    properties_path: Path = Field(
        default=Path("properties.yaml"),
        description="Path to the YAML file holding per-product properties",
    )
    use_keyring: bool = Field(
        default=True,
        description="Look up product properties in the system keyring before the YAML file",
    )
    keyring_service_name: str = Field(
        default="drive-share",
        description="Service name used for keyring storage",
    )

    # Drive settings
    collaborator_email: str | None = Field(
        default=None,
        description="Account granted writer access on every folder this tool creates",
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for the upload pipeline and for the notification email",
    )

    # Notification settings
    notification_sender: str | None = Field(
        default=None,
        description="Sender address used when a product has no sender property",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: Literal["pretty", "json"] = Field(
        default="pretty",
        description="Log format: 'pretty' for colored output, 'json' for structured",
    )


# Global settings instance
settings = Settings()
