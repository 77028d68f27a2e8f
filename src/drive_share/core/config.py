"""Configuration models for Drive Share."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..settings import Settings

DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
GMAIL_SEND_SCOPE = "https://www.googleapis.com/auth/gmail.send"


class DriveShareConfig(BaseModel):
    """Configuration passed to every Drive Share component."""

    application_name: str = Field(default="Drive Share")
    drive_scopes: list[str] = Field(default_factory=lambda: [DRIVE_SCOPE])
    gmail_scopes: list[str] = Field(default_factory=lambda: [GMAIL_SEND_SCOPE])
    collaborator_email: str | None = Field(
        default=None, description="Writer granted on newly created folders; no grant when unset"
    )
    max_attempts: int = Field(default=3, ge=1)
    notification_sender: str | None = Field(default=None)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DriveShareConfig":
        """Build the run configuration from application settings."""
        return cls(
            collaborator_email=settings.collaborator_email,
            max_attempts=settings.max_attempts,
            notification_sender=settings.notification_sender,
        )
