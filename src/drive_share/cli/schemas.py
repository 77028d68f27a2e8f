"""Output schemas for CLI commands."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class CommandOutput(BaseModel):
    """Base output schema for all commands."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "command": "upload",
                "success": True,
                "timestamp": "2024-01-15T10:30:00Z",
                "version": "0.1.0",
                "errors": [],
            }
        }
    )

    command: str = Field(..., description="Command name (upload, sweep, folder, props)")
    success: bool = Field(..., description="Overall success status")
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat(), description="ISO 8601 timestamp")
    version: str = Field(..., description="CLI version")
    errors: list[str] = Field(default_factory=list, description="List of error messages")


class UploadOutput(CommandOutput):
    """Output for the upload command."""

    product: str
    recipient: str
    file_id: str | None = None
    file_name: str | None = None
    mime_type: str | None = None
    web_view_link: str | None = None
    folder_ids: list[str] = Field(default_factory=list)


class SweepOutput(CommandOutput):
    """Output for the sweep command."""

    product: str
    retention_days: int | None = None
    skipped: bool = False
    scanned: int = 0
    deleted: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    warning: str | None = None


class FolderOutput(CommandOutput):
    """Output for the folder command."""

    product: str
    folder_name: str
    folder_id: str | None = None


class PropertyValue(BaseModel):
    """A product property as shown to the user."""

    key: str
    value: str | None = None
    secret: bool = False


class PropertiesOutput(CommandOutput):
    """Output for the props command."""

    product: str
    action: str
    properties: list[PropertyValue] = Field(default_factory=list)
