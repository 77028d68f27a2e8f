"""Core type definitions for Drive Share."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MimeType(Enum):
    """Google Drive MIME types understood by the uploader."""

    FOLDER = "application/vnd.google-apps.folder"
    WORD_DOCUMENT = "application/vnd.google-apps.document"
    SHEETS_DOCUMENT = "application/vnd.google-apps.spreadsheet"
    UNKNOWN = "application/vnd.google-apps.unknown"

    @classmethod
    def from_filename(cls, filename: str) -> "MimeType":
        """Classify a local file name by the extension fragment it contains.

        ``.xls`` is checked first so ``report.xlsx.doc`` is a spreadsheet.
        """
        if ".xls" in filename:
            return cls.SHEETS_DOCUMENT
        if ".doc" in filename:
            return cls.WORD_DOCUMENT
        return cls.UNKNOWN


def parse_drive_time(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as returned by the Drive API."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class RemoteFile(BaseModel):
    """A file or folder entry from the Drive files resource."""

    id: str
    name: str = ""
    mime_type: str | None = None
    created_time: datetime | None = None
    owned_by_me: bool = False
    web_view_link: str | None = None
    icon_link: str | None = None
    parents: list[str] = Field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return self.mime_type == MimeType.FOLDER.value

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RemoteFile":
        """Build from a Drive API v3 file resource dict."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            mime_type=data.get("mimeType"),
            created_time=parse_drive_time(data.get("createdTime")),
            owned_by_me=bool(data.get("ownedByMe", False)),
            web_view_link=data.get("webViewLink"),
            icon_link=data.get("iconLink"),
            parents=list(data.get("parents", [])),
        )


@dataclass
class PermissionGrant:
    """A one-way writer grant on a file or folder."""

    file_id: str
    email: str
    role: str = "writer"
    send_notification: bool = True

    def to_body(self) -> dict[str, str]:
        return {"type": "user", "role": self.role, "emailAddress": self.email}


@dataclass
class SweepReport:
    """Outcome of a retention sweep."""

    scanned: int = 0
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    warning: str | None = None
    skipped: bool = False


class ShareNotification(BaseModel):
    """An email telling a recipient where the shared file lives."""

    recipient: str
    subject: str
    template: str
    variables: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_file(
        cls, remote_file: RemoteFile, recipient: str, template: str, delete_after_days: int | None = None
    ) -> "ShareNotification":
        """Build the invitation for an uploaded file.

        ``deleteAfter`` is only set for a positive retention window.
        """
        variables: dict[str, Any] = {
            "fileName": remote_file.name,
            "fileLink": remote_file.web_view_link,
            "fileIconLink": remote_file.icon_link,
        }
        if delete_after_days is not None and delete_after_days > 0:
            variables["deleteAfter"] = delete_after_days
        return cls(
            recipient=recipient,
            subject=f"{remote_file.name} - Invitation to edit",
            template=template,
            variables=variables,
        )
