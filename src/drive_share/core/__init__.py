"""Core module for Drive Share."""

from .config import DriveShareConfig
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DriveShareError,
    InvalidInputError,
    NotificationError,
    RemoteServiceError,
)
from .types import MimeType, RemoteFile, ShareNotification, SweepReport
from .uploader import DriveUploader

__all__ = [
    "DriveUploader",
    "DriveShareConfig",
    "MimeType",
    "RemoteFile",
    "ShareNotification",
    "SweepReport",
    "DriveShareError",
    "InvalidInputError",
    "ConfigurationError",
    "AuthenticationError",
    "RemoteServiceError",
    "NotificationError",
]
