"""Exception hierarchy for Drive Share."""

import google.auth.exceptions
import httplib2
from googleapiclient.errors import HttpError


class DriveShareError(Exception):
    """Base exception for Drive Share."""


class InvalidInputError(DriveShareError):
    """The local file cannot be uploaded (missing, or no extension)."""


class ConfigurationError(DriveShareError):
    """A required product property is missing, blank or unreadable."""


class AuthenticationError(DriveShareError):
    """The credentials blob is malformed or the API client cannot be built."""


class RemoteServiceError(DriveShareError):
    """A Google Drive API call failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    @classmethod
    def from_http_error(cls, action: str, error: HttpError) -> "RemoteServiceError":
        """Build from a googleapiclient HttpError, keeping the HTTP status."""
        status = getattr(error.resp, "status", None)
        return cls(f"Drive API failed to {action}: {error.reason or error}", status=status)


class NotificationError(DriveShareError):
    """The share notification email could not be rendered or sent."""


# Failures of a single Drive request: HTTP status errors, socket and DNS
# errors from the httplib2 transport, and token refresh errors.
TRANSPORT_ERRORS = (
    HttpError,
    OSError,
    httplib2.HttpLib2Error,
    google.auth.exceptions.TransportError,
    google.auth.exceptions.RefreshError,
)
