"""Upload, share and notify workflow."""

import mimetypes
from datetime import UTC, datetime
from pathlib import Path

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload
from loguru import logger

from .client import GoogleClientFactory
from .config import DriveShareConfig
from .errors import InvalidInputError, RemoteServiceError
from .folders import FolderResolver
from .notifier import Notifier
from .properties import ProductProperties, PropertyStore
from .retry import run_with_retries
from .sweeper import RetentionSweeper
from .types import MimeType, PermissionGrant, RemoteFile, ShareNotification, SweepReport

UPLOAD_FIELDS = "id, name, mimeType, createdTime, ownedByMe, webViewLink, iconLink, parents"


class DriveUploader:
    """Upload a file to a product's Drive folder and share it with a recipient.

    Each upload sweeps stale files, resolves the product folder, uploads the
    file, grants the recipient writer access and emails them the link.
    """

    def __init__(
        self,
        store: PropertyStore,
        notifier: Notifier,
        config: DriveShareConfig | None = None,
        clients: GoogleClientFactory | None = None,
        sweeper: RetentionSweeper | None = None,
        folders: FolderResolver | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.config = config or DriveShareConfig()
        self.clients = clients or GoogleClientFactory(store, self.config)
        self.sweeper = sweeper or RetentionSweeper()
        self.folders = folders or FolderResolver(self.config.collaborator_email)

    def cleanup_old_files(self, service, retention_days: int | None) -> SweepReport:
        """Delete stale files; see RetentionSweeper.sweep."""
        return self.sweeper.sweep(service, retention_days)

    def create_folder_if_not_exists(self, service, folder_name: str) -> list[str]:
        """Resolve the folder id, creating the folder if needed."""
        return self.folders.resolve(service, folder_name)

    @staticmethod
    def validate_local_file(local_file: Path | str | None) -> Path:
        if local_file is None:
            raise InvalidInputError("File does not exist")
        path = Path(local_file)
        if "." not in path.name:
            raise InvalidInputError(f"The file '{path.name}' does not appear to have a file extension")
        if not path.is_file():
            raise InvalidInputError(f"File does not exist: {path}")
        return path

    def upload_file(self, local_file: Path | str, email: str, product: str) -> RemoteFile:
        """Upload ``local_file`` for ``product`` and share it with ``email``.

        The upload pipeline and the notification email are each attempted up
        to ``config.max_attempts`` times. A failed notification does not undo
        the upload.

        Args:
            local_file: File to upload; its name must contain a '.'
            email: Recipient granted writer access and notified
            product: Product code selecting credentials, folder and template

        Returns:
            The uploaded file as reported by Drive

        Raises:
            InvalidInputError: If the local file is missing or has no extension
            DriveShareError: The error from the last failed attempt
        """
        path = self.validate_local_file(local_file)
        properties = ProductProperties(self.store, product)
        attempts = self.config.max_attempts

        uploaded, keep_days = run_with_retries(
            lambda: self._upload_and_share(path, email, properties),
            attempts=attempts,
            description=f"Upload of {path.name} for product {product}",
        )
        run_with_retries(
            lambda: self._send_share_link(uploaded, email, properties, keep_days),
            attempts=attempts,
            description=f"Share email to {email}",
        )
        return uploaded

    def _upload_and_share(
        self, path: Path, email: str, properties: ProductProperties
    ) -> tuple[RemoteFile, int | None]:
        service = self.clients.drive(properties.product)
        keep_days = properties.keep_days()
        self.cleanup_old_files(service, keep_days)
        parents = self.create_folder_if_not_exists(service, properties.folder_name())

        mime_type = MimeType.from_filename(path.name)
        metadata = {
            "name": path.name,
            "createdTime": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "mimeType": mime_type.value,
            "parents": parents,
        }
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        media = MediaFileUpload(str(path), mimetype=content_type)
        try:
            created = service.files().create(body=metadata, media_body=media, fields=UPLOAD_FIELDS).execute()
        except HttpError as e:
            raise RemoteServiceError.from_http_error(f"upload {path.name}", e) from e
        uploaded = RemoteFile.from_api(created)
        logger.info(f"Uploaded {uploaded.name} ({uploaded.id})")

        grant = PermissionGrant(file_id=uploaded.id, email=email, send_notification=False)
        try:
            service.permissions().create(
                fileId=grant.file_id,
                body=grant.to_body(),
                sendNotificationEmail=grant.send_notification,
                fields="id",
            ).execute()
        except HttpError as e:
            raise RemoteServiceError.from_http_error(f"share {uploaded.name} with {email}", e) from e
        logger.info(f"Granted {grant.role} on {uploaded.id} to {email}")
        return uploaded, keep_days

    def _send_share_link(
        self, uploaded: RemoteFile, email: str, properties: ProductProperties, keep_days: int | None
    ) -> None:
        notification = ShareNotification.for_file(uploaded, email, properties.email_template(), keep_days)
        self.notifier.send(notification, properties.product)
