"""Lookup and lazy creation of the upload folder."""

from googleapiclient.errors import HttpError
from loguru import logger

from .errors import RemoteServiceError
from .pagination import collect_pages
from .types import MimeType, PermissionGrant

FOLDER_FIELDS = "nextPageToken, files(id, name, mimeType)"


def escape_query_value(value: str) -> str:
    """Escape a string literal for a Drive ``q`` parameter."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


class FolderResolver:
    """Find a folder by exact name, creating it when absent."""

    def __init__(self, collaborator_email: str | None = None):
        self.collaborator_email = collaborator_email

    def find_folder(self, service, name: str) -> str | None:
        """Return the id of the first folder named ``name``, or None.

        When several folders share the name, the first one in listing order
        wins.
        """
        query = f"name = '{escape_query_value(name)}' and trashed = false"
        listing = collect_pages(
            lambda token: service.files().list(q=query, fields=FOLDER_FIELDS, pageToken=token).execute()
        )
        for item in listing.items:
            if item.get("name") == name and item.get("mimeType") == MimeType.FOLDER.value:
                return item["id"]
        return None

    def resolve(self, service, name: str) -> list[str]:
        """Return the folder id as a single-element parents list.

        Args:
            service: Authenticated Drive v3 service
            name: Exact folder name

        Raises:
            RemoteServiceError: If the folder or its collaborator grant cannot be created
        """
        folder_id = self.find_folder(service, name)
        if folder_id:
            logger.debug(f"Using existing folder '{name}' ({folder_id})")
            return [folder_id]
        return [self._create(service, name)]

    def _create(self, service, name: str) -> str:
        metadata = {"name": name, "mimeType": MimeType.FOLDER.value}
        try:
            folder = service.files().create(body=metadata, fields="id").execute()
        except HttpError as e:
            raise RemoteServiceError.from_http_error(f"create folder '{name}'", e) from e
        folder_id = folder["id"]
        logger.info(f"Created folder '{name}' ({folder_id})")

        if self.collaborator_email:
            grant = PermissionGrant(file_id=folder_id, email=self.collaborator_email)
            try:
                service.permissions().create(fileId=grant.file_id, body=grant.to_body(), fields="id").execute()
            except HttpError as e:
                raise RemoteServiceError.from_http_error(f"share folder '{name}'", e) from e
            logger.info(f"Granted {grant.role} on folder '{name}' to {grant.email}")
        return folder_id
