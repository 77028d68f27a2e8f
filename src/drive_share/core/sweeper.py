"""Retention sweep of stale Drive files."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from googleapiclient.errors import HttpError
from loguru import logger

from .errors import TRANSPORT_ERRORS, RemoteServiceError
from .pagination import collect_pages
from .types import RemoteFile, SweepReport

SWEEP_QUERY = "trashed = false"
SWEEP_FIELDS = "nextPageToken, files(id, name, mimeType, createdTime, ownedByMe)"


class RetentionSweeper:
    """Delete files owned by the service account that outlived the retention window."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))

    def cutoff(self, retention_days: int) -> datetime:
        return self._clock() - timedelta(days=retention_days)

    def is_stale(self, remote_file: RemoteFile, cutoff: datetime) -> bool:
        """A file is stale when it is ours, not a folder and created before the cutoff."""
        if remote_file.is_folder or not remote_file.owned_by_me:
            return False
        if remote_file.created_time is None:
            return False
        return remote_file.created_time < cutoff

    def sweep(self, service, retention_days: int | None) -> SweepReport:
        """Delete stale files among the non-trashed files visible to the account.

        Listing failures end the listing early and per-file delete failures
        are logged; neither is raised.

        Args:
            service: Authenticated Drive v3 service
            retention_days: Days to keep files; None or < 1 disables the sweep

        Returns:
            SweepReport describing what was deleted
        """
        if retention_days is None or retention_days < 1:
            logger.debug("No retention window configured, skipping cleanup")
            return SweepReport(skipped=True)

        cutoff = self.cutoff(retention_days)
        listing = collect_pages(
            lambda token: service.files().list(q=SWEEP_QUERY, fields=SWEEP_FIELDS, pageToken=token).execute()
        )
        report = SweepReport(scanned=len(listing.items), warning=listing.warning)

        for item in listing.items:
            remote_file = RemoteFile.from_api(item)
            if not self.is_stale(remote_file, cutoff):
                continue
            try:
                logger.info(f"Deleting file {remote_file.name} ({remote_file.id})")
                service.files().delete(fileId=remote_file.id).execute()
                report.deleted.append(remote_file.id)
            except TRANSPORT_ERRORS as e:
                error = RemoteServiceError.from_http_error("delete file", e) if isinstance(e, HttpError) else e
                logger.error(f"Could not delete {remote_file.id}: {error}")
                report.failed.append(remote_file.id)

        logger.info(
            f"Cleanup older than {retention_days} day(s): scanned {report.scanned}, "
            f"deleted {len(report.deleted)}, failed {len(report.failed)}"
        )
        return report
