"""Tests for folder lookup and creation."""

import pytest

from drive_share.core.errors import RemoteServiceError
from drive_share.core.folders import FolderResolver, escape_query_value
from drive_share.core.types import MimeType

FOLDER = MimeType.FOLDER.value


@pytest.mark.unit
class TestEscapeQueryValue:
    """Tests for Drive query escaping."""

    def test_plain_name(self):
        assert escape_query_value("Reports") == "Reports"

    def test_quote_and_backslash(self):
        assert escape_query_value("Bob's \\ files") == "Bob\\'s \\\\ files"


@pytest.mark.unit
class TestFolderResolver:
    """Tests for FolderResolver.resolve."""

    def test_returns_existing_folder(self, drive):
        folder_id = drive.add_file("Reports", FOLDER)

        assert FolderResolver().resolve(drive, "Reports") == [folder_id]
        assert drive.count("create_folder") == 0

    def test_ignores_files_with_the_same_name(self, drive):
        drive.add_file("Reports", "application/pdf")
        folder_id = drive.add_file("Reports", FOLDER)

        assert FolderResolver().resolve(drive, "Reports") == [folder_id]

    def test_finds_folder_on_a_later_page(self, drive):
        drive.page_size = 1
        drive.add_file("Reports", "text/plain")
        drive.add_file("Reports", "text/csv")
        folder_id = drive.add_file("Reports", FOLDER)

        assert FolderResolver().resolve(drive, "Reports") == [folder_id]
        assert drive.count("list") == 3

    def test_creates_missing_folder_and_grants_collaborator(self, drive):
        resolver = FolderResolver(collaborator_email="admin@example.com")

        parents = resolver.resolve(drive, "Reports")

        assert len(parents) == 1
        created = drive.files_by_id[parents[0]]
        assert created["name"] == "Reports"
        assert created["mimeType"] == FOLDER
        assert drive.grants == [
            {
                "fileId": parents[0],
                "type": "user",
                "role": "writer",
                "emailAddress": "admin@example.com",
                "fields": "id",
            }
        ]

    def test_no_collaborator_configured(self, drive):
        FolderResolver().resolve(drive, "Reports")

        assert drive.count("create_folder") == 1
        assert drive.grants == []

    def test_idempotent(self, drive):
        resolver = FolderResolver(collaborator_email="admin@example.com")

        first = resolver.resolve(drive, "Reports")
        second = resolver.resolve(drive, "Reports")

        assert first == second
        assert drive.count("create_folder") == 1
        assert drive.count("permission") == 1

    def test_first_match_wins_for_duplicates(self, drive):
        first = drive.add_file("Reports", FOLDER)
        drive.add_file("Reports", FOLDER)

        assert FolderResolver().find_folder(drive, "Reports") == first

    def test_listing_failure_falls_through_to_create(self, drive, http_error):
        drive.add_file("Reports", FOLDER)
        drive.fail_next("list", http_error(500))

        parents = FolderResolver().resolve(drive, "Reports")

        assert drive.count("create_folder") == 1
        assert parents[0] in drive.files_by_id

    def test_create_failure_raises_remote_service_error(self, drive, http_error):
        drive.fail_next("create_folder", http_error(500))

        with pytest.raises(RemoteServiceError) as exc_info:
            FolderResolver().resolve(drive, "Reports")

        assert exc_info.value.status == 500

    def test_name_with_quote(self, drive):
        folder_id = drive.add_file("Bob's Reports", FOLDER)

        assert FolderResolver().resolve(drive, "Bob's Reports") == [folder_id]
