"""Pytest fixtures for Drive Share tests."""

import itertools
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from drive_share.core.notifier import Notifier
from drive_share.core.properties import (
    EMAIL_TEMPLATE_KEY,
    FOLDER_NAME_KEY,
    KEEP_DAYS_KEY,
    SECRET_JSON_KEY,
    FilePropertyStore,
)
from drive_share.core.types import MimeType, ShareNotification

FOLDER_MIME = MimeType.FOLDER.value


def make_http_error(status: int = 500, reason: str = "Server Error") -> HttpError:
    """Build an HttpError without a network round trip."""
    return HttpError(MagicMock(status=status, reason=reason), b"boom")


class FakeRequest:
    """Stand-in for a googleapiclient HttpRequest."""

    def __init__(self, call: Callable[[], Any]):
        self._call = call

    def execute(self) -> Any:
        return self._call()


class FakeDrive:
    """In-memory Drive v3 service covering files and permissions."""

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.files_by_id: dict[str, dict[str, Any]] = {}
        self.grants: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self.failures: dict[str, list[Exception | None]] = {}
        self._ids = itertools.count(1)

    # Test helpers

    def add_file(self, name: str, mime_type: str = "text/plain", **extra: Any) -> str:
        file_id = extra.pop("id", None) or f"file-{next(self._ids)}"
        self.files_by_id[file_id] = {"id": file_id, "name": name, "mimeType": mime_type, **extra}
        return file_id

    def fail_next(self, operation: str, *errors: Exception | None) -> None:
        """Queue errors raised by the next calls to ``operation``; None lets a call through."""
        self.failures.setdefault(operation, []).extend(errors)

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    def _run(self, operation: str, call: Callable[[], Any]) -> Any:
        self.calls.append(operation)
        queued = self.failures.get(operation)
        if queued:
            error = queued.pop(0)
            if error is not None:
                raise error
        return call()

    # API surface

    def files(self) -> "FakeFiles":
        return FakeFiles(self)

    def permissions(self) -> "FakePermissions":
        return FakePermissions(self)

    def list_files(self, q: str | None, page_token: str | None) -> FakeRequest:
        return FakeRequest(lambda: self._run("list", lambda: self._list(q, page_token)))

    def create_file(self, body: dict[str, Any]) -> FakeRequest:
        def call() -> dict[str, Any]:
            file_id = f"file-{next(self._ids)}"
            created = {
                "id": file_id,
                "ownedByMe": True,
                "webViewLink": f"https://drive.google.com/file/d/{file_id}/view",
                "iconLink": "https://drive-thirdparty.googleusercontent.com/16/type/icon",
                **body,
            }
            self.files_by_id[file_id] = created
            return created

        operation = "create_folder" if body.get("mimeType") == FOLDER_MIME else "upload"
        return FakeRequest(lambda: self._run(operation, call))

    def delete_file(self, file_id: str) -> FakeRequest:
        return FakeRequest(lambda: self._run("delete", lambda: self.files_by_id.pop(file_id)))

    def create_permission(self, file_id: str, body: dict[str, Any], **kwargs: Any) -> FakeRequest:
        def call() -> dict[str, Any]:
            grant = {"fileId": file_id, **body, **kwargs}
            self.grants.append(grant)
            return {"id": f"perm-{len(self.grants)}"}

        return FakeRequest(lambda: self._run("permission", call))

    def _list(self, q: str | None, page_token: str | None) -> dict[str, Any]:
        items = list(self.files_by_id.values())
        if q and "trashed = false" in q:
            items = [item for item in items if not item.get("trashed")]
        if q:
            match = re.search(r"name = '((?:[^'\\]|\\.)*)'", q)
            if match:
                name = re.sub(r"\\(.)", r"\1", match.group(1))
                items = [item for item in items if item["name"] == name]
        start = int(page_token or 0)
        page = items[start : start + self.page_size]
        response: dict[str, Any] = {"files": page}
        if start + self.page_size < len(items):
            response["nextPageToken"] = str(start + self.page_size)
        return response


class FakeFiles:
    """The ``files()`` resource of FakeDrive."""

    def __init__(self, drive: FakeDrive):
        self.drive = drive

    def list(self, q: str | None = None, fields: str | None = None, pageToken: str | None = None) -> FakeRequest:
        return self.drive.list_files(q, pageToken)

    def create(self, body: dict[str, Any], media_body: Any = None, fields: str | None = None) -> FakeRequest:
        return self.drive.create_file(body)

    def delete(self, fileId: str) -> FakeRequest:
        return self.drive.delete_file(fileId)


class FakePermissions:
    """The ``permissions()`` resource of FakeDrive."""

    def __init__(self, drive: FakeDrive):
        self.drive = drive

    def create(self, fileId: str, body: dict[str, Any], **kwargs: Any) -> FakeRequest:
        return self.drive.create_permission(fileId, body, **kwargs)


class RecordingNotifier(Notifier):
    """Notifier that records notifications and can fail on demand."""

    def __init__(self, failures: list[Exception] | None = None):
        self.sent: list[tuple[ShareNotification, str]] = []
        self.attempts = 0
        self.failures = list(failures or [])

    def send(self, notification: ShareNotification, product: str) -> None:
        self.attempts += 1
        if self.failures:
            raise self.failures.pop(0)
        self.sent.append((notification, product))


@pytest.fixture
def drive() -> FakeDrive:
    """Provide an empty in-memory Drive service."""
    return FakeDrive()


@pytest.fixture
def properties_file(tmp_path: Path) -> Path:
    """Create a property file with a fully configured product P1."""
    path = tmp_path / "properties.yaml"
    store = FilePropertyStore(path)
    store.set("P1", SECRET_JSON_KEY, '{"type": "service_account"}')
    store.set("P1", FOLDER_NAME_KEY, "Reports")
    store.set("P1", KEEP_DAYS_KEY, "30")
    store.set("P1", EMAIL_TEMPLATE_KEY, '<a href="{{ fileLink }}">{{ fileName }}</a>')
    return path


@pytest.fixture
def store(properties_file: Path) -> FilePropertyStore:
    """Provide the file property store for P1."""
    return FilePropertyStore(properties_file)


@pytest.fixture
def local_file(tmp_path: Path) -> Path:
    """Create a spreadsheet file to upload."""
    path = tmp_path / "report.xlsx"
    path.write_bytes(b"PK\x03\x04 spreadsheet")
    return path


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Provide a notifier that always succeeds."""
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> Callable[..., RecordingNotifier]:
    """Build a notifier that raises the given errors before succeeding."""
    return lambda *errors: RecordingNotifier(list(errors))


@pytest.fixture
def http_error() -> Callable[..., HttpError]:
    """Build Drive API errors."""
    return make_http_error
