"""Tests for bounded retries and tolerant pagination."""

from unittest.mock import MagicMock

import google.auth.exceptions
import httplib2
import pytest

from drive_share.core.errors import ConfigurationError, InvalidInputError
from drive_share.core.pagination import collect_pages
from drive_share.core.retry import run_with_retries


@pytest.mark.unit
class TestRunWithRetries:
    """Tests for run_with_retries."""

    def test_returns_first_success(self):
        operation = MagicMock(return_value="ok")

        assert run_with_retries(operation, attempts=3) == "ok"
        assert operation.call_count == 1

    def test_retries_until_success(self):
        operation = MagicMock(side_effect=[OSError("reset"), "ok"])

        assert run_with_retries(operation, attempts=3) == "ok"
        assert operation.call_count == 2

    def test_raises_last_error_unchanged(self):
        last = ConfigurationError("third")
        operation = MagicMock(side_effect=[OSError("first"), ValueError("second"), last])

        with pytest.raises(ConfigurationError) as exc_info:
            run_with_retries(operation, attempts=3)

        assert exc_info.value is last
        assert operation.call_count == 3

    def test_invalid_input_not_retried(self):
        operation = MagicMock(side_effect=InvalidInputError("no extension"))

        with pytest.raises(InvalidInputError):
            run_with_retries(operation, attempts=3)

        assert operation.call_count == 1

    def test_single_attempt(self):
        operation = MagicMock(side_effect=OSError("down"))

        with pytest.raises(OSError):
            run_with_retries(operation, attempts=1)

        assert operation.call_count == 1

    def test_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            run_with_retries(lambda: None, attempts=0)


@pytest.mark.unit
class TestCollectPages:
    """Tests for collect_pages."""

    def test_follows_page_tokens(self):
        pages = {
            None: {"files": [{"id": "1"}], "nextPageToken": "t2"},
            "t2": {"files": [{"id": "2"}], "nextPageToken": "t3"},
            "t3": {"files": [{"id": "3"}]},
        }

        collection = collect_pages(lambda token: pages[token])

        assert [item["id"] for item in collection.items] == ["1", "2", "3"]
        assert collection.pages == 3
        assert collection.complete

    def test_empty_page_token_ends_listing(self):
        collection = collect_pages(lambda token: {"files": [], "nextPageToken": ""})

        assert collection.items == []
        assert collection.pages == 1

    def test_failure_keeps_earlier_pages(self, http_error):
        fetch = MagicMock(side_effect=[{"files": [{"id": "1"}], "nextPageToken": "t2"}, http_error(500)])

        collection = collect_pages(fetch)

        assert [item["id"] for item in collection.items] == ["1"]
        assert not collection.complete
        assert "1 page(s)" in collection.warning

    def test_failure_on_first_page(self):
        collection = collect_pages(MagicMock(side_effect=TimeoutError("slow")))

        assert collection.items == []
        assert collection.warning is not None

    @pytest.mark.parametrize(
        "error",
        [
            httplib2.ServerNotFoundError("dns"),
            google.auth.exceptions.TransportError("socket closed"),
            google.auth.exceptions.RefreshError("expired"),
        ],
    )
    def test_transport_failure_keeps_earlier_pages(self, error):
        fetch = MagicMock(side_effect=[{"files": [{"id": "1"}], "nextPageToken": "t2"}, error])

        collection = collect_pages(fetch)

        assert [item["id"] for item in collection.items] == ["1"]
        assert not collection.complete

    def test_other_errors_propagate(self):
        with pytest.raises(KeyError):
            collect_pages(MagicMock(side_effect=KeyError("files")))

    def test_custom_items_key(self):
        collection = collect_pages(lambda token: {"permissions": [{"id": "p"}]}, items_key="permissions")

        assert collection.items == [{"id": "p"}]
