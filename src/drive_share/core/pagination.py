"""Best-effort collection of paginated Drive listings."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from .errors import TRANSPORT_ERRORS, RemoteServiceError

PageFetcher = Callable[[str | None], dict[str, Any]]


@dataclass
class PageCollection:
    """Items gathered from a listing, possibly incomplete."""

    items: list[dict[str, Any]] = field(default_factory=list)
    pages: int = 0
    warning: str | None = None

    @property
    def complete(self) -> bool:
        return self.warning is None


def collect_pages(fetch_page: PageFetcher, items_key: str = "files") -> PageCollection:
    """Follow ``nextPageToken`` until the listing is exhausted.

    A page that fails to load ends the listing early; the items collected so
    far are returned and ``warning`` describes the failure.

    Args:
        fetch_page: Called with the page token (None for the first page)
        items_key: Response key holding the page items

    Returns:
        PageCollection with the items from every page that loaded
    """
    collection = PageCollection()
    page_token: str | None = None

    while True:
        try:
            response = fetch_page(page_token)
        except (*TRANSPORT_ERRORS, RemoteServiceError) as e:
            collection.warning = f"Listing stopped after {collection.pages} page(s): {e}"
            logger.error(collection.warning)
            break

        collection.pages += 1
        collection.items.extend(response.get(items_key, []))
        logger.trace(f"Page {collection.pages}: {len(response.get(items_key, []))} item(s)")

        page_token = response.get("nextPageToken")
        if not page_token:
            break

    return collection
