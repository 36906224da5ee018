# ABOUTME: Google Books metadata provider, first in the default discovery chain.
# ABOUTME: Queries the volumes endpoint with an isbn: filter and maps volumeInfo to BookMetadata.

import logging
from typing import Any

from booklend.metadata.http import HttpClient
from booklend.metadata.types import BookMetadata

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


def parse_volumes_response(isbn: str, data: dict[str, Any]) -> BookMetadata | None:
    """Convert a volumes search response into BookMetadata.

    Only the first item is used. Returns None when the response has no items,
    which is how Google Books says "no match", or when the item carries no
    volume details.
    """
    items = data.get("items") or []
    if not items:
        return None

    info = items[0].get("volumeInfo")
    if not isinstance(info, dict) or not info:
        return None
    image_links = info.get("imageLinks") or {}
    return BookMetadata(
        isbn=isbn,
        title=info.get("title", ""),
        authors=list(info.get("authors") or []),
        published_date=info.get("publishedDate", ""),
        thumbnail_url=image_links.get("thumbnail", ""),
        source="googlebooks",
    )


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books API.

    The API key is optional; anonymous requests work at a lower quota.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "googlebooks"

    def lookup(self, isbn: str) -> BookMetadata | None:
        params = {"q": f"isbn:{isbn}"}
        if self._api_key:
            params["key"] = self._api_key
        data = self._http.get(_VOLUMES_URL, params=params)
        if not isinstance(data, dict):
            logger.warning("Unexpected Google Books payload for %s: %r", isbn, type(data))
            return None
        return parse_volumes_response(isbn, data)
