# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up an edition by ISBN and follows author keys to fill in names.

import logging

from booklend.metadata.http import HttpClient, MetadataFetchError
from booklend.metadata.openlibrary_parser import (
    parse_author_keys,
    parse_author_name,
    parse_edition_response,
)
from booklend.metadata.types import BookMetadata

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    def lookup(self, isbn: str) -> BookMetadata | None:
        """Look up a book by ISBN via the Open Library ISBN endpoint.

        A 404 is Open Library's "no match" answer and returns None. Other
        fetch failures propagate as MetadataFetchError.
        """
        try:
            data = self._http.get(f"{_OL_BASE}/isbn/{isbn}.json")
        except MetadataFetchError as exc:
            if exc.status_code == 404:
                return None
            raise

        if not isinstance(data, dict) or not data.get("title"):
            return None

        metadata = parse_edition_response(isbn, data)
        authors = self._fetch_authors(parse_author_keys(data))
        if authors:
            metadata.authors = authors
        return metadata

    def _fetch_authors(self, author_keys: list[str]) -> list[str]:
        """Resolve author keys to names, skipping any that fail to load."""
        authors: list[str] = []
        for author_key in author_keys:
            try:
                author_data = self._http.get(f"{_OL_BASE}{author_key}.json")
            except MetadataFetchError as exc:
                logger.warning("Author lookup failed for %s: %s", author_key, exc)
                continue
            name = parse_author_name(author_data)
            if name:
                authors.append(name)
        return authors
