# ABOUTME: OpenBD metadata provider, strong for Japanese-market titles.
# ABOUTME: OpenBD answers [null] for unknown ISBNs and gives authors as one spaced string.

from typing import Any

from booklend.metadata.http import HttpClient
from booklend.metadata.types import BookMetadata

_GET_URL = "https://api.openbd.jp/v1/get"


def parse_get_response(isbn: str, data: Any) -> BookMetadata | None:
    """Convert an OpenBD ``/get`` response into BookMetadata.

    The endpoint returns a list with one entry per requested ISBN; a null
    entry, or one without a summary, means no match.
    """
    if not isinstance(data, list) or not data or data[0] is None:
        return None

    summary = data[0].get("summary") if isinstance(data[0], dict) else None
    if not isinstance(summary, dict) or not summary:
        return None
    author = summary.get("author") or ""
    return BookMetadata(
        isbn=isbn,
        title=summary.get("title", ""),
        authors=author.split(" ") if author else [],
        published_date=summary.get("pubdate", ""),
        thumbnail_url=summary.get("cover", ""),
        source="openbd",
    )


class OpenBDProvider:
    """Metadata provider backed by api.openbd.jp (no credentials needed)."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openbd"

    def lookup(self, isbn: str) -> BookMetadata | None:
        return parse_get_response(isbn, self._http.get(_GET_URL, params={"isbn": isbn}))
