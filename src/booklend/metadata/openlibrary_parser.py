# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts OL edition and author payloads into BookMetadata pieces.

from typing import Any

from booklend.metadata.types import BookMetadata

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"


def parse_edition_response(isbn: str, data: dict[str, Any]) -> BookMetadata:
    """Parse an Open Library ``/isbn/<isbn>.json`` edition response.

    Authors are not resolved here: the edition only carries author keys,
    which the provider follows up with ``parse_author_name``.
    """
    covers = [c for c in data.get("covers", []) if isinstance(c, int) and c > 0]
    thumbnail = build_cover_url(str(covers[0]), kind="id") if covers else ""

    return BookMetadata(
        isbn=isbn,
        title=data.get("title", ""),
        published_date=data.get("publish_date", ""),
        thumbnail_url=thumbnail,
        source="openlibrary",
    )


def parse_author_keys(data: dict[str, Any]) -> list[str]:
    """Collect ``/authors/...`` keys from an edition response, in order."""
    keys = []
    for entry in data.get("authors", []):
        key = entry.get("key", "") if isinstance(entry, dict) else ""
        if key:
            keys.append(key)
    return keys


def parse_author_name(data: dict[str, Any]) -> str:
    """Extract the author name from an Open Library Author response."""
    return data.get("name") or data.get("personal_name") or ""


def build_cover_url(value: str, kind: str = "isbn", size: str = "M") -> str:
    """Build an Open Library cover image URL.

    Args:
        value: The ISBN or numeric cover id.
        kind: ``"isbn"`` or ``"id"``.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{kind}/{value}-{size}.jpg"
