# ABOUTME: MetadataProvider protocol defining the contract for bibliographic sources.
# ABOUTME: Google Books, OpenBD, and Open Library each implement this for the fallback chain.

from typing import Protocol, runtime_checkable

from booklend.metadata.types import BookMetadata


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for ISBN lookup services.

    ``lookup`` returns metadata, or None for a well-formed "no match"
    response. Transport failures that survive the HTTP client's retry
    surface as MetadataFetchError so the resolver can tell them apart.
    """

    @property
    def name(self) -> str: ...

    def lookup(self, isbn: str) -> BookMetadata | None: ...
