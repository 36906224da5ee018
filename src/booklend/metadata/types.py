# ABOUTME: Core metadata data structure returned by every resolution path.
# ABOUTME: BookMetadata always has every field populated; gaps become explicit placeholders.

from dataclasses import dataclass, field

UNKNOWN_TITLE = "Unknown title"
UNKNOWN_AUTHOR = "Unknown author"


@dataclass
class BookMetadata:
    """Normalized bibliographic metadata for one ISBN.

    This is the interchange format between providers, the catalog, and the
    CLI. Providers hand over whatever they found; ``__post_init__`` fills the
    holes so downstream code never sees partial data.
    """

    isbn: str
    title: str = UNKNOWN_TITLE
    authors: list[str] = field(default_factory=list)
    published_date: str = ""
    thumbnail_url: str = ""
    source: str = ""

    def __post_init__(self) -> None:
        self.title = (self.title or "").strip() or UNKNOWN_TITLE
        self.authors = [a.strip() for a in self.authors if a and a.strip()] or [UNKNOWN_AUTHOR]
        self.published_date = self.published_date or ""
        self.thumbnail_url = self.thumbnail_url or ""

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors)
