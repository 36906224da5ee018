# ABOUTME: Inventory catalog over the tabular store: registration and lookup by isbn.
# ABOUTME: Registration is duplicate-checked; entries are never mutated or deleted here.

import logging
import uuid
from datetime import datetime

from booklend.dates import utc_timestamp
from booklend.errors import DuplicateEntryError, ValidationError
from booklend.isbn import isbn_key, normalize_isbn
from booklend.lending.locks import KeyedLock
from booklend.lending.mapping import CatalogEntry, entry_to_row, row_to_entry
from booklend.metadata.types import BookMetadata
from booklend.store.schema import INVENTORY
from booklend.store.sheet import TabularStore

logger = logging.getLogger(__name__)


class InventoryCatalog:
    """Wraps a TabularStore and provides typed access to the inventory sheet.

    Also satisfies the MetadataProvider protocol (``name`` + ``lookup``) so
    the resolver can use it for catalog-confirmation mode.
    """

    def __init__(self, store: TabularStore, locks: KeyedLock | None = None) -> None:
        self._store = store
        self._locks = locks or KeyedLock()

    @property
    def name(self) -> str:
        return "inventory"

    def list_entries(self) -> list[CatalogEntry]:
        """Return every catalog entry in registration (append) order."""
        return [row_to_entry(row) for row in self._store.read_all(INVENTORY)]

    def find(self, isbn: str) -> CatalogEntry | None:
        """Linear scan for an exact normalized-isbn match.

        Stored isbns are normalized before comparison so rows typed into
        the sheet by hand with hyphens still match.
        """
        target = normalize_isbn(isbn)
        for entry in self.list_entries():
            if isbn_key(entry.isbn) == target:
                return entry
        return None

    def lookup(self, isbn: str) -> BookMetadata | None:
        entry = self.find(isbn)
        return entry.to_metadata() if entry else None

    def register(
        self,
        isbn: str,
        metadata: BookMetadata,
        *,
        now: datetime | None = None,
    ) -> CatalogEntry:
        """Add a title to the catalog.

        Args:
            isbn: Identifier as scanned or typed; normalized before use.
            metadata: Resolved or user-confirmed metadata for the title.
            now: Registration instant; defaults to the current time.

        Returns:
            The newly appended CatalogEntry.

        Raises:
            ValidationError: If the isbn or title is missing.
            DuplicateEntryError: If the isbn is already registered. Nothing is written.
        """
        key = normalize_isbn(isbn)
        if not metadata.title.strip():
            raise ValidationError("Title is required")

        with self._locks.hold(f"{INVENTORY}:{key}"):
            if self.find(key) is not None:
                raise DuplicateEntryError(key)

            entry = CatalogEntry(
                id=str(uuid.uuid4()),
                isbn=key,
                title=metadata.title,
                authors=tuple(metadata.authors),
                published_date=metadata.published_date,
                thumbnail_url=metadata.thumbnail_url,
                registered_at=utc_timestamp(now),
            )
            self._store.append(INVENTORY, entry_to_row(entry))

        logger.info("Registered %s (%s)", key, entry.title)
        return entry
