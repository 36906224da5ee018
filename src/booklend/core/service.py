# ABOUTME: LendingService facade composing resolver, catalog, ledger, and reminder sweep.
# ABOUTME: The one surface transports call; store failures come out as UpstreamError.

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date

from booklend.config import Settings
from booklend.errors import NotFoundError, NotInInventoryError, UpstreamError
from booklend.isbn import normalize_isbn
from booklend.lending.catalog import InventoryCatalog
from booklend.lending.ledger import Clock, LendingLedger, utc_now
from booklend.lending.locks import KeyedLock
from booklend.lending.mapping import BookStatus, Borrower, CatalogEntry, LoanRecord, ReturnReceipt
from booklend.lending.reminders import ReminderSweep, SweepResult
from booklend.metadata.http import BooklendHttpClient
from booklend.metadata.provider import MetadataProvider
from booklend.metadata.resolver import MetadataResolver, build_providers
from booklend.metadata.types import BookMetadata
from booklend.notify.dispatcher import NotificationDispatcher, build_dispatcher
from booklend.store.connection import open_store
from booklend.store.sheet import SqliteSheetStore, TabularStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, isbn: str | None = None) -> Iterator[None]:
    """Convert store transport failures into UpstreamError, logging the detail."""
    try:
        yield
    except (sqlite3.Error, OSError) as exc:
        logger.error("%s failed for %s: %s", operation, isbn or "-", exc)
        raise UpstreamError(f"{operation} failed, please try again later") from exc


class LendingService:
    """Registration, lending, and reminder operations over one store.

    Every operation returns a typed payload or raises a BooklendError
    subclass. Components are injected so tests can substitute the store,
    providers, and channels.
    """

    def __init__(
        self,
        store: TabularStore,
        providers: Sequence[MetadataProvider] = (),
        *,
        settings: Settings | None = None,
        dispatcher: NotificationDispatcher | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings or Settings()
        self._store = store
        self._dispatcher = dispatcher or NotificationDispatcher()
        locks = KeyedLock()
        self.catalog = InventoryCatalog(store, locks)
        self.ledger = LendingLedger(
            store,
            self.catalog,
            tz=self.settings.tz,
            dispatcher=self._dispatcher,
            loan_days=self.settings.loan_days,
            locks=locks,
            clock=clock,
        )
        self.resolver = MetadataResolver(providers, inventory=self.catalog)
        self._sweep = ReminderSweep(
            self.ledger, self._dispatcher, reminder_days=self.settings.reminder_days
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LendingService":
        """Open the configured store and wire the real providers and channels."""
        with _store_errors("Opening store"):
            conn = open_store(settings.db_path)
        http_client = BooklendHttpClient(
            timeout=settings.provider_timeout,
            max_retries=settings.provider_retries,
        )
        return cls(
            SqliteSheetStore(conn),
            build_providers(settings, http_client),
            settings=settings,
            dispatcher=build_dispatcher(settings),
        )

    def close(self) -> None:
        close = getattr(self._store, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "LendingService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Resolution ---

    def resolve_catalog(self, identifier: str) -> BookMetadata:
        """Confirm an item is in our inventory.

        Raises:
            ValidationError: If the identifier is empty after normalization.
            NotInInventoryError: If the isbn is not registered.
        """
        isbn = normalize_isbn(identifier)
        with _store_errors("Inventory lookup", isbn):
            metadata = self.resolver.resolve_catalog(isbn)
        if metadata is None:
            raise NotInInventoryError(isbn)
        return metadata

    def resolve_discovery(self, identifier: str) -> BookMetadata:
        """Look an isbn up in the external providers.

        Raises:
            ValidationError: If the identifier is empty after normalization.
            NotFoundError: If no provider had the isbn.
        """
        isbn = normalize_isbn(identifier)
        metadata = self.resolver.resolve_discovery(isbn)
        if metadata is None:
            raise NotFoundError(f"No provider has metadata for {isbn}")
        return metadata

    # --- Catalog and ledger ---

    def register(self, isbn: str, metadata: BookMetadata) -> CatalogEntry:
        with _store_errors("Registration", isbn):
            return self.catalog.register(isbn, metadata)

    def borrow(
        self,
        isbn: str,
        identity: Borrower | None,
        group: str,
        title: str | None = None,
    ) -> LoanRecord:
        with _store_errors("Borrow", isbn):
            return self.ledger.borrow(isbn, identity, group, title=title)

    def return_item(self, isbn: str) -> ReturnReceipt:
        with _store_errors("Return", isbn):
            return self.ledger.return_item(isbn)

    def list_status(self) -> list[BookStatus]:
        with _store_errors("Listing status"):
            return self.ledger.list_status()

    def history(self, isbn: str) -> list[LoanRecord]:
        with _store_errors("History", isbn):
            return self.ledger.history(isbn)

    def run_reminder_sweep(self, today: date | None = None) -> SweepResult:
        with _store_errors("Reminder sweep"):
            return self._sweep.run(today)
