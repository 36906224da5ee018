# ABOUTME: Append-only lending ledger: borrow, return, and derived per-item status.
# ABOUTME: Enforces one open loan per isbn and fires best-effort notifications after writes.

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, timezone, tzinfo

from booklend.dates import add_days, civil_today, format_date
from booklend.errors import (
    AlreadyLentError,
    NotInInventoryError,
    NotLentError,
    UnauthorizedError,
    ValidationError,
)
from booklend.isbn import isbn_key, normalize_isbn
from booklend.lending.catalog import InventoryCatalog
from booklend.lending.locks import KeyedLock
from booklend.lending.mapping import (
    UNKNOWN_BORROWER,
    BookStatus,
    Borrower,
    LoanRecord,
    ReturnReceipt,
    loan_to_row,
    row_to_loan,
)
from booklend.metadata.types import UNKNOWN_TITLE
from booklend.notify.dispatcher import NotificationDispatcher
from booklend.notify.message import Notification, NotificationKind
from booklend.store.schema import TRANSACTIONS
from booklend.store.sheet import TabularStore

logger = logging.getLogger(__name__)

DEFAULT_LOAN_DAYS = 14

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LendingLedger:
    """Borrow/return history over the transactions sheet.

    The ledger is rebuilt from a full read of the sheet on every operation;
    there is no cache. Mutations for one isbn run under a per-isbn lock so
    the availability check and the write that follows it cannot interleave
    with another writer in this process.
    """

    def __init__(
        self,
        store: TabularStore,
        catalog: InventoryCatalog,
        *,
        tz: tzinfo,
        dispatcher: NotificationDispatcher | None = None,
        loan_days: int = DEFAULT_LOAN_DAYS,
        locks: KeyedLock | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._tz = tz
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._loan_days = loan_days
        self._locks = locks or KeyedLock()
        self._clock = clock

    def today(self) -> date:
        """Today in the ledger's civil calendar."""
        return civil_today(self._tz, self._clock())

    # --- Reads ---

    def loans(self) -> list[LoanRecord]:
        """Every loan in append order. Rows whose dates do not parse are skipped."""
        records = []
        for row in self._store.read_all(TRANSACTIONS):
            try:
                records.append(row_to_loan(row))
            except ValueError as exc:
                logger.warning("Skipping unreadable ledger row %s: %s", row.ref, exc)
        return records

    def open_loans(self) -> dict[str, LoanRecord]:
        """Index of isbn -> open loan. A later open row for the same isbn wins."""
        index: dict[str, LoanRecord] = {}
        for loan in self.loans():
            if loan.is_open:
                index[isbn_key(loan.isbn)] = loan
        return index

    def open_loan(self, isbn: str) -> LoanRecord | None:
        return self.open_loans().get(normalize_isbn(isbn))

    def history(self, isbn: str) -> list[LoanRecord]:
        """Full audit trail for one isbn, oldest first."""
        key = normalize_isbn(isbn)
        return [loan for loan in self.loans() if isbn_key(loan.isbn) == key]

    def list_status(self) -> list[BookStatus]:
        """Join the catalog with open loans, most recently registered first."""
        open_by_isbn = self.open_loans()
        statuses = [
            BookStatus(entry=entry, loan=open_by_isbn.get(isbn_key(entry.isbn)))
            for entry in self._catalog.list_entries()
        ]
        statuses.reverse()
        return statuses

    # --- Mutations ---

    def borrow(
        self,
        isbn: str,
        borrower: Borrower | None,
        group: str,
        *,
        title: str | None = None,
    ) -> LoanRecord:
        """Open a loan for a catalogued item.

        Args:
            isbn: Identifier as scanned; normalized before use.
            borrower: Verified identity from the authentication layer, or None.
            group: Borrower's affiliation tag; must be non-empty.
            title: Title to record; defaults to the catalog entry's title.

        Returns:
            The appended open LoanRecord.

        Raises:
            UnauthorizedError: If there is no verified identity.
            ValidationError: If the isbn or group is missing.
            NotInInventoryError: If the isbn is not in the catalog.
            AlreadyLentError: If the isbn already has an open loan.
        """
        if borrower is None or not borrower.email.strip():
            raise UnauthorizedError("A verified identity is required to borrow")
        key = normalize_isbn(isbn)
        group = (group or "").strip()
        if not group:
            raise ValidationError("Borrower group is required")

        with self._locks.hold(f"{TRANSACTIONS}:{key}"):
            entry = self._catalog.find(key)
            if entry is None:
                raise NotInInventoryError(key)

            current = self.open_loan(key)
            if current is not None:
                raise AlreadyLentError(key, format_date(current.due_at))

            borrowed_at = self.today()
            loan = LoanRecord(
                id=str(uuid.uuid4()),
                isbn=key,
                title=(title or "").strip() or entry.title or UNKNOWN_TITLE,
                borrower=Borrower(
                    email=borrower.email.strip(),
                    name=borrower.name.strip() or UNKNOWN_BORROWER,
                    group=group,
                ),
                borrowed_at=borrowed_at,
                due_at=add_days(borrowed_at, self._loan_days),
            )
            row = self._store.append(TRANSACTIONS, loan_to_row(loan))
            loan = replace(loan, ref=row.ref)

        logger.info("Lent %s to %s until %s", key, loan.borrower.email, loan.due_at)
        self._dispatcher.dispatch(
            Notification(
                kind=NotificationKind.BORROWED,
                title=loan.title,
                borrower_name=loan.borrower.name,
                borrower_email=loan.borrower.email,
                borrowed_at=loan.borrowed_at,
                due_at=loan.due_at,
            )
        )
        return loan

    def return_item(self, isbn: str) -> ReturnReceipt:
        """Close the newest open loan for an isbn.

        The ledger is scanned from the end backward, so if more than one
        open loan exists the most recently created one is closed. No other
        row is touched.

        Raises:
            ValidationError: If the isbn is missing.
            NotLentError: If no open loan exists. Nothing is written.
        """
        key = normalize_isbn(isbn)

        with self._locks.hold(f"{TRANSACTIONS}:{key}"):
            target = next(
                (
                    loan
                    for loan in reversed(self.loans())
                    if loan.is_open and isbn_key(loan.isbn) == key
                ),
                None,
            )
            if target is None or target.ref is None:
                raise NotLentError(key)

            returned_at = self.today()
            self._store.update(TRANSACTIONS, target.ref, {"returned_at": format_date(returned_at)})

        logger.info("Returned %s from %s", key, target.borrower.email)
        self._dispatcher.dispatch(
            Notification(
                kind=NotificationKind.RETURNED,
                title=target.title or UNKNOWN_TITLE,
                borrower_name=target.borrower.name,
                borrower_email=target.borrower.email,
                returned_at=returned_at,
            )
        )
        return ReturnReceipt(
            title=target.title or UNKNOWN_TITLE,
            borrower=target.borrower,
            returned_at=returned_at,
            loan_id=target.id,
        )

    def record_reminder(self, loan: LoanRecord, day: date) -> None:
        """Stamp a loan with the date its due-soon reminder went out.

        Raises:
            ValueError: If the loan has no store reference.
        """
        if loan.ref is None:
            raise ValueError(f"Loan {loan.id} has no row reference")
        self._store.update(TRANSACTIONS, loan.ref, {"reminded_at": format_date(day)})
