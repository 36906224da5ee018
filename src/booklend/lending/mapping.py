# ABOUTME: Catalog and ledger record types and their conversion to and from store rows.
# ABOUTME: Authors are stored comma-separated and blank cells mean "absent", as in the sheet.

from dataclasses import dataclass
from datetime import date

from booklend.dates import format_date, parse_date
from booklend.metadata.types import BookMetadata
from booklend.store.sheet import Row

UNKNOWN_BORROWER = "Unknown borrower"


@dataclass(frozen=True)
class Borrower:
    """A verified identity as captured at borrow time.

    ``email`` is the durable account identifier; ``group`` is a free-text
    affiliation tag.
    """

    email: str
    name: str = UNKNOWN_BORROWER
    group: str = ""


@dataclass(frozen=True)
class CatalogEntry:
    """One registered title. Immutable once written, authors included."""

    id: str
    isbn: str
    title: str
    authors: tuple[str, ...]
    published_date: str
    thumbnail_url: str
    registered_at: str

    def to_metadata(self) -> BookMetadata:
        return BookMetadata(
            isbn=self.isbn,
            title=self.title,
            authors=list(self.authors),
            published_date=self.published_date,
            thumbnail_url=self.thumbnail_url,
            source="inventory",
        )


@dataclass(frozen=True)
class LoanRecord:
    """One borrow/return cycle from the ledger.

    ``ref`` is the store row reference, used to close the loan or mark it
    reminded without touching any other row.
    """

    id: str
    isbn: str
    title: str
    borrower: Borrower
    borrowed_at: date
    due_at: date
    returned_at: date | None = None
    reminded_at: date | None = None
    ref: int | None = None

    @property
    def is_open(self) -> bool:
        return self.returned_at is None


@dataclass(frozen=True)
class BookStatus:
    """A catalog entry joined with its live lending state."""

    entry: CatalogEntry
    loan: LoanRecord | None = None

    @property
    def status(self) -> str:
        return "lent" if self.loan is not None else "available"


@dataclass(frozen=True)
class ReturnReceipt:
    """What a successful return reports back."""

    title: str
    borrower: Borrower
    returned_at: date
    loan_id: str


def split_authors(value: str) -> list[str]:
    return [a.strip() for a in value.split(",") if a.strip()]


def entry_to_row(entry: CatalogEntry) -> dict[str, str]:
    """Convert a CatalogEntry to a dict suitable for appending to the inventory sheet."""
    return {
        "id": entry.id,
        "isbn": entry.isbn,
        "title": entry.title,
        "authors": ", ".join(entry.authors),
        "published_date": entry.published_date,
        "image": entry.thumbnail_url,
        "registered_at": entry.registered_at,
    }


def row_to_entry(row: Row) -> CatalogEntry:
    return CatalogEntry(
        id=row.get("id"),
        isbn=row.get("isbn"),
        title=row.get("title"),
        authors=tuple(split_authors(row.get("authors"))),
        published_date=row.get("published_date"),
        thumbnail_url=row.get("image"),
        registered_at=row.get("registered_at"),
    )


def loan_to_row(loan: LoanRecord) -> dict[str, str]:
    """Convert a LoanRecord to a transactions row. Absent dates become blank cells."""
    return {
        "id": loan.id,
        "isbn": loan.isbn,
        "title": loan.title,
        "borrowed_at": format_date(loan.borrowed_at),
        "due_at": format_date(loan.due_at),
        "borrower_name": loan.borrower.name,
        "borrower_email": loan.borrower.email,
        "borrower_group": loan.borrower.group,
        "returned_at": format_date(loan.returned_at) if loan.returned_at else "",
        "reminded_at": format_date(loan.reminded_at) if loan.reminded_at else "",
    }


def row_to_loan(row: Row) -> LoanRecord:
    """Convert a transactions row back to a LoanRecord.

    Raises:
        ValueError: If the borrowed or due date cell does not parse.
    """
    returned = row.get("returned_at")
    reminded = row.get("reminded_at")
    return LoanRecord(
        id=row.get("id"),
        isbn=row.get("isbn"),
        title=row.get("title"),
        borrower=Borrower(
            email=row.get("borrower_email"),
            name=row.get("borrower_name") or UNKNOWN_BORROWER,
            group=row.get("borrower_group"),
        ),
        borrowed_at=parse_date(row.get("borrowed_at")),
        due_at=parse_date(row.get("due_at")),
        returned_at=parse_date(returned) if returned else None,
        reminded_at=parse_date(reminded) if reminded else None,
        ref=row.ref,
    )
