# ABOUTME: Structured notification message handed to every delivery channel.
# ABOUTME: Channels render it; the ledger only builds it.

from dataclasses import dataclass
from datetime import date
from enum import Enum


class NotificationKind(str, Enum):
    BORROWED = "borrowed"
    RETURNED = "returned"
    REMINDER = "reminder"


@dataclass(frozen=True)
class Notification:
    """A fully-formed lending event.

    ``borrowed_at`` and ``due_at`` are set for borrow and reminder events,
    ``returned_at`` for return events.
    """

    kind: NotificationKind
    title: str
    borrower_name: str
    borrower_email: str = ""
    borrowed_at: date | None = None
    due_at: date | None = None
    returned_at: date | None = None
