# ABOUTME: Scheduled due-soon reminder sweep over the lending ledger.
# ABOUTME: Emails borrowers whose open loan falls due a fixed number of days from today.

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import date

from booklend.dates import add_days
from booklend.errors import ConfigurationError
from booklend.lending.ledger import LendingLedger
from booklend.lending.mapping import LoanRecord
from booklend.notify.dispatcher import NotificationDispatcher
from booklend.notify.message import Notification, NotificationKind

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DAYS = 2


@dataclass
class SweepResult:
    """Summary of one sweep run.

    ``targets`` holds every open loan due on ``target_date``; the other
    lists partition it by what happened. ``unrecorded`` is the subset of
    ``sent`` whose reminder marker could not be written.
    """

    target_date: date
    targets: list[LoanRecord] = field(default_factory=list)
    sent: list[LoanRecord] = field(default_factory=list)
    skipped_no_email: list[LoanRecord] = field(default_factory=list)
    already_reminded: list[LoanRecord] = field(default_factory=list)
    failed: list[LoanRecord] = field(default_factory=list)
    unrecorded: list[LoanRecord] = field(default_factory=list)


def find_due_loans(loans: list[LoanRecord], target_date: date) -> list[LoanRecord]:
    """Open loans whose due date is exactly ``target_date``, in ledger order."""
    return [loan for loan in loans if loan.is_open and loan.due_at == target_date]


class ReminderSweep:
    """Read-mostly pass that sends at most one reminder per loan.

    A loan is stamped with ``reminded_at`` only after a channel accepted the
    message, so a failed send is retried by the next run while a successful
    one is not repeated.
    """

    def __init__(
        self,
        ledger: LendingLedger,
        dispatcher: NotificationDispatcher,
        *,
        reminder_days: int = DEFAULT_REMINDER_DAYS,
    ) -> None:
        self._ledger = ledger
        self._dispatcher = dispatcher
        self._reminder_days = reminder_days

    def run(self, today: date | None = None) -> SweepResult:
        """Send reminders for loans due ``reminder_days`` after ``today``.

        Args:
            today: The sweep date; defaults to today in the ledger's calendar.

        Raises:
            ConfigurationError: If no channel can deliver reminders.
        """
        if not self._dispatcher.accepts(NotificationKind.REMINDER):
            raise ConfigurationError("No notification channel is configured for reminders")

        day = today or self._ledger.today()
        result = SweepResult(target_date=add_days(day, self._reminder_days))
        result.targets = find_due_loans(self._ledger.loans(), result.target_date)
        logger.info(
            "Reminder sweep for due date %s: %d loan(s)", result.target_date, len(result.targets)
        )

        for loan in result.targets:
            if not loan.borrower.email:
                result.skipped_no_email.append(loan)
                continue
            if loan.reminded_at is not None:
                result.already_reminded.append(loan)
                continue

            delivered = self._dispatcher.dispatch(
                Notification(
                    kind=NotificationKind.REMINDER,
                    title=loan.title,
                    borrower_name=loan.borrower.name,
                    borrower_email=loan.borrower.email,
                    borrowed_at=loan.borrowed_at,
                    due_at=loan.due_at,
                )
            )
            if not delivered:
                result.failed.append(loan)
                continue

            result.sent.append(loan)
            try:
                self._ledger.record_reminder(loan, day)
            except (sqlite3.Error, OSError, ValueError) as exc:
                logger.error(
                    "Could not record reminder for loan %s (%s): %s", loan.id, loan.isbn, exc
                )
                result.unrecorded.append(loan)

        return result
