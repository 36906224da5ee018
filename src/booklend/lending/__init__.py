# ABOUTME: Public API for the lending core: catalog, ledger, and reminder sweep.
# ABOUTME: Re-exports the record types shared by the CLI and the service facade.

from booklend.lending.catalog import InventoryCatalog
from booklend.lending.ledger import LendingLedger
from booklend.lending.mapping import BookStatus, Borrower, CatalogEntry, LoanRecord, ReturnReceipt
from booklend.lending.reminders import ReminderSweep, SweepResult

__all__ = [
    "BookStatus",
    "Borrower",
    "CatalogEntry",
    "InventoryCatalog",
    "LendingLedger",
    "LoanRecord",
    "ReminderSweep",
    "ReturnReceipt",
    "SweepResult",
]
