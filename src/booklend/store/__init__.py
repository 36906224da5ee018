# ABOUTME: Public API for the booklend storage layer.
# ABOUTME: Exports connection management and the tabular store contract.

from booklend.store.connection import open_store
from booklend.store.schema import INVENTORY, TRANSACTIONS
from booklend.store.sheet import Row, SqliteSheetStore, TabularStore

__all__ = [
    "INVENTORY",
    "TRANSACTIONS",
    "Row",
    "SqliteSheetStore",
    "TabularStore",
    "open_store",
]
