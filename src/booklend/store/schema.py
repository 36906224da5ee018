# ABOUTME: SQL DDL for the booklend store: one table per sheet, every cell text.
# ABOUTME: Mirrors the spreadsheet layout (inventory, transactions) plus schema versioning.

INVENTORY = "inventory"
TRANSACTIONS = "transactions"

TABLES = (INVENTORY, TRANSACTIONS)

SCHEMA_V1 = """
-- Catalog sheet: one row per registered title
CREATE TABLE inventory (
    row_ref        INTEGER PRIMARY KEY AUTOINCREMENT,
    id             TEXT NOT NULL DEFAULT '',
    isbn           TEXT NOT NULL DEFAULT '',
    title          TEXT NOT NULL DEFAULT '',
    authors        TEXT NOT NULL DEFAULT '',
    published_date TEXT NOT NULL DEFAULT '',
    image          TEXT NOT NULL DEFAULT '',
    registered_at  TEXT NOT NULL DEFAULT ''
);

-- Ledger sheet: one row per borrow/return cycle, append-only
CREATE TABLE transactions (
    row_ref        INTEGER PRIMARY KEY AUTOINCREMENT,
    id             TEXT NOT NULL DEFAULT '',
    isbn           TEXT NOT NULL DEFAULT '',
    title          TEXT NOT NULL DEFAULT '',
    borrowed_at    TEXT NOT NULL DEFAULT '',
    due_at         TEXT NOT NULL DEFAULT '',
    borrower_name  TEXT NOT NULL DEFAULT '',
    borrower_email TEXT NOT NULL DEFAULT '',
    borrower_group TEXT NOT NULL DEFAULT '',
    returned_at    TEXT NOT NULL DEFAULT ''
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# V2: per-loan reminder marker so repeated sweeps do not resend
MIGRATION_V2 = """
ALTER TABLE transactions ADD COLUMN reminded_at TEXT NOT NULL DEFAULT '';

INSERT INTO schema_version (version) VALUES (2);
"""

# Ordered list of (version, sql) migrations to apply after SCHEMA_V1
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]
