# ABOUTME: Tabular store contract (read all rows, append a row, update a row) and its SQLite backing.
# ABOUTME: No cross-row transactions and no concurrency token, matching a spreadsheet.

import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from booklend.store.schema import TABLES


@dataclass(frozen=True)
class Row:
    """One row as read from a table, with its store-assigned reference."""

    ref: int
    values: Mapping[str, str]

    def get(self, column: str) -> str:
        """Cell value, or the empty string for a blank or missing cell."""
        return self.values.get(column) or ""


@runtime_checkable
class TabularStore(Protocol):
    """The three operations the ledger and catalog rely on."""

    def read_all(self, table: str) -> list[Row]: ...

    def append(self, table: str, values: Mapping[str, str]) -> Row: ...

    def update(self, table: str, ref: int, values: Mapping[str, str]) -> None: ...


class SqliteSheetStore:
    """TabularStore over a sqlite3 connection opened by ``open_store``.

    Rows come back in append order. Each write commits on its own; there is
    no transaction spanning a read and the write that follows it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._columns: dict[str, list[str]] = {}

    def read_all(self, table: str) -> list[Row]:
        self._check_table(table)
        cursor = self._conn.execute(f"SELECT * FROM {table} ORDER BY row_ref")
        rows = []
        for record in cursor.fetchall():
            values = {k: record[k] for k in record.keys() if k != "row_ref"}
            rows.append(Row(ref=record["row_ref"], values=values))
        return rows

    def append(self, table: str, values: Mapping[str, str]) -> Row:
        """Append one row.

        Raises:
            ValueError: If the table or any column is unknown.
        """
        self._check_columns(table, values)
        columns = ", ".join(values.keys())
        placeholders = ", ".join("?" for _ in values)
        cursor = self._conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            [str(v) for v in values.values()],
        )
        self._conn.commit()
        return Row(ref=cursor.lastrowid, values=dict(values))  # type: ignore[arg-type]

    def update(self, table: str, ref: int, values: Mapping[str, str]) -> None:
        """Overwrite the given cells of one row.

        Raises:
            ValueError: If the table or a column is unknown, or no row has ``ref``.
        """
        if not values:
            return
        self._check_columns(table, values)
        set_clause = ", ".join(f"{k} = ?" for k in values)
        cursor = self._conn.execute(
            f"UPDATE {table} SET {set_clause} WHERE row_ref = ?",
            [*(str(v) for v in values.values()), ref],
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Row {ref} not found in {table}")

    def close(self) -> None:
        self._conn.close()

    def _check_table(self, table: str) -> None:
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")

    def _check_columns(self, table: str, values: Mapping[str, str]) -> None:
        self._check_table(table)
        if table not in self._columns:
            cursor = self._conn.execute(f"PRAGMA table_info({table})")
            self._columns[table] = [r["name"] for r in cursor.fetchall()]
        unknown = [k for k in values if k not in self._columns[table] or k == "row_ref"]
        if unknown:
            raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")
