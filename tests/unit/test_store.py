# ABOUTME: Unit tests for the SQLite-backed tabular store and its migrations.
# ABOUTME: Validates read/append/update semantics, column checks, and schema versioning.

import sqlite3
from pathlib import Path

import pytest

from booklend.store.connection import _get_schema_version, open_store
from booklend.store.schema import INVENTORY, MIGRATIONS, SCHEMA_V1, TRANSACTIONS
from booklend.store.sheet import Row, SqliteSheetStore, TabularStore


class TestSqliteSheetStore:
    """Tests for SqliteSheetStore."""

    def test_satisfies_protocol(self, store: SqliteSheetStore) -> None:
        assert isinstance(store, TabularStore)

    def test_empty_table_reads_empty(self, store: SqliteSheetStore) -> None:
        assert store.read_all(INVENTORY) == []

    def test_append_returns_row_with_ref(self, store: SqliteSheetStore) -> None:
        row = store.append(INVENTORY, {"isbn": "9780000000001", "title": "Test Book"})
        assert row.ref > 0
        assert row.get("title") == "Test Book"

    def test_read_all_in_append_order(self, store: SqliteSheetStore) -> None:
        store.append(INVENTORY, {"isbn": "1"})
        store.append(INVENTORY, {"isbn": "2"})
        store.append(INVENTORY, {"isbn": "3"})
        assert [r.get("isbn") for r in store.read_all(INVENTORY)] == ["1", "2", "3"]

    def test_unset_cells_read_as_empty(self, store: SqliteSheetStore) -> None:
        store.append(TRANSACTIONS, {"isbn": "1"})
        row = store.read_all(TRANSACTIONS)[0]
        assert row.get("returned_at") == ""
        assert row.get("no_such_column") == ""

    def test_update_touches_only_target_row(self, store: SqliteSheetStore) -> None:
        first = store.append(TRANSACTIONS, {"isbn": "1"})
        store.append(TRANSACTIONS, {"isbn": "1"})
        store.update(TRANSACTIONS, first.ref, {"returned_at": "2024-03-01"})
        rows = store.read_all(TRANSACTIONS)
        assert rows[0].get("returned_at") == "2024-03-01"
        assert rows[1].get("returned_at") == ""

    def test_update_missing_row_raises(self, store: SqliteSheetStore) -> None:
        with pytest.raises(ValueError, match="not found"):
            store.update(TRANSACTIONS, 999, {"returned_at": "2024-03-01"})

    def test_update_with_no_values_is_noop(self, store: SqliteSheetStore) -> None:
        store.update(TRANSACTIONS, 999, {})

    def test_unknown_table_raises(self, store: SqliteSheetStore) -> None:
        with pytest.raises(ValueError, match="Unknown table"):
            store.read_all("books")

    def test_unknown_column_raises(self, store: SqliteSheetStore) -> None:
        with pytest.raises(ValueError, match="publisher"):
            store.append(INVENTORY, {"isbn": "1", "publisher": "Harcourt"})

    def test_row_ref_is_not_writable(self, store: SqliteSheetStore) -> None:
        with pytest.raises(ValueError, match="row_ref"):
            store.append(INVENTORY, {"row_ref": "7"})

    def test_values_are_stored_as_text(self, store: SqliteSheetStore) -> None:
        store.append(INVENTORY, {"isbn": 9780000000001})  # type: ignore[dict-item]
        assert store.read_all(INVENTORY)[0].get("isbn") == "9780000000001"


class TestRow:
    """Tests for Row.get."""

    def test_none_cell_reads_as_empty(self) -> None:
        assert Row(ref=1, values={"title": None}).get("title") == ""  # type: ignore[dict-item]


class TestOpenStore:
    """Tests for open_store and migrations."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "library.db"
        conn = open_store(path)
        conn.close()
        assert path.exists()

    def test_fresh_db_has_latest_version(self, tmp_path: Path) -> None:
        conn = open_store(tmp_path / "fresh.db")
        assert _get_schema_version(conn) == MIGRATIONS[-1][0]
        conn.close()

    def test_migrations_list_is_ordered(self) -> None:
        versions = [v for v, _ in MIGRATIONS]
        assert versions == sorted(versions)
        assert len(versions) == len(set(versions))

    def test_v1_database_is_upgraded(self, tmp_path: Path) -> None:
        """A store created before reminder tracking gains the reminded_at column."""
        path = tmp_path / "old.db"
        conn = sqlite3.connect(str(path))
        conn.executescript(SCHEMA_V1)
        conn.execute("INSERT INTO transactions (isbn, due_at) VALUES ('1', '2024-03-05')")
        conn.commit()
        conn.close()

        store = SqliteSheetStore(open_store(path))
        row = store.read_all(TRANSACTIONS)[0]
        assert row.get("due_at") == "2024-03-05"
        assert row.get("reminded_at") == ""
        store.close()

    def test_reopen_is_idempotent(self, tmp_path: Path) -> None:
        path = tmp_path / "again.db"
        open_store(path).close()
        conn = open_store(path)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        conn.close()
        assert count == len(MIGRATIONS) + 1
