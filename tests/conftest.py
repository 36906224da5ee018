# ABOUTME: Shared pytest fixtures for booklend tests.
# ABOUTME: Provides a temporary store, a fixed clock, recording channels, and a wired service.

from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from booklend.config import Settings
from booklend.core.service import LendingService
from booklend.notify.dispatcher import NotificationDispatcher
from booklend.store.connection import open_store
from booklend.store.sheet import SqliteSheetStore
from tests.fixtures.fakes import FakeClock, RecordingChannel

# 2024-02-20 12:00 in Tokyo
FIXED_NOW = datetime(2024, 2, 20, 3, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path: Path) -> Iterator[SqliteSheetStore]:
    """A SqliteSheetStore backed by a temporary database."""
    sheet = SqliteSheetStore(open_store(tmp_path / "test.db"))
    yield sheet
    sheet.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def channel() -> RecordingChannel:
    """A channel accepting every notification kind."""
    return RecordingChannel()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(db_path=tmp_path / "test.db")


@pytest.fixture
def service(
    store: SqliteSheetStore,
    settings: Settings,
    clock: FakeClock,
    channel: RecordingChannel,
) -> LendingService:
    """A LendingService over the temporary store with no external providers."""
    return LendingService(
        store,
        settings=settings,
        dispatcher=NotificationDispatcher([channel]),
        clock=clock,
    )
