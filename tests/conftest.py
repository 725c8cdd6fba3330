"""Shared pytest fixtures for horadofrango tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from horadofrango.database.factories import create_sqlite_database
from horadofrango.domain.store import FinanceStore


class FakeClock:
    """Controllable replacement for datetime.now."""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def set(self, now: datetime) -> None:
        self.current = now


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock frozen at 2026-10-16 12:00 local time."""
    return FakeClock(datetime(2026, 10, 16, 12, 0))


@pytest.fixture
def store(temp_db, clock):
    """Create a FinanceStore on a temporary database with a fake clock."""
    return FinanceStore(temp_db, now=clock)


@pytest.fixture
def sample_bank(store):
    """Create a bank with an opening balance of 100."""
    return store.add_bank(name="Test Bank", color="#123456", initial_balance=Decimal("100"))


@pytest.fixture
def frango_category(store):
    """Create a product category whose name contains 'frango'."""
    return store.add_category("Frango Assado")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
