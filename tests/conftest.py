"""Shared pytest fixtures for seder tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from seder.database.factories import create_sqlite_database
from seder.domain.analytics import AnalyticsService
from seder.domain.category import CategoryService
from seder.domain.clients import ClientService
from seder.domain.entities import IncomeEntry
from seder.domain.income import IncomeService

TODAY = date(2024, 6, 15)


@pytest.fixture
def today():
    """Fixed reference date for status and KPI tests."""
    return TODAY


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
def rules_path(tmp_path):
    """Path for a classification rules file (not created)."""
    return tmp_path / "rules.json"


@pytest.fixture
def income_service(temp_db):
    """Create an IncomeService with a temporary database."""
    return IncomeService(temp_db)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def make_entry():
    """Build in-memory income entries with sensible defaults."""
    counter = {"id": 0}

    def _make(**kwargs) -> IncomeEntry:
        counter["id"] += 1
        kwargs.setdefault("id", counter["id"])
        kwargs.setdefault("date", TODAY)
        amount = kwargs.setdefault("amount_gross", Decimal("100.00"))
        if not isinstance(amount, Decimal):
            kwargs["amount_gross"] = Decimal(str(amount))
        if "amount_paid" in kwargs and not isinstance(kwargs["amount_paid"], Decimal):
            kwargs["amount_paid"] = Decimal(str(kwargs["amount_paid"]))
        return IncomeEntry(**kwargs)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
