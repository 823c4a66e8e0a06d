"""Tests for database mappers."""

from datetime import UTC, date, datetime
from decimal import Decimal

from seder.database.mappers import category_to_domain, client_to_domain, income_entry_to_domain
from seder.database.models import (
    Category as ORMCategory,
    Client as ORMClient,
    IncomeEntry as ORMIncomeEntry,
)
from seder.domain.entities import (
    Category,
    Client,
    IncomeEntry,
    InvoiceStatus,
    PaymentStatus,
)


class TestClientMapper:
    """Tests for Client mapper."""

    def test_client_to_domain(self):
        orm_client = ORMClient(
            id=1,
            name="Acme",
            email="a@acme.test",
            default_rate=Decimal("500.00"),
            is_archived=True,
            display_order=3,
            created_at=datetime.now(UTC),
        )
        client = client_to_domain(orm_client)

        assert isinstance(client, Client)
        assert client.name == "Acme"
        assert client.default_rate == Decimal("500.00")
        assert client.is_archived is True
        assert client.display_order == 3
        assert client.created_at == orm_client.created_at


class TestCategoryMapper:
    def test_category_to_domain(self):
        orm_category = ORMCategory(id=2, name="Gigs", color="emerald", icon="Sparkles", display_order=1)
        category = category_to_domain(orm_category)

        assert isinstance(category, Category)
        assert category.name == "Gigs"
        assert category.is_archived is False


class TestIncomeEntryMapper:
    """Tests for IncomeEntry mapper."""

    def test_income_entry_to_domain(self):
        orm_entry = ORMIncomeEntry(
            id=5,
            date=date(2024, 6, 1),
            description="Wedding",
            client_name="Acme",
            amount_gross=Decimal("1000.00"),
            amount_paid=Decimal("1000.00"),
            vat_rate=Decimal("18.00"),
            includes_vat=True,
            invoice_status="paid",
            payment_status="paid",
            paid_date=date(2024, 6, 5),
        )
        orm_entry.category = ORMCategory(id=2, name="Gigs", color="emerald", icon="Sparkles")

        entry = income_entry_to_domain(orm_entry)

        assert isinstance(entry, IncomeEntry)
        assert entry.invoice_status == InvoiceStatus.PAID
        assert entry.payment_status == PaymentStatus.PAID
        assert entry.amount_paid == Decimal("1000.00")
        assert entry.category_name == "Gigs"
        assert entry.paid_date == date(2024, 6, 5)

    def test_missing_optional_values(self):
        orm_entry = ORMIncomeEntry(
            id=6,
            date=date(2024, 6, 1),
            amount_gross=Decimal("10"),
            vat_rate=Decimal("18"),
            invoice_status="draft",
            payment_status="unpaid",
        )

        entry = income_entry_to_domain(orm_entry)

        assert entry.description == ""
        assert entry.client_name == ""
        assert entry.amount_paid == Decimal("0")
        assert entry.category_name is None
