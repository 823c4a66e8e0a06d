"""Tests for the income entry service."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from seder.domain.entities import CalendarEvent, DisplayStatus, InvoiceStatus, PaymentStatus
from seder.domain.errors import MoneyError, NotFoundError, ValidationError


def test_create_entry_defaults(income_service, today):
    entry_id = income_service.create_entry(date=today, amount_gross="₪1,200", client_name=" Acme ")
    entry = income_service.get_entry(entry_id)

    assert entry.amount_gross == Decimal("1200.00")
    assert entry.amount_paid == Decimal("0")
    assert entry.vat_rate == Decimal("18")
    assert entry.includes_vat is True
    assert entry.client_name == "Acme"
    assert entry.invoice_status == InvoiceStatus.DRAFT
    assert entry.payment_status == PaymentStatus.UNPAID


def test_create_entry_links_existing_client(income_service, client_service, today):
    client_id = client_service.create_client("Acme")
    entry_id = income_service.create_entry(date=today, amount_gross=100, client_name="Acme")
    assert income_service.get_entry(entry_id).client_id == client_id


def test_create_entry_with_category(income_service, category_service, today):
    category_service.create_category("Gigs")
    entry_id = income_service.create_entry(date=today, amount_gross=100, category_name="Gigs")
    assert income_service.get_entry(entry_id).category_name == "Gigs"


def test_create_entry_unknown_category(income_service, today):
    with pytest.raises(NotFoundError, match="Category 'Nope' not found"):
        income_service.create_entry(date=today, amount_gross=100, category_name="Nope")


def test_create_entry_rejects_bad_amounts(income_service, today):
    with pytest.raises(MoneyError):
        income_service.create_entry(date=today, amount_gross="lots")
    with pytest.raises(ValidationError, match="negative"):
        income_service.create_entry(date=today, amount_gross=-5)
    with pytest.raises(ValidationError, match="VAT rate"):
        income_service.create_entry(date=today, amount_gross=5, vat_rate=-1)


def test_set_status_round_trip(income_service, today):
    entry_id = income_service.create_entry(date=today - timedelta(days=3), amount_gross=800)

    sent = income_service.set_status(entry_id, DisplayStatus.SENT, today)
    assert sent.invoice_sent_date == today

    later = today + timedelta(days=5)
    paid = income_service.set_status(entry_id, DisplayStatus.PAID, later)
    stored = income_service.get_entry(entry_id)

    assert paid == stored
    assert stored.amount_paid == Decimal("800.00")
    assert stored.paid_date == later
    assert stored.invoice_sent_date == today

    reverted = income_service.set_status(entry_id, DisplayStatus.SENT, later)
    assert reverted.invoice_sent_date == today
    assert reverted.paid_date is None


def test_set_status_missing_entry(income_service, today):
    with pytest.raises(NotFoundError, match="Income entry 42 not found"):
        income_service.set_status(42, DisplayStatus.PAID, today)


def test_update_entry(income_service, category_service, today):
    category_service.create_category("Gigs")
    entry_id = income_service.create_entry(date=today, amount_gross=100, category_name="Gigs")

    income_service.update_entry(entry_id, amount_gross="250", description="Wedding", category_name=None)
    entry = income_service.get_entry(entry_id)

    assert entry.amount_gross == Decimal("250.00")
    assert entry.description == "Wedding"
    assert entry.category_id is None


def test_update_amount_of_paid_entry_keeps_it_settled(income_service, today):
    entry_id = income_service.create_entry(date=today, amount_gross=100)
    income_service.set_status(entry_id, DisplayStatus.PAID, today)

    income_service.update_entry(entry_id, amount_gross=150)

    assert income_service.get_entry(entry_id).amount_paid == Decimal("150.00")


def test_delete_entry(income_service, today):
    entry_id = income_service.create_entry(date=today, amount_gross=100)
    income_service.delete_entry(entry_id)

    assert income_service.get_entry(entry_id) is None
    with pytest.raises(NotFoundError):
        income_service.delete_entry(entry_id)


def test_list_entries_for_month(income_service):
    income_service.create_entry(date=date(2024, 5, 31), amount_gross=1)
    income_service.create_entry(date=date(2024, 6, 1), amount_gross=2)
    income_service.create_entry(date=date(2024, 6, 30), amount_gross=3)

    entries = income_service.list_entries_for_month(2024, 6)

    assert [entry.amount_gross for entry in entries] == [Decimal("2.00"), Decimal("3.00")]


def test_unique_client_names(income_service, today):
    for name in ["Globex", "Acme", "Globex", ""]:
        income_service.create_entry(date=today, amount_gross=1, client_name=name)
    assert income_service.unique_client_names() == ["Acme", "Globex"]


class TestCalendarImport:
    """Tests for importing calendar events as draft entries."""

    def _events(self):
        return [
            CalendarEvent(
                id="evt-1",
                title="Wedding gig",
                start=datetime(2024, 6, 20, 19, 0),
                end=datetime(2024, 6, 20, 23, 0),
            ),
            CalendarEvent(
                id="evt-2",
                title="  ",
                start=datetime(2024, 6, 21, 10, 0),
                end=datetime(2024, 6, 21, 12, 0),
            ),
        ]

    def test_import_creates_drafts(self, income_service, client_service):
        client_id = client_service.create_client("Acme")

        created = income_service.import_calendar_events(self._events(), {"evt-1": "Acme"})

        assert created == 2
        entries = income_service.list_entries()
        first, second = entries
        assert first.date == date(2024, 6, 20)
        assert first.amount_gross == Decimal("0")
        assert first.includes_vat is True
        assert first.vat_rate == Decimal("18")
        assert first.invoice_status == InvoiceStatus.DRAFT
        assert first.client_name == "Acme"
        assert first.client_id == client_id
        assert first.calendar_event_id == "evt-1"
        assert first.description == "Wedding gig"
        assert second.description == "Calendar event"
        assert second.client_name == ""

    def test_import_skips_already_imported(self, income_service):
        assert income_service.import_calendar_events(self._events()) == 2
        assert income_service.import_calendar_events(self._events()) == 0
        assert len(income_service.list_entries()) == 2

    def test_import_skips_repeated_ids(self, income_service):
        events = self._events()
        assert income_service.import_calendar_events([events[0], events[0]]) == 1
