"""Income entry domain service."""

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from seder.config import CALENDAR_DEFAULT_DESCRIPTION, CALENDAR_IMPORT_NOTE, DEFAULT_VAT_RATE
from seder.database.base import Database
from seder.domain.entities import CalendarEvent, DisplayStatus, IncomeEntry
from seder.domain.errors import (
    NotFoundError,
    ValidationError,
    category_name_not_found,
    entry_not_found,
)
from seder.domain.status import apply_display_status, is_settled
from seder.utils.date_parser import month_bounds
from seder.utils.money import round_money, to_decimal

logger = logging.getLogger(__name__)

_UNSET = object()


def _non_negative(value, field: str) -> Decimal:
    amount = round_money(to_decimal(value))
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative: {amount}")
    return amount


def _vat_rate(value) -> Decimal:
    rate = to_decimal(value)
    if rate < 0:
        raise ValidationError(f"VAT rate cannot be negative: {rate}")
    return rate


def _event_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class IncomeService:
    """Service for managing income entries (jobs)."""

    def __init__(self, db: Database):
        """Initialize income service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entry(
        self,
        date: date,
        amount_gross,
        description: str = "",
        client_name: str = "",
        vat_rate=DEFAULT_VAT_RATE,
        includes_vat: bool = True,
        category_name: Optional[str] = None,
        legacy_category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a draft income entry.

        The entry is linked to the client record with the same name, if
        one exists.

        Args:
            date: Date the work takes place
            amount_gross: Invoiceable total; numbers or amount strings like "₪1,200"
            description: What the job was
            client_name: Free-text client name
            vat_rate: VAT percentage
            includes_vat: Whether the gross amount already includes VAT
            category_name: Optional category name
            legacy_category: Optional free-text category from older data
            notes: Optional notes

        Returns:
            Entry ID

        Raises:
            MoneyError: If an amount is not a number
            ValidationError: If an amount is negative
            NotFoundError: If the category doesn't exist
        """
        gross = _non_negative(amount_gross, "Amount")
        rate = _vat_rate(vat_rate)
        client_name = client_name.strip()
        category_id = self._resolve_category_id(category_name)

        entry_id = self.db.create_income_entry(
            date=date,
            amount_gross=gross,
            description=description.strip(),
            client_name=client_name,
            vat_rate=rate,
            includes_vat=includes_vat,
            client_id=self._resolve_client_id(client_name),
            category_id=category_id,
            legacy_category=legacy_category,
            notes=notes,
        )
        logger.info("Created income entry %s (%s, %s)", entry_id, date, gross)
        return entry_id

    def get_entry(self, entry_id: int) -> Optional[IncomeEntry]:
        return self.db.get_income_entry(entry_id)

    def require_entry(self, entry_id: int) -> IncomeEntry:
        """Get an entry by ID or raise NotFoundError."""
        entry = self.db.get_income_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def update_entry(
        self,
        entry_id: int,
        date: Optional[date] = None,
        amount_gross=None,
        description: Optional[str] = None,
        client_name: Optional[str] = None,
        vat_rate=None,
        includes_vat: Optional[bool] = None,
        category_name=_UNSET,
        notes=_UNSET,
    ) -> IncomeEntry:
        """Update entry fields; None leaves a field unchanged.

        Pass ``category_name=None`` to clear the category. Changing the
        client name relinks the entry to the matching client record.

        Returns:
            The updated entry
        """
        entry = self.require_entry(entry_id)
        changes: dict = {}

        if date is not None:
            changes["date"] = date
        if amount_gross is not None:
            changes["amount_gross"] = _non_negative(amount_gross, "Amount")
            if is_settled(entry):
                changes["amount_paid"] = changes["amount_gross"]
        if description is not None:
            changes["description"] = description.strip()
        if client_name is not None:
            changes["client_name"] = client_name.strip()
            changes["client_id"] = self._resolve_client_id(changes["client_name"])
        if vat_rate is not None:
            changes["vat_rate"] = _vat_rate(vat_rate)
        if includes_vat is not None:
            changes["includes_vat"] = includes_vat
        if category_name is not _UNSET:
            changes["category_id"] = self._resolve_category_id(category_name)
        if notes is not _UNSET:
            changes["notes"] = notes

        updated = dataclasses.replace(entry, **changes)
        self.db.save_income_entry(updated)
        return updated

    def delete_entry(self, entry_id: int) -> None:
        self.require_entry(entry_id)
        self.db.delete_income_entry(entry_id)
        logger.info("Deleted income entry %s", entry_id)

    def set_status(self, entry_id: int, status: DisplayStatus, today: date) -> IncomeEntry:
        """Move an entry to a display status and persist the result.

        Args:
            entry_id: Entry ID
            status: Target status (done, sent or paid)
            today: Date recorded as the sent or paid date

        Returns:
            The updated entry
        """
        entry = self.require_entry(entry_id)
        updated = apply_display_status(entry, status, today)
        self.db.save_income_entry(updated)
        logger.info("Income entry %s marked %s", entry_id, status.value)
        return updated

    def list_entries_for_month(self, year: int, month: int) -> list[IncomeEntry]:
        start, end = month_bounds(year, month)
        return self.db.list_income_entries(start_date=start, end_date=end)

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        client_id: Optional[int] = None,
    ) -> list[IncomeEntry]:
        return self.db.list_income_entries(
            start_date=start_date, end_date=end_date, client_id=client_id
        )

    def unique_client_names(self) -> list[str]:
        """Distinct client names used on entries, alphabetically."""
        return sorted(usage.name for usage in self.db.get_client_name_usage() if usage.name)

    def import_calendar_events(
        self,
        events: Sequence[CalendarEvent],
        client_names: Optional[Mapping[str, str]] = None,
        vat_rate=DEFAULT_VAT_RATE,
    ) -> int:
        """Create draft entries for calendar events.

        Each entry starts at amount 0 with VAT included, for the amount to be
        filled in later. Events that already have an entry are skipped, as
        are repeated IDs within ``events``.

        Args:
            events: Events chosen for import
            client_names: Optional client name per event ID
            vat_rate: VAT percentage for the new entries

        Returns:
            Number of entries created
        """
        client_names = client_names or {}
        imported = self.db.list_calendar_event_ids()
        rate = _vat_rate(vat_rate)

        created = 0
        with self.db.atomic():
            for event in events:
                if event.id in imported:
                    continue
                client_name = (client_names.get(event.id) or "").strip()
                self.db.create_income_entry(
                    date=_event_date(event.start),
                    amount_gross=Decimal("0.00"),
                    description=event.title.strip() or CALENDAR_DEFAULT_DESCRIPTION,
                    client_name=client_name,
                    vat_rate=rate,
                    includes_vat=True,
                    client_id=self._resolve_client_id(client_name),
                    notes=CALENDAR_IMPORT_NOTE,
                    calendar_event_id=event.id,
                )
                imported.add(event.id)
                created += 1

        logger.info("Imported %d of %d calendar events", created, len(events))
        return created

    def _resolve_client_id(self, client_name: str) -> Optional[int]:
        if not client_name:
            return None
        client = self.db.get_client_by_name(client_name)
        return client.id if client is not None else None

    def _resolve_category_id(self, category_name: Optional[str]) -> Optional[int]:
        if category_name is None:
            return None
        category = self.db.get_category_by_name(category_name.strip())
        if category is None:
            raise NotFoundError(category_name_not_found(category_name))
        return category.id
