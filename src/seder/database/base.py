"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from seder.domain.entities import (
    Category,
    Client,
    ClientNameUsage,
    IncomeEntry,
    InvoiceStatus,
    PaymentStatus,
)


class Database(ABC):
    """Abstract database interface for seder."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group the writes made inside the block into one transaction.

        Either every write in the block is committed or, if the block
        raises, none of them is.
        """
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        display_order: int,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
        default_rate: Optional[Decimal] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self, include_archived: bool = False) -> list[Client]:
        """List clients ordered by display order, then name."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
        default_rate: Optional[Decimal] = None,
    ) -> None:
        """Update the given client fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_client_archived(self, client_id: int, is_archived: bool) -> None:
        """Archive or unarchive a client."""
        pass

    @abstractmethod
    def set_client_display_order(self, client_id: int, display_order: int) -> None:
        """Set a client's display order."""
        pass

    @abstractmethod
    def get_max_client_display_order(self) -> int:
        """Highest client display order, 0 if there are no clients."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, color: str, icon: str, display_order: int) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""
        pass

    @abstractmethod
    def list_categories(self, include_archived: bool = False) -> list[Category]:
        """List categories ordered by display order, then name."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> None:
        """Update the given category fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_category_archived(self, category_id: int, is_archived: bool) -> None:
        """Archive or unarchive a category."""
        pass

    @abstractmethod
    def set_category_display_order(self, category_id: int, display_order: int) -> None:
        """Set a category's display order."""
        pass

    @abstractmethod
    def get_max_category_display_order(self) -> int:
        """Highest category display order, 0 if there are no categories."""
        pass

    @abstractmethod
    def count_entries_for_category(self, category_id: int) -> int:
        """Number of income entries pointing at a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    # Income entry operations
    @abstractmethod
    def create_income_entry(
        self,
        date: date,
        amount_gross: Decimal,
        description: str = "",
        client_name: str = "",
        amount_paid: Decimal = Decimal("0"),
        vat_rate: Decimal = Decimal("18"),
        includes_vat: bool = True,
        invoice_status: InvoiceStatus = InvoiceStatus.DRAFT,
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        invoice_sent_date: Optional[date] = None,
        paid_date: Optional[date] = None,
        client_id: Optional[int] = None,
        category_id: Optional[int] = None,
        legacy_category: Optional[str] = None,
        notes: Optional[str] = None,
        calendar_event_id: Optional[str] = None,
    ) -> int:
        """Create an income entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_income_entry(self, entry_id: int) -> Optional[IncomeEntry]:
        """Get income entry by ID, with its category name joined."""
        pass

    @abstractmethod
    def save_income_entry(self, entry: IncomeEntry) -> None:
        """Persist every stored field of an existing entry."""
        pass

    @abstractmethod
    def delete_income_entry(self, entry_id: int) -> None:
        """Delete an income entry."""
        pass

    @abstractmethod
    def list_income_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        client_id: Optional[int] = None,
    ) -> list[IncomeEntry]:
        """List entries ordered by date, optionally filtered."""
        pass

    @abstractmethod
    def get_client_name_usage(self) -> list[ClientNameUsage]:
        """Distinct entry client names with usage count and last used date."""
        pass

    @abstractmethod
    def list_calendar_event_ids(self) -> set[str]:
        """Calendar event IDs that already have an entry."""
        pass

    @abstractmethod
    def set_entry_client_id(self, entry_id: int, client_id: Optional[int]) -> None:
        """Link an entry to a client record."""
        pass

    @abstractmethod
    def repoint_entries_by_client_name(
        self, names: Sequence[str], target_name: str, target_client_id: int
    ) -> int:
        """Point entries named any of ``names`` at the target client.

        Entries already carrying the target name and client ID are left
        alone. Returns the number of entries changed.
        """
        pass

    @abstractmethod
    def repoint_entries_by_client_id(
        self, source_client_ids: Sequence[int], target_client_id: int, target_name: str
    ) -> int:
        """Point entries of the source clients at the target client.

        Returns the number of entries changed.
        """
        pass
