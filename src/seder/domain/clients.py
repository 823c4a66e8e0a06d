"""Client domain service: records, duplicate detection and merging."""

import logging
import re
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from seder.database.base import Database
from seder.domain.entities import (
    Client,
    ClientAnalytics,
    ClientNameUsage,
    DuplicateGroup,
    IncomeEntry,
    MergeResult,
)
from seder.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_name_not_found,
    client_not_found,
    duplicate_client_name,
)
from seder.domain.status import is_awaiting_payment, is_overdue
from seder.utils.money import divide, subtract, sum_amounts, to_decimal

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[.,\-_'\"`]")
# Legal-entity suffixes: Ltd and its Hebrew forms, Inc, LLC
_LEGAL_SUFFIXES = re.compile(r"\b(?:ltd|inc|llc|בע״מ|בעמ)\b", re.IGNORECASE)


def normalize_client_name(name: str) -> str:
    """Reduce a client name to its duplicate-detection key.

    Lowercases, collapses whitespace, drops punctuation and legal-entity
    suffixes. Only used for comparison; stored names are never rewritten.
    """
    key = _WHITESPACE.sub(" ", name.lower().strip())
    key = _PUNCTUATION.sub("", key)
    key = _LEGAL_SUFFIXES.sub("", key)
    return key.strip()


def group_duplicate_names(usages: Iterable[ClientNameUsage]) -> list[DuplicateGroup]:
    """Group raw client names that normalize to the same key.

    Only keys with two or more distinct spellings are reported, busiest
    group first.
    """
    groups: dict[str, list[ClientNameUsage]] = {}

    for usage in usages:
        if not usage.name:
            continue
        key = normalize_client_name(usage.name)
        if not key:
            continue
        variants = groups.setdefault(key, [])
        if any(existing.name == usage.name for existing in variants):
            continue
        variants.append(usage)

    duplicates = [
        DuplicateGroup(normalized_name=key, clients=tuple(variants))
        for key, variants in groups.items()
        if len(variants) > 1
    ]
    duplicates.sort(key=lambda group: group.total_count, reverse=True)
    return duplicates


def client_analytics(
    clients: Sequence[Client], entries: Sequence[IncomeEntry], today: date
) -> list[ClientAnalytics]:
    """Revenue figures per client, from the entries linked to each."""
    by_client: dict[int, list[IncomeEntry]] = defaultdict(list)
    for entry in entries:
        if entry.client_id is not None:
            by_client[entry.client_id].append(entry)

    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)

    results = []
    for client in clients:
        jobs = by_client.get(client.id, [])
        total_earned = sum_amounts(entry.amount_paid for entry in jobs)

        payment_days = [
            (entry.paid_date - entry.invoice_sent_date).days
            for entry in jobs
            if entry.paid_date is not None and entry.invoice_sent_date is not None
        ]

        results.append(
            ClientAnalytics(
                client=client,
                total_earned=total_earned,
                this_month_revenue=sum_amounts(
                    entry.amount_paid for entry in jobs if entry.date >= month_start
                ),
                this_year_revenue=sum_amounts(
                    entry.amount_paid for entry in jobs if entry.date >= year_start
                ),
                average_per_job=divide(total_earned, len(jobs)) if jobs else Decimal("0.00"),
                job_count=len(jobs),
                outstanding_amount=sum_amounts(
                    subtract(entry.amount_gross, entry.amount_paid)
                    for entry in jobs
                    if is_awaiting_payment(entry)
                ),
                overdue_invoices=sum(1 for entry in jobs if is_overdue(entry, today)),
                avg_days_to_payment=(
                    sum(payment_days) / len(payment_days) if payment_days else None
                ),
            )
        )
    return results


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
        default_rate: Optional[Decimal] = None,
    ) -> int:
        """Create a client at the end of the display order.

        Args:
            name: Client name (unique)
            email: Optional email
            phone: Optional phone
            notes: Optional notes
            default_rate: Optional default rate for new jobs

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a client with this name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Client name cannot be empty")
        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_client_name(name))

        if default_rate is not None:
            default_rate = to_decimal(default_rate)

        client_id = self.db.create_client(
            name=name,
            display_order=self.db.get_max_client_display_order() + 1,
            email=email,
            phone=phone,
            notes=notes,
            default_rate=default_rate,
        )
        logger.info("Created client %s (%s)", client_id, name)
        return client_id

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.db.get_client(client_id)

    def get_client_by_name(self, name: str) -> Optional[Client]:
        return self.db.get_client_by_name(name)

    def require_client(self, client_id: int) -> Client:
        """Get a client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def require_client_by_name(self, name: str) -> Client:
        client = self.db.get_client_by_name(name)
        if client is None:
            raise NotFoundError(client_name_not_found(name))
        return client

    def list_clients(self, include_archived: bool = False) -> list[Client]:
        return self.db.list_clients(include_archived=include_archived)

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
        default_rate: Optional[Decimal] = None,
    ) -> None:
        """Update client fields.

        Raises:
            NotFoundError: If the client doesn't exist
            ConflictError: If the new name belongs to another client
        """
        self.require_client(client_id)
        if name is not None:
            name = name.strip()
            existing = self.db.get_client_by_name(name)
            if existing is not None and existing.id != client_id:
                raise ConflictError(duplicate_client_name(name))
        if default_rate is not None:
            default_rate = to_decimal(default_rate)

        self.db.update_client(
            client_id,
            name=name,
            email=email,
            phone=phone,
            notes=notes,
            default_rate=default_rate,
        )

    def archive_client(self, client_id: int) -> None:
        """Archive (soft-delete) a client; its entries are untouched."""
        self.require_client(client_id)
        self.db.set_client_archived(client_id, True)
        logger.info("Archived client %s", client_id)

    def unarchive_client(self, client_id: int) -> None:
        self.require_client(client_id)
        self.db.set_client_archived(client_id, False)

    def reorder_clients(self, orders: dict[int, int]) -> None:
        """Apply new display orders, all or nothing."""
        with self.db.atomic():
            for client_id, display_order in orders.items():
                self.db.set_client_display_order(client_id, display_order)

    def find_duplicate_client_names(self) -> list[DuplicateGroup]:
        """Groups of entry client names that look like the same client."""
        return group_duplicate_names(self.db.get_client_name_usage())

    def merge_client_names(self, target_name: str, source_names: Sequence[str]) -> MergeResult:
        """Rename entries using any of ``source_names`` to ``target_name``.

        A client record for the target name is created if missing. Entries
        already named ``target_name`` are linked to that record too. Calling
        this again with the same arguments changes nothing.

        Args:
            target_name: Name to keep
            source_names: Spellings to fold into the target

        Returns:
            MergeResult with the number of entries changed and the target client ID
        """
        target_name = target_name.strip()
        if not target_name:
            raise ValidationError("Target client name cannot be empty")

        with self.db.atomic():
            target = self.db.get_client_by_name(target_name)
            if target is None:
                target_id = self.db.create_client(
                    name=target_name,
                    display_order=self.db.get_max_client_display_order() + 1,
                )
                logger.info("Created client %s (%s) for merge", target_id, target_name)
            else:
                target_id = target.id

            names = list(dict.fromkeys([*source_names, target_name]))
            updated = self.db.repoint_entries_by_client_name(names, target_name, target_id)

        logger.info(
            "Merged client names %s into '%s': %d entries updated", list(source_names), target_name, updated
        )
        return MergeResult(updated_count=updated, client_id=target_id)

    def merge_clients(self, target_id: int, source_ids: Sequence[int]) -> MergeResult:
        """Fold source client records into the target record.

        Entries of the source clients are pointed at the target (taking its
        current name) and the source clients are archived, never deleted.
        All of it happens in one transaction.

        Raises:
            NotFoundError: If the target client doesn't exist; nothing is changed
        """
        target = self.require_client(target_id)
        sources = [source_id for source_id in dict.fromkeys(source_ids) if source_id != target_id]

        with self.db.atomic():
            updated = self.db.repoint_entries_by_client_id(sources, target.id, target.name)
            for source_id in sources:
                self.db.set_client_archived(source_id, True)

        logger.info(
            "Merged clients %s into %s (%s): %d entries updated", sources, target.id, target.name, updated
        )
        return MergeResult(updated_count=updated, client_id=target.id)

    def create_clients_from_existing_names(self) -> int:
        """Create a client for each entry client name that has none.

        Names are compared case-insensitively. Returns the number created.
        """
        existing = {client.name.lower() for client in self.db.list_clients(include_archived=True)}
        created = 0
        for usage in self.db.get_client_name_usage():
            name = usage.name.strip()
            if not name or name.lower() in existing:
                continue
            self.create_client(name)
            existing.add(name.lower())
            created += 1
        return created

    def link_income_entries_to_clients(self) -> int:
        """Set the client ID of unlinked entries whose name matches a client.

        Returns the number of entries linked.
        """
        client_ids = {
            client.name.lower(): client.id for client in self.db.list_clients(include_archived=True)
        }
        linked = 0
        with self.db.atomic():
            for entry in self.db.list_income_entries():
                if entry.client_id is not None or not entry.client_name:
                    continue
                client_id = client_ids.get(entry.client_name.lower())
                if client_id is not None:
                    self.db.set_entry_client_id(entry.id, client_id)
                    linked += 1
        return linked

    def get_clients_with_analytics(self, today: date) -> list[ClientAnalytics]:
        """Active clients with their revenue figures."""
        return client_analytics(self.db.list_clients(), self.db.list_income_entries(), today)
