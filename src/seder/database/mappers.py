"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the table layout changes.
"""

from decimal import Decimal

from seder.domain import entities as domain
from seder.database.models import (
    Category as ORMCategory,
    Client as ORMClient,
    IncomeEntry as ORMIncomeEntry,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        email=orm_client.email,
        phone=orm_client.phone,
        notes=orm_client.notes,
        default_rate=orm_client.default_rate,
        is_archived=bool(orm_client.is_archived),
        display_order=orm_client.display_order or 0,
        created_at=orm_client.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        color=orm_category.color,
        icon=orm_category.icon,
        display_order=orm_category.display_order or 0,
        is_archived=bool(orm_category.is_archived),
        created_at=orm_category.created_at,
    )


def income_entry_to_domain(orm_entry: ORMIncomeEntry) -> domain.IncomeEntry:
    """Convert SQLAlchemy IncomeEntry model to domain IncomeEntry entity.

    The joined category's name is carried along for category grouping.
    """
    return domain.IncomeEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        description=orm_entry.description or "",
        client_name=orm_entry.client_name or "",
        amount_gross=Decimal(orm_entry.amount_gross),
        amount_paid=Decimal(orm_entry.amount_paid or 0),
        vat_rate=Decimal(orm_entry.vat_rate),
        includes_vat=bool(orm_entry.includes_vat),
        invoice_status=domain.InvoiceStatus(orm_entry.invoice_status),
        payment_status=domain.PaymentStatus(orm_entry.payment_status),
        invoice_sent_date=orm_entry.invoice_sent_date,
        paid_date=orm_entry.paid_date,
        client_id=orm_entry.client_id,
        category_id=orm_entry.category_id,
        category_name=orm_entry.category.name if orm_entry.category is not None else None,
        legacy_category=orm_entry.legacy_category,
        notes=orm_entry.notes,
        calendar_event_id=orm_entry.calendar_event_id,
        created_at=orm_entry.created_at,
    )
