"""Domain model entities for seder.

These are pure data classes representing business concepts, independent of
database schema. Derived values such as the display status are never stored
on an entity; they are computed from it on every read.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceStatus(str, Enum):
    """Invoicing state of an income entry."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment state of an income entry."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class WorkStatus(str, Enum):
    """Whether the work date has passed."""

    DONE = "done"
    IN_PROGRESS = "in_progress"


class MoneyStatus(str, Enum):
    """Whether an invoice has been sent or paid."""

    PAID = "paid"
    INVOICE_SENT = "invoice_sent"
    NO_INVOICE = "no_invoice"


class DisplayStatus(str, Enum):
    """Combined status shown to the user."""

    DONE = "done"
    SENT = "sent"
    PAID = "paid"


class MonthPaymentStatus(str, Enum):
    """Payment summary of a calendar month."""

    EMPTY = "empty"
    HAS_UNPAID = "has_unpaid"
    ALL_PAID = "all_paid"


class RuleType(str, Enum):
    """Classification outcome a rule votes for."""

    WORK = "work"
    PERSONAL = "personal"


class MatchType(str, Enum):
    """Event field a rule is matched against."""

    TITLE = "title"
    CALENDAR = "calendar"


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    default_rate: Optional[Decimal] = None
    is_archived: bool = False
    display_order: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Category:
    """Income category domain entity."""

    id: int
    name: str
    color: str
    icon: str
    display_order: int = 0
    is_archived: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class IncomeEntry:
    """One unit of billable work (a job)."""

    id: int
    date: date
    amount_gross: Decimal
    description: str = ""
    client_name: str = ""
    amount_paid: Decimal = Decimal("0")
    vat_rate: Decimal = Decimal("18")
    includes_vat: bool = True
    invoice_status: InvoiceStatus = InvoiceStatus.DRAFT
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    invoice_sent_date: Optional[date] = None
    paid_date: Optional[date] = None
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    # Name of the joined category row, if any
    category_name: Optional[str] = None
    # Free-text category from before categories became records
    legacy_category: Optional[str] = None
    notes: Optional[str] = None
    calendar_event_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class KPIData:
    """Headline figures for the income page."""

    outstanding: Decimal
    ready_to_invoice: Decimal
    ready_to_invoice_count: int
    this_month: Decimal
    this_month_count: int
    this_month_unpaid: Decimal
    total_paid: Decimal
    previous_month_paid: Decimal
    trend: Decimal
    overdue_count: int
    invoiced_count: int
    vat_total: Decimal


@dataclass(frozen=True)
class AnalyticsKPI:
    """Headline figures for a date range on the analytics page."""

    total_income: Decimal
    jobs_count: int
    unpaid_amount: Decimal


@dataclass(frozen=True)
class TimeBucket:
    """Income summed over one week or month."""

    label: str
    start: date
    end: date
    amount: Decimal
    count: int


@dataclass(frozen=True)
class CategoryBucket:
    """Income summed over one category."""

    category_name: str
    amount: Decimal
    count: int


@dataclass(frozen=True)
class NeedsAttentionJob:
    """An entry that still needs invoicing or payment follow-up."""

    id: int
    client_name: str
    description: str
    amount: Decimal
    status: str
    date: date


@dataclass(frozen=True)
class ClientNameUsage:
    """A distinct raw client name with its usage statistics."""

    name: str
    count: int
    last_used: Optional[date]


@dataclass(frozen=True)
class DuplicateGroup:
    """Raw client-name spellings that normalize to the same key."""

    normalized_name: str
    clients: tuple[ClientNameUsage, ...]

    @property
    def total_count(self) -> int:
        return sum(client.count for client in self.clients)


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a client merge."""

    updated_count: int
    client_id: int


@dataclass(frozen=True)
class ClientAnalytics:
    """Per-client revenue figures."""

    client: Client
    total_earned: Decimal
    this_month_revenue: Decimal
    this_year_revenue: Decimal
    average_per_job: Decimal
    job_count: int
    outstanding_amount: Decimal
    overdue_invoices: int
    avg_days_to_payment: Optional[float]


@dataclass(frozen=True)
class CalendarEvent:
    """An event supplied by the calendar collaborator."""

    id: str
    title: str
    start: datetime
    end: datetime
    calendar_id: Optional[str] = None


@dataclass(frozen=True)
class ClassificationRule:
    """A user-editable keyword rule for calendar classification."""

    id: str
    type: RuleType
    match_type: MatchType
    keywords: tuple[str, ...] = field(default_factory=tuple)
    enabled: bool = True


@dataclass(frozen=True)
class ClassificationResult:
    """Work/personal verdict for one calendar event."""

    event_id: str
    is_work: bool
    confidence: float
    suggested_client: Optional[str] = None
    matched_rule: Optional[str] = None
    matched_keyword: Optional[str] = None
