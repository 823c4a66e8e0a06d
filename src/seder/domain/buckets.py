"""Time, category and follow-up groupings for charts and reports."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence

from dateutil.relativedelta import relativedelta

from seder.config import (
    OTHER_CATEGORY_LABEL,
    TOP_CATEGORY_COUNT,
    UNCATEGORIZED_LABEL,
    WEEKLY_BUCKET_MAX_DAYS,
)
from seder.domain.entities import (
    CategoryBucket,
    IncomeEntry,
    InvoiceStatus,
    NeedsAttentionJob,
    PaymentStatus,
    TimeBucket,
)
from seder.domain.kpi import filter_by_range
from seder.utils.date_parser import month_bounds, week_start
from seder.utils.money import add, sum_amounts

NO_INVOICE_LABEL = "no invoice"
AWAITING_PAYMENT_LABEL = "sent — awaiting payment"
PARTIALLY_PAID_LABEL = "sent — partially paid"


def uses_monthly_buckets(start: date, end: date) -> bool:
    """Ranges longer than the weekly limit are bucketed by month."""
    return (end - start).days > WEEKLY_BUCKET_MAX_DAYS


def group_entries_by_time(
    entries: Sequence[IncomeEntry], start: date, end: date
) -> list[TimeBucket]:
    """Bucket entries by week (Sunday start) or by calendar month.

    Every week or month touching [start, end] gets a bucket, empty or not,
    in chronological order.
    """
    if uses_monthly_buckets(start, end):
        return group_entries_by_month(entries, start, end)
    return group_entries_by_week(entries, start, end)


def _bucket(entries: Sequence[IncomeEntry], label: str, start: date, end: date) -> TimeBucket:
    bucket_entries = filter_by_range(entries, start, end)
    return TimeBucket(
        label=label,
        start=start,
        end=end,
        amount=sum_amounts(entry.amount_gross for entry in bucket_entries),
        count=len(bucket_entries),
    )


def group_entries_by_week(
    entries: Sequence[IncomeEntry], start: date, end: date
) -> list[TimeBucket]:
    buckets = []
    current = week_start(start)
    while current <= end:
        week_end = current + timedelta(days=6)
        label = f"{current.day}/{current.month}"
        buckets.append(_bucket(entries, label, current, week_end))
        current += timedelta(days=7)
    return buckets


def group_entries_by_month(
    entries: Sequence[IncomeEntry], start: date, end: date
) -> list[TimeBucket]:
    buckets = []
    current = start.replace(day=1)
    while current <= end:
        month_start, month_end = month_bounds(current.year, current.month)
        buckets.append(_bucket(entries, month_start.strftime("%b %y"), month_start, month_end))
        current += relativedelta(months=1)
    return buckets


def resolve_category_name(entry: IncomeEntry) -> str:
    return entry.category_name or UNCATEGORIZED_LABEL


def group_entries_by_category(
    entries: Sequence[IncomeEntry], top_n: int = TOP_CATEGORY_COUNT
) -> list[CategoryBucket]:
    """Sum entries per category, largest first.

    With more than ``top_n`` categories the tail is collapsed into a single
    "Other" bucket. Equal amounts keep first-encountered order.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))
    counts: dict[str, int] = defaultdict(int)

    for entry in entries:
        name = resolve_category_name(entry)
        totals[name] = add(totals[name], entry.amount_gross)
        counts[name] += 1

    buckets = sorted(
        (CategoryBucket(category_name=name, amount=totals[name], count=counts[name]) for name in totals),
        key=lambda bucket: bucket.amount,
        reverse=True,
    )

    if len(buckets) <= top_n:
        return buckets

    rest = buckets[top_n:]
    other = CategoryBucket(
        category_name=OTHER_CATEGORY_LABEL,
        amount=sum_amounts(bucket.amount for bucket in rest),
        count=sum(bucket.count for bucket in rest),
    )
    return buckets[:top_n] + [other]


def attention_label(entry: IncomeEntry) -> str:
    if entry.invoice_status == InvoiceStatus.DRAFT:
        return NO_INVOICE_LABEL
    if entry.payment_status == PaymentStatus.PARTIAL:
        return PARTIALLY_PAID_LABEL
    return AWAITING_PAYMENT_LABEL


def needs_attention(entries: Sequence[IncomeEntry]) -> list[NeedsAttentionJob]:
    """Drafts and unpaid sent invoices, largest amount first."""
    pending = [
        entry
        for entry in entries
        if entry.invoice_status == InvoiceStatus.DRAFT
        or (
            entry.invoice_status == InvoiceStatus.SENT
            and entry.payment_status != PaymentStatus.PAID
        )
    ]
    pending.sort(key=lambda entry: entry.amount_gross, reverse=True)

    return [
        NeedsAttentionJob(
            id=entry.id,
            client_name=entry.client_name,
            description=entry.description,
            amount=entry.amount_gross,
            status=attention_label(entry),
            date=entry.date,
        )
        for entry in pending
    ]
