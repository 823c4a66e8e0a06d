"""KPI aggregation over collections of income entries.

Backlog figures (outstanding, ready to invoice, overdue, invoiced) cover all
entries regardless of the selected month, so work from earlier months stays
visible. Only the "this month" figures are scoped to the target month.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from seder.domain.entities import (
    AnalyticsKPI,
    IncomeEntry,
    InvoiceStatus,
    KPIData,
    MonthPaymentStatus,
    PaymentStatus,
)
from seder.domain.status import (
    is_awaiting_payment,
    is_overdue,
    is_past_date,
    is_ready_to_invoice,
)
from seder.utils.date_parser import month_bounds, previous_month
from seder.utils.money import percent_change, subtract, sum_amounts, vat_amount

logger = logging.getLogger(__name__)


def filter_by_range(entries: Iterable[IncomeEntry], start: date, end: date) -> list[IncomeEntry]:
    """Entries dated within [start, end]."""
    return [entry for entry in entries if start <= entry.date <= end]


def filter_by_month(entries: Iterable[IncomeEntry], year: int, month: int) -> list[IncomeEntry]:
    start, end = month_bounds(year, month)
    return filter_by_range(entries, start, end)


def paid_total(entries: Iterable[IncomeEntry]) -> Decimal:
    """Sum of amount paid over fully paid entries."""
    return sum_amounts(
        entry.amount_paid for entry in entries if entry.payment_status == PaymentStatus.PAID
    )


def calculate_kpis(
    entries: Sequence[IncomeEntry], year: int, month: int, today: date
) -> KPIData:
    """Calculate the income page KPIs for a target month.

    Args:
        entries: All entries of the owner, across all time
        year: Target year
        month: Target month (1-12)
        today: Reference date for work status and overdue checks

    Returns:
        KPIData for the target month
    """
    month_entries = filter_by_month(entries, year, month)
    prev_year, prev_month = previous_month(year, month)
    prev_month_entries = filter_by_month(entries, prev_year, prev_month)

    awaiting = [entry for entry in entries if is_awaiting_payment(entry)]
    outstanding = sum_amounts(
        subtract(entry.amount_gross, entry.amount_paid) for entry in awaiting
    )

    ready = [entry for entry in entries if is_ready_to_invoice(entry, today)]
    ready_to_invoice = sum_amounts(entry.amount_gross for entry in ready)

    this_month = sum_amounts(entry.amount_gross for entry in month_entries)
    this_month_unpaid = subtract(
        this_month, sum_amounts(entry.amount_paid for entry in month_entries)
    )
    total_paid = paid_total(month_entries)
    previous_month_paid = paid_total(prev_month_entries)
    trend = percent_change(total_paid, previous_month_paid)

    vat_total = sum_amounts(
        vat_amount(entry.amount_gross, entry.vat_rate, entry.includes_vat)
        for entry in month_entries
    )

    kpis = KPIData(
        outstanding=outstanding,
        ready_to_invoice=ready_to_invoice,
        ready_to_invoice_count=len(ready),
        this_month=this_month,
        this_month_count=len(month_entries),
        this_month_unpaid=this_month_unpaid,
        total_paid=total_paid,
        previous_month_paid=previous_month_paid,
        trend=trend,
        overdue_count=sum(1 for entry in entries if is_overdue(entry, today)),
        invoiced_count=len(awaiting),
        vat_total=vat_total,
    )
    logger.debug("KPIs for %04d-%02d over %d entries: %s", year, month, len(entries), kpis)
    return kpis


def analytics_kpis(entries: Sequence[IncomeEntry]) -> AnalyticsKPI:
    """Totals for an already range-filtered set of entries.

    Unpaid covers drafts as well as sent invoices awaiting payment.
    """
    unpaid = [
        entry
        for entry in entries
        if entry.invoice_status == InvoiceStatus.DRAFT or is_awaiting_payment(entry)
    ]
    return AnalyticsKPI(
        total_income=sum_amounts(entry.amount_gross for entry in entries),
        jobs_count=len(entries),
        unpaid_amount=sum_amounts(
            subtract(entry.amount_gross, entry.amount_paid) for entry in unpaid
        ),
    )


def month_payment_statuses(
    entries: Iterable[IncomeEntry], year: int, today: date
) -> dict[int, MonthPaymentStatus]:
    """Payment status of every month of ``year``.

    Only entries dated before today count. A month with none is empty, a
    month with any unpaid past entry has unpaid work, otherwise all is paid.
    """
    past_counts = {month: 0 for month in range(1, 13)}
    unpaid_counts = {month: 0 for month in range(1, 13)}

    for entry in entries:
        if entry.date.year != year or not is_past_date(entry.date, today):
            continue
        past_counts[entry.date.month] += 1
        if entry.payment_status != PaymentStatus.PAID:
            unpaid_counts[entry.date.month] += 1

    statuses: dict[int, MonthPaymentStatus] = {}
    for month in range(1, 13):
        if past_counts[month] == 0:
            statuses[month] = MonthPaymentStatus.EMPTY
        elif unpaid_counts[month] > 0:
            statuses[month] = MonthPaymentStatus.HAS_UNPAID
        else:
            statuses[month] = MonthPaymentStatus.ALL_PAID
    return statuses
