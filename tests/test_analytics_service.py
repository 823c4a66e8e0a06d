"""Tests for the analytics service over stored entries."""

from datetime import date
from decimal import Decimal

from seder.domain.entities import DisplayStatus, MonthPaymentStatus


def test_get_kpis(income_service, analytics_service, today):
    sent_id = income_service.create_entry(date=date(2024, 3, 1), amount_gross=1000)
    income_service.set_status(sent_id, DisplayStatus.SENT, date(2024, 3, 2))
    income_service.create_entry(date=date(2024, 6, 10), amount_gross=400)

    kpis = analytics_service.get_kpis(2024, 6, today)

    assert kpis.outstanding == Decimal("1000.00")
    assert kpis.overdue_count == 1
    assert kpis.ready_to_invoice == Decimal("400.00")
    assert kpis.this_month == Decimal("400.00")


def test_range_analytics(income_service, category_service, analytics_service):
    category_service.create_category("Gigs")
    income_service.create_entry(date=date(2024, 6, 3), amount_gross=500, category_name="Gigs")
    income_service.create_entry(date=date(2024, 6, 12), amount_gross=300)
    income_service.create_entry(date=date(2024, 8, 1), amount_gross=999)

    analytics = analytics_service.get_range_analytics(date(2024, 6, 1), date(2024, 6, 30))

    assert analytics.kpis.total_income == Decimal("800.00")
    assert analytics.kpis.jobs_count == 2
    assert analytics.kpis.unpaid_amount == Decimal("800.00")
    assert sum(bucket.amount for bucket in analytics.timeline) == Decimal("800.00")
    assert [(b.category_name, b.amount) for b in analytics.categories] == [
        ("Gigs", Decimal("500.00")),
        ("Uncategorized", Decimal("300.00")),
    ]
    assert [job.amount for job in analytics.attention] == [Decimal("500.00"), Decimal("300.00")]


def test_month_payment_statuses(income_service, analytics_service, today):
    paid_id = income_service.create_entry(date=date(2024, 1, 5), amount_gross=100)
    income_service.set_status(paid_id, DisplayStatus.PAID, date(2024, 1, 20))
    income_service.create_entry(date=date(2024, 2, 5), amount_gross=100)

    statuses = analytics_service.get_month_payment_statuses(2024, today)

    assert statuses[1] == MonthPaymentStatus.ALL_PAID
    assert statuses[2] == MonthPaymentStatus.HAS_UNPAID
    assert statuses[12] == MonthPaymentStatus.EMPTY
