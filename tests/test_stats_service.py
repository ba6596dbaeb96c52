"""
Tests for the top-products aggregation and the dashboard service.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi import HTTPException

from pos_app.core.errors import ValidationError
from pos_app.models.order import OrderLine
from pos_app.services.stats_service import DashboardService, aggregate_top_products, day_bounds

P1, P2, P3, P4 = (uuid.uuid4() for _ in range(4))


def line(product_id, quantity, name=None):
    return OrderLine(
        transaction_id=1,
        product_id=product_id,
        quantity=quantity,
        price=Decimal("1"),
        product_name=name,
    )


def test_aggregate_sums_quantities_and_sorts_descending():
    result = aggregate_top_products([line(P1, 2, "One"), line(P2, 5, "Two"), line(P1, 1, "One")])

    assert [(r.product_id, r.total_quantity) for r in result] == [(P2, 5), (P1, 3)]


def test_aggregate_truncates_to_limit():
    lines = [line(P1, 1), line(P2, 4), line(P3, 3), line(P4, 2)]

    result = aggregate_top_products(lines)

    assert [r.product_id for r in result] == [P2, P3, P4]
    assert len(aggregate_top_products(lines, limit=1)) == 1


def test_aggregate_ties_keep_first_appearance_order():
    result = aggregate_top_products([line(P3, 2), line(P1, 2), line(P2, 2)])

    assert [r.product_id for r in result] == [P3, P1, P2]


def test_aggregate_first_seen_name_wins():
    result = aggregate_top_products([line(P1, 1, "Old Name"), line(P1, 1, "New Name")])

    assert result[0].name == "Old Name"
    assert result[0].total_quantity == 2


def test_aggregate_labels_deleted_products():
    result = aggregate_top_products([line(P1, 1, None)])

    assert result[0].name == "Product not found"


def test_aggregate_empty_input_returns_empty_list():
    assert aggregate_top_products([]) == []


def test_day_bounds_cover_whole_end_day():
    start, end = day_bounds(date(2026, 3, 1), date(2026, 3, 2), timezone.utc)

    assert start == datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert end.date() == date(2026, 3, 2)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)


def test_day_bounds_rejects_inverted_range():
    with pytest.raises(ValidationError):
        day_bounds(date(2026, 3, 2), date(2026, 3, 1), timezone.utc)


def test_summary_counts_only_todays_transactions(order_repo, coffee, bread):
    now = datetime(2026, 5, 10, 15, 0, tzinfo=timezone.utc)
    order_repo.seed_order("700", now - timedelta(days=1), [(bread.id, 9, "500")])
    order_repo.seed_order("2500", now - timedelta(hours=2), [(coffee.id, 2, "1000"), (bread.id, 1, "500")])
    order_repo.seed_order("1000.50", now - timedelta(hours=1), [(coffee.id, 1, "1000.50")])

    summary = DashboardService(order_repo).summary(now=now)

    assert summary.window_start == datetime(2026, 5, 10, tzinfo=timezone.utc)
    assert summary.transaction_count == 2
    assert summary.revenue == Decimal("3500.50")
    assert [(p.name, p.total_quantity) for p in summary.top_products] == [
        ("Kopi Susu", 3),
        ("Roti Bakar", 1),
    ]


def test_summary_with_no_sales_today(order_repo):
    summary = DashboardService(order_repo).summary(now=datetime(2026, 5, 10, tzinfo=timezone.utc))

    assert summary.transaction_count == 0
    assert summary.revenue == Decimal("0")
    assert summary.top_products == []


def test_summary_window_follows_shop_timezone(order_repo, coffee):
    # 18:00 UTC on the 9th is already 01:00 on the 10th in Jakarta (UTC+7)
    order_repo.seed_order("1000", datetime(2026, 5, 9, 18, 0, tzinfo=timezone.utc), [(coffee.id, 1, "1000")])
    order_repo.seed_order("1000", datetime(2026, 5, 9, 16, 0, tzinfo=timezone.utc), [(coffee.id, 1, "1000")])

    service = DashboardService(order_repo, timezone="Asia/Jakarta")
    summary = service.summary(now=datetime(2026, 5, 10, 3, 0, tzinfo=timezone.utc))

    assert summary.transaction_count == 1


def test_list_transactions_paginates_newest_first(order_repo):
    base = datetime(2026, 5, 1, tzinfo=timezone.utc)
    for i in range(7):
        order_repo.seed_order(str(100 + i), base + timedelta(hours=i))

    service = DashboardService(order_repo, page_size=5)
    first = service.list_transactions(page=1)
    second = service.list_transactions(page=2)

    assert first.total_count == 7
    assert first.total_pages == 2
    assert [o.total for o in first.items] == [Decimal(str(100 + i)) for i in range(6, 1, -1)]
    assert [o.total for o in second.items] == [Decimal("101"), Decimal("100")]


def test_list_transactions_filters_by_inclusive_dates(order_repo):
    order_repo.seed_order("1", datetime(2026, 5, 1, 23, 0, tzinfo=timezone.utc))
    order_repo.seed_order("2", datetime(2026, 5, 2, 0, 0, tzinfo=timezone.utc))
    order_repo.seed_order("3", datetime(2026, 5, 3, 23, 59, tzinfo=timezone.utc))
    order_repo.seed_order("4", datetime(2026, 5, 4, 0, 0, tzinfo=timezone.utc))

    page = DashboardService(order_repo).list_transactions(
        start_date=date(2026, 5, 2),
        end_date=date(2026, 5, 3),
    )

    assert [o.total for o in page.items] == [Decimal("3"), Decimal("2")]
    assert page.total_count == 2


def test_list_transactions_rejects_page_zero(order_repo):
    with pytest.raises(HTTPException) as excinfo:
        DashboardService(order_repo).list_transactions(page=0)
    assert excinfo.value.status_code == 400
