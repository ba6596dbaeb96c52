# pos_app/services/stats_service.py
import math
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable
from zoneinfo import ZoneInfo

from fastapi import HTTPException, status

from pos_app.core.errors import ValidationError
from pos_app.models.order import MISSING_PRODUCT_LABEL, OrderLine
from pos_app.repositories.order_repo import OrderRepository
from pos_app.schemas.order import OrderRead, TransactionPage
from pos_app.schemas.stats import DashboardSummary, TopProduct


def aggregate_top_products(lines: Iterable[OrderLine], limit: int = 3) -> list[TopProduct]:
    """
    Rank products by units sold.

    - lines are grouped by product id and their quantities summed
    - the first name seen for a product id is kept
    - ties keep the order in which products first appeared
    - at most `limit` entries are returned; no lines => []
    """
    totals: dict[uuid.UUID, int] = {}
    names: dict[uuid.UUID, str] = {}

    for ln in lines:
        if ln.product_id not in totals:
            totals[ln.product_id] = 0
            names[ln.product_id] = ln.product_name or MISSING_PRODUCT_LABEL
        totals[ln.product_id] += ln.quantity

    # dicts keep insertion order and sorted() is stable
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [
        TopProduct(product_id=pid, name=names[pid], total_quantity=qty)
        for pid, qty in ranked[:limit]
    ]


def day_bounds(
    start_date: date | None,
    end_date: date | None,
    tz: ZoneInfo,
) -> tuple[datetime | None, datetime | None]:
    """
    Turn an optional inclusive date range into created_at bounds.

    The end bound covers the whole end day.
    """
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")

    start = datetime.combine(start_date, time.min, tzinfo=tz) if start_date else None
    end = datetime.combine(end_date, time.max, tzinfo=tz) if end_date else None
    return start, end


class DashboardService:
    """
    Orchestrates the dashboard: today's summary and the transaction list.
    """

    def __init__(
        self,
        repo: OrderRepository,
        timezone: str = "UTC",
        page_size: int = 5,
        top_n_products: int = 3,
    ):
        self.repo = repo
        self.tz = ZoneInfo(timezone)
        self.page_size = page_size
        self.top_n_products = top_n_products

    def summary(self, now: datetime | None = None) -> DashboardSummary:
        """
        Transaction count, revenue and best sellers since local midnight.
        """
        now = now.astimezone(self.tz) if now else datetime.now(self.tz)
        window_start = datetime.combine(now.date(), time.min, tzinfo=self.tz)

        orders = self.repo.list_since(window_start)
        revenue = sum((o.total for o in orders), Decimal("0"))

        lines = self.repo.list_items_for_orders([o.id for o in orders])
        top_products = aggregate_top_products(lines, limit=self.top_n_products)

        return DashboardSummary(
            window_start=window_start,
            transaction_count=len(orders),
            revenue=revenue,
            top_products=top_products,
        )

    def list_transactions(
        self,
        page: int = 1,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TransactionPage:
        """
        Paginated transactions, newest first, optionally within a date range.
        """
        if page < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="page must be >= 1",
            )

        start, end = day_bounds(start_date, end_date, self.tz)
        offset = (page - 1) * self.page_size
        orders, count = self.repo.list_page(offset, self.page_size, start=start, end=end)

        return TransactionPage(
            items=[OrderRead(id=o.id, created_at=o.created_at, total=o.total) for o in orders],
            page=page,
            page_size=self.page_size,
            total_count=count,
            total_pages=math.ceil(count / self.page_size),
        )
