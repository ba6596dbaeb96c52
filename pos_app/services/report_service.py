# pos_app/services/report_service.py
import math
from datetime import date
from zoneinfo import ZoneInfo

from fastapi import HTTPException, status

from pos_app.repositories.order_repo import OrderRepository
from pos_app.schemas.order import ReportPage, build_order_with_items
from pos_app.services.stats_service import day_bounds


class ReportService:
    """
    Date-filtered transaction report with line items, one page at a time.
    """

    def __init__(self, repo: OrderRepository, timezone: str = "UTC", page_size: int = 10):
        self.repo = repo
        self.tz = ZoneInfo(timezone)
        self.page_size = page_size

    def transaction_report(
        self,
        page: int = 1,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ReportPage:
        if page < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="page must be >= 1",
            )

        start, end = day_bounds(start_date, end_date, self.tz)
        offset = (page - 1) * self.page_size
        rows, count = self.repo.list_with_items(offset, self.page_size, start=start, end=end)

        return ReportPage(
            items=[build_order_with_items(order, lines) for order, lines in rows],
            page=page,
            page_size=self.page_size,
            total_count=count,
            total_pages=math.ceil(count / self.page_size),
        )
