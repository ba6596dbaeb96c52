# pos_app/routers/reports.py
from datetime import date

from fastapi import APIRouter, Depends, Query

from pos_app.core.auth import require_auth
from pos_app.core.config import get_settings
from pos_app.repositories.order_repo import OrderRepository
from pos_app.schemas.order import ReportPage
from pos_app.services.report_service import ReportService

settings = get_settings()

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(require_auth)],
)

repo = OrderRepository()
service = ReportService(
    repo,
    timezone=settings.SHOP_TIMEZONE,
    page_size=settings.REPORT_PAGE_SIZE,
)


@router.get("/transactions", response_model=ReportPage)
def transaction_report(
    page: int = Query(1, ge=1),
    start_date: date | None = None,
    end_date: date | None = None,
):
    """
    Transactions with their items, newest first, REPORT_PAGE_SIZE per page.

    Items whose product was deleted are labelled "Product not found".
    """
    return service.transaction_report(page=page, start_date=start_date, end_date=end_date)
