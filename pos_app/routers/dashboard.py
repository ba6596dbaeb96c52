# pos_app/routers/dashboard.py
from datetime import date

from fastapi import APIRouter, Depends, Query

from pos_app.core.auth import require_auth
from pos_app.core.config import get_settings
from pos_app.repositories.order_repo import OrderRepository
from pos_app.schemas.order import TransactionPage
from pos_app.schemas.stats import DashboardSummary
from pos_app.services.stats_service import DashboardService

settings = get_settings()

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(require_auth)],
)

repo = OrderRepository()
service = DashboardService(
    repo,
    timezone=settings.SHOP_TIMEZONE,
    page_size=settings.DASHBOARD_PAGE_SIZE,
    top_n_products=settings.TOP_PRODUCTS_LIMIT,
)


@router.get("/summary", response_model=DashboardSummary)
def get_summary():
    """
    Today's transaction count, revenue and best-selling products.

    "Today" starts at midnight in SHOP_TIMEZONE.
    """
    return service.summary()


@router.get("/transactions", response_model=TransactionPage)
def list_transactions(
    page: int = Query(1, ge=1),
    start_date: date | None = None,
    end_date: date | None = None,
):
    """
    Transactions newest first.

    Query params (optional):
      - start_date / end_date: YYYY-MM-DD, both inclusive
    """
    return service.list_transactions(page=page, start_date=start_date, end_date=end_date)
