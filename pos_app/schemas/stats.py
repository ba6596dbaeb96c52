# pos_app/schemas/stats.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel


class TopProduct(SQLModel):
    """
    Units sold for one product within the summary window.
    """
    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    name: str
    total_quantity: int


class DashboardSummary(SQLModel):
    """
    Payload for the dashboard summary boxes.
    """
    model_config = ConfigDict(extra="forbid")

    window_start: datetime
    transaction_count: int
    revenue: Decimal
    top_products: list[TopProduct]
