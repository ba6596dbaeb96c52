# pos_app/schemas/order.py
import uuid
from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel

from pos_app.models.order import Order, OrderLine


class OrderRead(SQLModel):
    """
    Lightweight representation of a transaction (without items).
    """

    id: int
    created_at: datetime
    total: Decimal


class OrderLineRead(SQLModel):
    """
    Representation of a single transaction line item.
    """

    id: int | None = None
    product_id: uuid.UUID
    product_name: str
    quantity: int
    price: Decimal
    line_total: Decimal


class OrderWithItemsRead(OrderRead):
    """
    Full transaction view including items.
    """

    items: list[OrderLineRead]


class TransactionPage(SQLModel):
    """
    One page of the dashboard transaction list.
    """

    items: list[OrderRead]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class ReportPage(SQLModel):
    """
    One page of the transaction report, items included.
    """

    items: list[OrderWithItemsRead]
    page: int
    page_size: int
    total_count: int
    total_pages: int


def build_order_with_items(order: Order, lines: list[OrderLine]) -> OrderWithItemsRead:
    """
    Compose OrderWithItemsRead, falling back to a placeholder label for
    lines whose product was deleted.
    """
    return OrderWithItemsRead(
        id=order.id,
        created_at=order.created_at,
        total=order.total,
        items=[
            OrderLineRead(
                id=ln.id,
                product_id=ln.product_id,
                product_name=ln.display_name,
                quantity=ln.quantity,
                price=ln.price,
                line_total=ln.line_total,
            )
            for ln in lines
        ],
    )
