# pos_app/models/order.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlmodel import SQLModel, Field

from pos_app.core.money import to_decimal

# Label shown for a line whose product has since been deleted
MISSING_PRODUCT_LABEL = "Product not found"


class Order(SQLModel):
    """
    Completed sale header, stored in the `transactions` table.

    Columns:
      - id (server assigned), created_at, total

    `total` is written once at checkout from the cart and never
    re-derived from the line items.
    """

    id: int
    created_at: datetime
    total: Decimal = Field(
        description="Sum of price x quantity over the lines at checkout time",
    )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Order":
        return cls(
            id=row["id"],
            created_at=row["created_at"],
            total=to_decimal(row.get("total")),
        )


class OrderLine(SQLModel):
    """
    Line item inside a transaction, stored in `transaction_items`.

    Columns:
      - id, transaction_id, product_id, quantity, price

    `price` is the unit price captured when the product entered the cart.
    `product_name` is not a column: it comes from the joined `products`
    row and is None when that product no longer exists.
    """

    id: int | None = None
    transaction_id: int
    product_id: uuid.UUID
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0)
    product_name: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @property
    def display_name(self) -> str:
        return self.product_name or MISSING_PRODUCT_LABEL

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "OrderLine":
        return cls(
            id=row.get("id"),
            transaction_id=row["transaction_id"],
            product_id=row["product_id"],
            quantity=row["quantity"],
            price=to_decimal(row.get("price")),
            product_name=joined_product_name(row.get("product")),
        )


def joined_product_name(joined: Any) -> str | None:
    """
    Normalize the embedded `product:products(name)` resource.

    PostgREST returns the embed as an object, a list of objects or null
    depending on how it infers the relationship's cardinality. Every
    shape collapses to the product name or None here so nothing
    downstream has to branch on it.
    """
    if isinstance(joined, list):
        joined = joined[0] if joined else None
    if isinstance(joined, dict):
        name = joined.get("name")
        return name or None
    return None
