# pos_app/models/product.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlmodel import SQLModel, Field

from pos_app.core.money import to_decimal


class Product(SQLModel):
    """
    Catalog entry as stored in the `products` table.

    Columns:
      - id, name, price, image_url, created_at
    """

    id: uuid.UUID

    name: str = Field(
        description="Display name shown on the POS screen",
    )

    price: Decimal = Field(
        ge=0,
        description="Unit price (e.g. IDR)",
    )

    image_url: str | None = Field(
        default=None,
        description="Public URL in the product-images bucket",
    )

    created_at: datetime | None = Field(
        default=None,
        description="Creation timestamp assigned by the store",
    )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Product":
        return cls(
            id=row["id"],
            name=row["name"],
            price=to_decimal(row.get("price")),
            image_url=row.get("image_url"),
            created_at=row.get("created_at"),
        )
