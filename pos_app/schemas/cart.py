# pos_app/schemas/cart.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel

from pos_app.models.cart import Cart


class CartItemAdd(SQLModel):
    """
    Payload for adding one unit of a product to the cart.
    """

    product_id: uuid.UUID


class CartLineRead(SQLModel):
    """
    Read model for a single cart line, including line_total.
    """

    product_id: uuid.UUID
    name: str
    unit_price: Decimal
    quantity: int
    image_url: str | None = None
    line_total: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartLineRead]
    total_quantity: int
    total_price: Decimal

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartSummary":
        return cls(
            items=[
                CartLineRead(
                    product_id=ln.product_id,
                    name=ln.name,
                    unit_price=ln.unit_price,
                    quantity=ln.quantity,
                    image_url=ln.image_url,
                    line_total=ln.line_total,
                )
                for ln in cart.lines
            ],
            total_quantity=cart.total_quantity(),
            total_price=cart.total(),
        )
