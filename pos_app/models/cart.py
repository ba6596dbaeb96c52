# pos_app/models/cart.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel, Field

from pos_app.models.product import Product


class CartLine(SQLModel):
    """
    One product in the cart.

    `unit_price` is captured from the product when the line is first
    created and is what checkout writes; later catalog edits do not
    change it.
    """

    product_id: uuid.UUID
    name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    image_url: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart:
    """
    In-memory cart owned by a single POS session.

    Invariants:
      - at most one line per product id
      - every line has quantity >= 1
      - lines keep the order in which products were first added

    Nothing here touches the store; the cart only exists until checkout
    succeeds or the session discards it.
    """

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def get(self, product_id: uuid.UUID) -> CartLine | None:
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    def add(self, product: Product) -> CartLine:
        """
        Add one unit of `product`.

        An existing line is incremented; otherwise a new line is appended
        with the product's current price captured.
        """
        line = self.get(product.id)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            quantity=1,
            image_url=product.image_url,
        )
        self._lines.append(line)
        return line

    def remove(self, product_id: uuid.UUID) -> None:
        self._lines = [ln for ln in self._lines if ln.product_id != product_id]

    def increment_quantity(self, product_id: uuid.UUID) -> None:
        line = self.get(product_id)
        if line is not None:
            line.quantity += 1

    def decrement_quantity(self, product_id: uuid.UUID) -> None:
        # Clamp at 1: removal is only ever explicit.
        line = self.get(product_id)
        if line is not None:
            line.quantity = max(1, line.quantity - 1)

    def total(self) -> Decimal:
        return sum((ln.line_total for ln in self._lines), Decimal("0"))

    def total_quantity(self) -> int:
        return sum(ln.quantity for ln in self._lines)

    def clear(self) -> None:
        self._lines = []


class CartSessions:
    """
    Carts keyed by the authenticated session that owns them.

    One instance lives on `app.state`; each cart is only ever touched by
    requests of its owning session.
    """

    def __init__(self) -> None:
        self._carts: dict[uuid.UUID, Cart] = {}

    def for_session(self, session_id: uuid.UUID) -> Cart:
        cart = self._carts.get(session_id)
        if cart is None:
            cart = Cart()
            self._carts[session_id] = cart
        return cart

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._carts

    def discard(self, session_id: uuid.UUID) -> None:
        self._carts.pop(session_id, None)
