# pos_app/services/cart_service.py
import uuid

from fastapi import HTTPException, status

from pos_app.models.cart import Cart
from pos_app.repositories.product_repo import ProductRepository
from pos_app.schemas.cart import CartSummary


class CartService:
    """
    Business logic for POS cart operations.

    Responsibilities:
      - resolve product ids against the catalog before adding
      - delegate mutations to the session's Cart
      - build cart summaries (line totals + cart total)

    The cart itself is never persisted.
    """

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    def get_cart_summary(self, cart: Cart) -> CartSummary:
        return CartSummary.from_cart(cart)

    def add_to_cart(self, cart: Cart, product_id: uuid.UUID) -> CartSummary:
        """
        Add one unit of a catalog product.

        The product is read once here; its current price becomes the
        line's captured price if the line is new.
        """
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        cart.add(product)
        return CartSummary.from_cart(cart)

    def increment(self, cart: Cart, product_id: uuid.UUID) -> CartSummary:
        cart.increment_quantity(product_id)
        return CartSummary.from_cart(cart)

    def decrement(self, cart: Cart, product_id: uuid.UUID) -> CartSummary:
        cart.decrement_quantity(product_id)
        return CartSummary.from_cart(cart)

    def remove_item(self, cart: Cart, product_id: uuid.UUID) -> CartSummary:
        """
        Remove a product from the cart (no-op if absent).
        """
        cart.remove(product_id)
        return CartSummary.from_cart(cart)
