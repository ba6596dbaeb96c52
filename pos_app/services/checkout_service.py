# pos_app/services/checkout_service.py
import logging
from typing import NoReturn

from pos_app.core.errors import (
    PartialSubmissionError,
    StoreError,
    SubmissionError,
    ValidationError,
)
from pos_app.models.cart import Cart
from pos_app.models.order import OrderLine
from pos_app.repositories.order_repo import OrderRepository
from pos_app.schemas.order import OrderWithItemsRead, build_order_with_items

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Turns a session's cart into a persisted transaction.

    Steps:
      1. Reject an empty cart before touching the store.
      2. Insert the transaction header with total = cart.total().
      3. Insert one transaction item per cart line, in one batch, using
         the price captured when the line entered the cart.
      4. Clear the cart.

    Steps 2 and 3 are separate store calls with no transaction around
    them. If step 3 fails the header is left without items, unless
    `compensate_orphans` is set, in which case the header is deleted
    again before the error is raised.

    Nothing is retried; the cart is kept on any failure so the cashier
    can try again.
    """

    def __init__(self, order_repo: OrderRepository, compensate_orphans: bool = False):
        self.order_repo = order_repo
        self.compensate_orphans = compensate_orphans

    def submit(self, cart: Cart) -> OrderWithItemsRead:
        if cart.is_empty:
            raise ValidationError("cart empty")

        total = cart.total()

        # 1) Header
        try:
            order = self.order_repo.create_order(total)
        except StoreError as exc:
            logger.warning("Checkout failed creating transaction: %s", exc.message)
            raise SubmissionError(f"Checkout failed: {exc.message}") from exc

        # 2) Items
        lines = [
            OrderLine(
                transaction_id=order.id,
                product_id=ln.product_id,
                quantity=ln.quantity,
                price=ln.unit_price,
                product_name=ln.name,
            )
            for ln in cart.lines
        ]
        try:
            saved = self.order_repo.create_items(lines)
        except StoreError as exc:
            self._handle_orphan(order.id, exc)

        # Names come from the cart; the insert response has no join.
        names = {ln.product_id: ln.product_name for ln in lines}
        for ln in saved:
            ln.product_name = names.get(ln.product_id)

        # 3) Success => clear cart
        cart.clear()
        logger.info(
            "Checkout complete: transaction=%s total=%s lines=%d",
            order.id,
            total,
            len(saved),
        )
        return build_order_with_items(order, saved)

    def _handle_orphan(self, order_id: int, cause: StoreError) -> NoReturn:
        """
        Raise the right error after the item insert failed for `order_id`.
        """
        if self.compensate_orphans:
            try:
                self.order_repo.delete_order(order_id)
            except StoreError as delete_exc:
                logger.error(
                    "Orphaned transaction %s: items failed (%s) and rollback failed (%s)",
                    order_id,
                    cause.message,
                    delete_exc.message,
                )
            else:
                logger.warning(
                    "Transaction %s rolled back after item insert failed: %s",
                    order_id,
                    cause.message,
                )
                raise SubmissionError(f"Checkout failed: {cause.message}") from cause
        else:
            logger.error(
                "Orphaned transaction %s: items failed (%s); reconcile manually",
                order_id,
                cause.message,
            )

        raise PartialSubmissionError(
            f"Transaction {order_id} was created but its items were not saved: "
            f"{cause.message}",
            order_id=order_id,
        ) from cause
