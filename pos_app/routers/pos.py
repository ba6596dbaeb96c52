# pos_app/routers/pos.py
import uuid

from fastapi import APIRouter, Depends, Query, Request, status

from pos_app.core.auth import CurrentUser, require_auth
from pos_app.core.config import get_settings
from pos_app.models.cart import Cart
from pos_app.repositories.order_repo import OrderRepository
from pos_app.repositories.product_repo import ProductRepository
from pos_app.schemas.cart import CartItemAdd, CartSummary
from pos_app.schemas.order import OrderWithItemsRead
from pos_app.schemas.product import ProductPage
from pos_app.services.cart_service import CartService
from pos_app.services.checkout_service import CheckoutService
from pos_app.services.product_service import ProductService

settings = get_settings()

router = APIRouter(prefix="/pos", tags=["POS"])

product_repo = ProductRepository()
order_repo = OrderRepository()
product_service = ProductService(product_repo)
cart_service = CartService(product_repo)
checkout_service = CheckoutService(
    order_repo,
    compensate_orphans=settings.CHECKOUT_COMPENSATE_ORPHANS,
)


def get_cart(
    request: Request,
    current_user: CurrentUser = Depends(require_auth),
) -> Cart:
    """
    The cart owned by the caller's session.
    """
    return request.app.state.carts.for_session(current_user.id)


@router.get(
    "/products",
    response_model=ProductPage,
    dependencies=[Depends(require_auth)],
)
def list_pos_products(page: int = Query(1, ge=1)):
    """
    Product picker for the POS screen, `POS_PAGE_SIZE` per page.
    """
    return product_service.list_products(page=page, page_size=settings.POS_PAGE_SIZE)


@router.get("/cart", response_model=CartSummary)
def get_cart_summary(cart: Cart = Depends(get_cart)):
    return cart_service.get_cart_summary(cart)


@router.delete("/cart", response_model=CartSummary)
def discard_cart(
    request: Request,
    current_user: CurrentUser = Depends(require_auth),
):
    """
    Drop the session's cart, e.g. when the cashier leaves the POS screen.
    """
    request.app.state.carts.discard(current_user.id)
    return cart_service.get_cart_summary(Cart())


@router.post("/cart/items", response_model=CartSummary)
def add_to_cart(payload: CartItemAdd, cart: Cart = Depends(get_cart)):
    """
    Add one unit of a product. Adding it again adds one more.
    """
    return cart_service.add_to_cart(cart, payload.product_id)


@router.post("/cart/items/{product_id}/increment", response_model=CartSummary)
def increment_item(product_id: uuid.UUID, cart: Cart = Depends(get_cart)):
    return cart_service.increment(cart, product_id)


@router.post("/cart/items/{product_id}/decrement", response_model=CartSummary)
def decrement_item(product_id: uuid.UUID, cart: Cart = Depends(get_cart)):
    """
    Decrease quantity by one; a line never drops below 1.
    """
    return cart_service.decrement(cart, product_id)


@router.delete("/cart/items/{product_id}", response_model=CartSummary)
def remove_item(product_id: uuid.UUID, cart: Cart = Depends(get_cart)):
    return cart_service.remove_item(cart, product_id)


@router.post(
    "/checkout",
    response_model=OrderWithItemsRead,
    status_code=status.HTTP_201_CREATED,
)
def checkout(cart: Cart = Depends(get_cart)):
    """
    Persist the cart as a transaction and clear it.

    Errors:
      - 400 if the cart is empty
      - 502 if the store rejected the transaction (cart kept)
      - 502 with `order_id` if the transaction was saved without items
    """
    return checkout_service.submit(cart)
