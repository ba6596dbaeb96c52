"""
Pytest configuration and fixtures for the POS back office.

The Supabase store is replaced by in-memory fakes with the same method
surface as the repositories, so services and routers run unmodified.
"""

import os
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# Settings are read when the routers are imported; provide them first.
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

import pytest

from pos_app.core.errors import StoreError
from pos_app.models.order import Order, OrderLine
from pos_app.models.product import Product


class FakeProductRepository:
    """Catalog store kept in a dict."""

    def __init__(self):
        self.rows: dict[uuid.UUID, Product] = {}
        self._tick = 0

    def _next_timestamp(self) -> datetime:
        # Strictly increasing so "newest first" is deterministic
        self._tick += 1
        return datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._tick)

    def add(self, name: str, price: str, image_url: str | None = None) -> Product:
        product = Product(
            id=uuid.uuid4(),
            name=name,
            price=Decimal(price),
            image_url=image_url,
            created_at=self._next_timestamp(),
        )
        self.rows[product.id] = product
        return product

    def get_by_id(self, product_id):
        return self.rows.get(product_id)

    def list_page(self, offset, limit):
        ordered = sorted(self.rows.values(), key=lambda p: p.created_at, reverse=True)
        return ordered[offset:offset + limit], len(ordered)

    def create(self, name, price):
        return self.add(name, str(price))

    def update(self, product_id, values):
        product = self.rows.get(product_id)
        if product is None:
            return None
        updated = product.model_copy(update=values)
        self.rows[product_id] = updated
        return updated

    def delete(self, product_id):
        self.rows.pop(product_id, None)


class CatalogNames:
    """Resolves product names from the live catalog, like the PostgREST join."""

    def __init__(self, product_repo: FakeProductRepository):
        self.product_repo = product_repo

    def get(self, product_id, default=None):
        product = self.product_repo.rows.get(product_id)
        return product.name if product else default


class FakeOrderRepository:
    """
    Order store kept in lists.

    `fail_*` flags make the matching call raise StoreError; `calls`
    records every store method that was invoked.
    """

    def __init__(self, product_names=None):
        self.orders: list[Order] = []
        self.items: list[OrderLine] = []
        self.calls: list[str] = []
        self.product_names = product_names if product_names is not None else {}
        self.fail_create_order = False
        self.fail_create_items = False
        self.fail_delete_order = False
        self._order_seq = 0
        self._item_seq = 0

    # ---- seeding helpers ----

    def seed_order(self, total: str, created_at: datetime, lines=()) -> Order:
        """lines: iterable of (product_id, quantity, price)"""
        self._order_seq += 1
        order = Order(id=self._order_seq, created_at=created_at, total=Decimal(total))
        self.orders.append(order)
        for product_id, quantity, price in lines:
            self._item_seq += 1
            self.items.append(
                OrderLine(
                    id=self._item_seq,
                    transaction_id=order.id,
                    product_id=product_id,
                    quantity=quantity,
                    price=Decimal(price),
                )
            )
        return order

    def _with_name(self, line: OrderLine) -> OrderLine:
        return line.model_copy(update={"product_name": self.product_names.get(line.product_id)})

    @staticmethod
    def _in_window(order: Order, start, end) -> bool:
        if start is not None and order.created_at < start:
            return False
        if end is not None and order.created_at > end:
            return False
        return True

    # ---- repository surface ----

    def create_order(self, total):
        self.calls.append("create_order")
        if self.fail_create_order:
            raise StoreError("Insert transaction failed: connection reset")
        self._order_seq += 1
        order = Order(id=self._order_seq, created_at=datetime.now(timezone.utc), total=total)
        self.orders.append(order)
        return order

    def delete_order(self, order_id):
        self.calls.append("delete_order")
        if self.fail_delete_order:
            raise StoreError("Delete transaction failed: timeout")
        self.orders = [o for o in self.orders if o.id != order_id]

    def create_items(self, lines):
        self.calls.append("create_items")
        if self.fail_create_items:
            raise StoreError("Insert transaction items failed: violates foreign key")
        saved = []
        for ln in lines:
            self._item_seq += 1
            row = ln.model_copy(update={"id": self._item_seq, "product_name": None})
            self.items.append(row)
            saved.append(row.model_copy())
        return saved

    def list_since(self, start):
        self.calls.append("list_since")
        return [o for o in self.orders if o.created_at >= start]

    def list_page(self, offset, limit, start=None, end=None):
        self.calls.append("list_page")
        matching = sorted(
            (o for o in self.orders if self._in_window(o, start, end)),
            key=lambda o: o.created_at,
            reverse=True,
        )
        return matching[offset:offset + limit], len(matching)

    def list_items_for_orders(self, order_ids):
        self.calls.append("list_items_for_orders")
        wanted = set(order_ids)
        return [self._with_name(ln) for ln in self.items if ln.transaction_id in wanted]

    def list_with_items(self, offset, limit, start=None, end=None):
        self.calls.append("list_with_items")
        matching = sorted(
            (o for o in self.orders if self._in_window(o, start, end)),
            key=lambda o: o.created_at,
            reverse=True,
        )
        page = [
            (o, [self._with_name(ln) for ln in self.items if ln.transaction_id == o.id])
            for o in matching[offset:offset + limit]
        ]
        return page, len(matching)


@pytest.fixture
def product_repo():
    return FakeProductRepository()


@pytest.fixture
def order_repo(product_repo):
    return FakeOrderRepository(product_names=CatalogNames(product_repo))


@pytest.fixture
def coffee(product_repo):
    return product_repo.add("Kopi Susu", "1000")


@pytest.fixture
def bread(product_repo):
    return product_repo.add("Roti Bakar", "500")
