# pos_app/repositories/order_repo.py
from datetime import datetime
from decimal import Decimal

from pos_app.core.errors import StoreError
from pos_app.core.money import to_wire
from pos_app.models.order import Order, OrderLine
from pos_app.repositories.base import SupabaseRepository

ORDERS = "transactions"
ITEMS = "transaction_items"

# Embedded select used wherever line items need the product name
ITEM_COLUMNS = "id, transaction_id, product_id, quantity, price, product:products(name)"


class OrderRepository(SupabaseRepository):
    """
    Data access layer for transactions and transaction_items (order store).

    NOTE:
      - Creating a header and creating its items are two independent
        calls. PostgREST gives us no transaction spanning both; the
        service decides what to do when the second one fails.
    """

    # ---- Transactions ----

    def create_order(self, total: Decimal) -> Order:
        """
        Insert a transaction header and return it with its generated id.
        """
        query = self.client.table(ORDERS).insert({"total": to_wire(total)})
        rows = self._execute(query, "Insert transaction").data
        if not rows:
            raise StoreError("Insert transaction failed: no row returned")
        return Order.from_row(rows[0])

    def delete_order(self, order_id: int) -> None:
        query = self.client.table(ORDERS).delete().eq("id", order_id)
        self._execute(query, "Delete transaction")

    def list_page(
        self,
        offset: int,
        limit: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> tuple[list[Order], int]:
        """
        Transactions newest first, optionally bounded by created_at,
        plus the exact count for the same filter.
        """
        query = self.client.table(ORDERS).select("*", count="exact")
        if start is not None:
            query = query.gte("created_at", start.isoformat())
        if end is not None:
            query = query.lte("created_at", end.isoformat())
        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)

        response = self._execute(query, "List transactions")
        orders = [Order.from_row(r) for r in response.data or []]
        return orders, int(response.count or 0)

    def list_since(self, start: datetime) -> list[Order]:
        query = (
            self.client.table(ORDERS)
            .select("*")
            .gte("created_at", start.isoformat())
        )
        rows = self._execute(query, "List transactions").data or []
        return [Order.from_row(r) for r in rows]

    def list_with_items(
        self,
        offset: int,
        limit: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> tuple[list[tuple[Order, list[OrderLine]]], int]:
        """
        One page of transactions newest first, each with its items and
        product names, plus the exact count of matching transactions.
        """
        query = self.client.table(ORDERS).select(
            f"id, created_at, total, {ITEMS} ({ITEM_COLUMNS})",
            count="exact",
        )
        if start is not None:
            query = query.gte("created_at", start.isoformat())
        if end is not None:
            query = query.lte("created_at", end.isoformat())
        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)

        response = self._execute(query, "Load transaction report")
        page = [
            (
                Order.from_row(r),
                [OrderLine.from_row(it) for it in r.get(ITEMS) or []],
            )
            for r in response.data or []
        ]
        return page, int(response.count or 0)

    # ---- Transaction items ----

    def create_items(self, lines: list[OrderLine]) -> list[OrderLine]:
        """
        Insert all line items of one transaction in a single batch.
        """
        payload = [
            {
                "transaction_id": ln.transaction_id,
                "product_id": str(ln.product_id),
                "quantity": ln.quantity,
                "price": to_wire(ln.price),
            }
            for ln in lines
        ]
        query = self.client.table(ITEMS).insert(payload)
        rows = self._execute(query, "Insert transaction items").data or []
        return [OrderLine.from_row(r) for r in rows]

    def list_items_for_orders(self, order_ids: list[int]) -> list[OrderLine]:
        if not order_ids:
            return []
        query = (
            self.client.table(ITEMS)
            .select(ITEM_COLUMNS)
            .in_("transaction_id", order_ids)
            .order("id")
        )
        rows = self._execute(query, "List transaction items").data or []
        return [OrderLine.from_row(r) for r in rows]
