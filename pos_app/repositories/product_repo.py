# pos_app/repositories/product_repo.py
import uuid
from decimal import Decimal
from typing import Any

from pos_app.core.errors import StoreError
from pos_app.core.money import to_wire
from pos_app.models.product import Product
from pos_app.repositories.base import SupabaseRepository

TABLE = "products"


class ProductRepository(SupabaseRepository):
    """
    Data access layer for the `products` table (catalog store).

    - Pure store operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        query = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(product_id))
            .limit(1)
        )
        rows = self._execute(query, "Load product").data or []
        return Product.from_row(rows[0]) if rows else None

    def list_page(self, offset: int, limit: int) -> tuple[list[Product], int]:
        """
        One page of products, newest first, plus the exact row count.
        """
        query = (
            self.client.table(TABLE)
            .select("*", count="exact")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
        )
        response = self._execute(query, "List products")
        products = [Product.from_row(r) for r in response.data or []]
        return products, int(response.count or 0)

    def create(self, name: str, price: Decimal) -> Product:
        query = self.client.table(TABLE).insert({"name": name, "price": to_wire(price)})
        rows = self._execute(query, "Create product").data
        if not rows:
            raise StoreError("Create product failed: no row returned")
        return Product.from_row(rows[0])

    def update(self, product_id: uuid.UUID, values: dict[str, Any]) -> Product | None:
        payload = {
            k: to_wire(v) if k == "price" else v
            for k, v in values.items()
        }
        query = self.client.table(TABLE).update(payload).eq("id", str(product_id))
        rows = self._execute(query, "Update product").data or []
        return Product.from_row(rows[0]) if rows else None

    def delete(self, product_id: uuid.UUID) -> None:
        query = self.client.table(TABLE).delete().eq("id", str(product_id))
        self._execute(query, "Delete product")
