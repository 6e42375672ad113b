"""Catalog aggregate: product definitions and stock counts.

No locking happens here; the VendingMachine serializes access.
"""

from __future__ import annotations

from vending.domain.exceptions import EntityNotFoundError, ValidationError
from vending.domain.model.product import Product


class Catalog:

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self.reset_all(products or [])

    def find_product(self, product_id: str) -> Product | None:
        """Return a product by its id, or None if not found."""
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        """Return every product in insertion order."""
        return list(self._store.values())

    def decrement_stock(self, product_id: str) -> None:
        """Reduce stock by exactly one.

        Only the purchase commit calls this.  Raises EntityNotFoundError
        or OutOfStockError without touching the stock.
        """
        self._get(product_id).take_one()

    def restock(self, product_id: str, stock: int) -> None:
        self._get(product_id).restock(stock)

    def reset_all(self, products: list[Product]) -> None:
        """Replace the catalog contents wholesale.

        Products are copied so the caller's list never aliases live stock.
        """
        store: dict[str, Product] = {}
        for product in products:
            if product.id in store:
                raise ValidationError(f"Duplicate product id '{product.id}'")
            store[product.id] = product.copy()
        self._store = store

    # --- Snapshot / rollback --------------------------------------------------

    def stock_snapshot(self) -> dict[str, int]:
        return {pid: p.stock for pid, p in self._store.items()}

    def restore_stock(self, snapshot: dict[str, int]) -> None:
        for pid, stock in snapshot.items():
            self._store[pid].stock = stock

    @property
    def items_remaining(self) -> int:
        return sum(p.stock for p in self._store.values())

    # --- Internal helpers -----------------------------------------------------

    def _get(self, product_id: str) -> Product:
        product = self._store.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return product
