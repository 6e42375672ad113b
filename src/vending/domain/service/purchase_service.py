"""Domain service: Purchase.

Coordinates the Catalog, the CoinInventory and the Transaction for one
purchase attempt.  Like any cross-aggregate operation it runs in two
phases so a failure can never leave a half-applied purchase:

  Phase 1 (``plan``): read-only.  Resolve the product, check stock and
            funds, merge the inserted coins into a *copy* of the
            inventory and compute change against that copy.
  Phase 2 (``commit``): mutate everything together, rolling back the
            already-mutated aggregates if any step raises.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.exceptions import (
    ChangeUnavailableError,
    EntityNotFoundError,
    InsufficientFundsError,
    NoProductSelectedError,
    OutOfStockError,
)
from vending.domain.model.catalog import Catalog
from vending.domain.model.coin_inventory import ChangeResult, CoinInventory
from vending.domain.model.product import Product
from vending.domain.model.transaction import Transaction


@dataclass(frozen=True)
class PurchasePlan:
    """Everything the commit needs, computed without side effects."""

    product: Product
    change: ChangeResult
    hypothetical: CoinInventory


class PurchaseService:

    def __init__(self, catalog: Catalog, inventory: CoinInventory) -> None:
        self._catalog = catalog
        self._inventory = inventory

    def plan(self, transaction: Transaction) -> PurchasePlan:
        """Validate a purchase and compute its change.  Never mutates."""
        product_id = transaction.selected_product_id
        if product_id is None:
            raise NoProductSelectedError("No product selected")

        product = self._catalog.find_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if not product.in_stock:
            raise OutOfStockError(f"{product.name} is out of stock")

        inserted = transaction.total_inserted()
        if inserted < product.price:
            raise InsufficientFundsError(
                f"Insufficient funds for {product.name}",
                shortfall=(product.price - inserted).cents,
            )

        change_due = (inserted - product.price).cents

        # The customer's own coins are eligible to come back as change.
        hypothetical = self._inventory.copy()
        hypothetical.deposit_batch(transaction.inserted_coins)

        change = hypothetical.compute_change(change_due)
        if not change.success:
            raise ChangeUnavailableError(
                f"Cannot make {change_due} in change",
                change_due=change_due,
                shortfall=change.shortfall,
            )

        return PurchasePlan(product=product, change=change, hypothetical=hypothetical)

    def commit(self, plan: PurchasePlan, transaction: Transaction) -> None:
        """Apply a plan: stock, coin inventory and transaction together."""
        stock_before = self._catalog.stock_snapshot()
        coins_before = self._inventory.snapshot()
        try:
            self._catalog.decrement_stock(plan.product.id)
            self._inventory.restore(plan.hypothetical.snapshot())
            self._inventory.apply_change(plan.change)
        except Exception:
            self._catalog.restore_stock(stock_before)
            self._inventory.restore(coins_before)
            raise
        transaction.clear()
