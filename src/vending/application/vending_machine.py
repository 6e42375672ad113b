"""VendingMachine: the orchestrator behind every caller-facing operation.

Owns exactly one Catalog, one CoinInventory and one Transaction.  No
caller gets a reference to any of them, so the only way to change
machine state is through the methods below.  Each public method holds
the machine lock, which keeps a purchase's read-compute-commit sequence
from interleaving with another operation on the same machine.
"""

from __future__ import annotations

import logging
import threading

from vending.application.dto import (
    Failure,
    FailureKind,
    MachineStatus,
    ProductLine,
    PurchaseOutcome,
    RefundOutcome,
    format_coins,
)
from vending.application.machine_config import MachineConfig
from vending.domain.exceptions import (
    ChangeUnavailableError,
    EntityNotFoundError,
    InsufficientFundsError,
    NoProductSelectedError,
    OutOfStockError,
    ValidationError,
)
from vending.domain.model.catalog import Catalog
from vending.domain.model.coin_inventory import CoinInventory
from vending.domain.model.transaction import Transaction
from vending.domain.model.value_objects import Denomination, Money
from vending.domain.service.purchase_service import PurchaseService

logger = logging.getLogger(__name__)

SCENARIOS = ("small-coin-shortage", "out-of-stock", "extreme-change-shortage")


class VendingMachine:

    def __init__(self, config: MachineConfig | None = None) -> None:
        self._config = config or MachineConfig.default()
        self._lock = threading.RLock()
        self._catalog = Catalog()
        self._inventory = CoinInventory()
        self._transaction = Transaction()
        self._load(self._config)

    # --- Customer operations --------------------------------------------------

    def select_product(self, product_id: str) -> str:
        """Select a product, replacing any earlier selection.

        Inserted coins are kept.  Unknown ids are accepted here and
        reported when the purchase is attempted.
        """
        if not isinstance(product_id, str) or not product_id.strip():
            raise ValidationError("Product id is required")
        product_id = product_id.strip()

        with self._lock:
            self._transaction.select(product_id)
            product = self._catalog.find_product(product_id)
            if product is None:
                return f"Product '{product_id}' is not in the catalog"
            return f"{product.name} selected ({product.price})"

    def insert_coin(self, denomination: int | str) -> str:
        coin = Denomination.parse(denomination)
        with self._lock:
            self._transaction.insert_coin(coin)
            total = self._transaction.total_inserted()
        return f"Inserted {Money(coin.value)}. Total {total}"

    def purchase(self) -> PurchaseOutcome | Failure:
        """Attempt to buy the selected product with the inserted coins.

        Either everything changes (stock, coins, transaction) or nothing
        does.  Domain failures come back as ``Failure`` values.
        """
        with self._lock:
            service = PurchaseService(self._catalog, self._inventory)
            try:
                plan = service.plan(self._transaction)
            except NoProductSelectedError:
                return self._fail(
                    FailureKind.NO_PRODUCT_SELECTED,
                    "No product selected. Please select a product first "
                    "or insert coins and then select a product.",
                )
            except EntityNotFoundError:
                return self._fail(
                    FailureKind.PRODUCT_NOT_FOUND,
                    f"Product '{self._transaction.selected_product_id}' is not "
                    f"available. Please select another product.",
                )
            except OutOfStockError:
                return self._fail(
                    FailureKind.OUT_OF_STOCK,
                    "Selected product is out of stock. Please select another product.",
                )
            except InsufficientFundsError as exc:
                return self._fail(
                    FailureKind.INSUFFICIENT_FUNDS,
                    f"Insufficient funds. {Money(exc.shortfall)} more required.",
                    shortfall=exc.shortfall,
                )
            except ChangeUnavailableError as exc:
                return self._fail(
                    FailureKind.CHANGE_UNAVAILABLE,
                    "Cannot dispense exact change with current coin inventory. "
                    "Please insert exact change or choose another product.",
                    shortfall=exc.shortfall,
                )

            try:
                service.commit(plan, self._transaction)
            except Exception:
                logger.exception("Purchase of %s rolled back", plan.product.id)
                raise

            outcome = PurchaseOutcome(
                product_id=plan.product.id,
                product_name=plan.product.name,
                change_coins=plan.change.coins,
            )
            logger.info(
                "Dispensed %s; change [%s]",
                outcome.product_id,
                format_coins(outcome.change_coins),
            )
            return outcome

    def cancel(self) -> RefundOutcome:
        """Hand back every inserted coin.  Catalog and coins are untouched."""
        with self._lock:
            refunded = self._transaction.cancel()
        if refunded:
            logger.info("Refunded %d coin(s)", len(refunded))
        return RefundOutcome(refunded_coins=refunded)

    # --- Queries --------------------------------------------------------------

    def get_status(self) -> MachineStatus:
        with self._lock:
            return MachineStatus(
                products=[
                    ProductLine(id=p.id, name=p.name, price=p.price.cents, stock=p.stock)
                    for p in self._catalog.list_all()
                ],
                selected_product_id=self._transaction.selected_product_id,
                total_inserted=self._transaction.total_inserted().cents,
                inserted_coins=list(self._transaction.inserted_coins),
                coin_inventory=self._inventory.counts(),
                items_remaining=self._catalog.items_remaining,
                coins_in_machine=self._inventory.coin_count,
            )

    # --- Administrative operations --------------------------------------------

    def reset_machine(self, config: MachineConfig | None = None) -> None:
        """Reload a catalog and coin inventory and drop the open transaction.

        Without an argument the construction-time configuration is used.
        """
        with self._lock:
            if config is not None:
                self._config = config
            self._load(self._config)
            logger.info("Machine reset")

    def set_coin_count(self, denomination: int | str, count: int) -> None:
        coin = Denomination.parse(denomination)
        with self._lock:
            self._inventory.set_count(coin, count)
        logger.info("Coin count for %d set to %d", coin.value, count)

    def restock(self, product_id: str, stock: int) -> None:
        with self._lock:
            self._catalog.restock(product_id, stock)
        logger.info("Stock for %s set to %d", product_id, stock)

    def apply_scenario(self, name: str) -> str:
        """Put the machine into one of the canned test situations."""
        with self._lock:
            if name == "small-coin-shortage":
                self._inventory.restore({
                    Denomination.TWO_DOLLARS: 5,
                    Denomination.ONE_DOLLAR: 10,
                })
                message = "Limited small coins for change"
            elif name == "out-of-stock":
                self._catalog.restock("B1", 0)
                message = "B1 out of stock"
            elif name == "extreme-change-shortage":
                self._inventory.restore({Denomination.FIFTY_CENTS: 1})
                message = "Very low change inventory"
            else:
                raise ValidationError(
                    f"Unknown scenario '{name}' (known: {', '.join(SCENARIOS)})"
                )
        logger.info("Scenario applied: %s", name)
        return message

    # --- Internal helpers -----------------------------------------------------

    def _load(self, config: MachineConfig) -> None:
        catalog = Catalog(config.product_list)
        inventory = CoinInventory(config.coin_inventory)
        self._catalog = catalog
        self._inventory = inventory
        self._transaction = Transaction()

    @staticmethod
    def _fail(kind: FailureKind, message: str, shortfall: int = 0) -> Failure:
        logger.info("Purchase failed: %s", kind.value)
        return Failure(kind=kind, message=message, shortfall=shortfall)
