"""Data Transfer Objects: plain containers that cross layer boundaries.

Purchase failures are values, not exceptions, so a caller can branch on
``outcome.success`` without try/except.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from vending.domain.model.value_objects import Denomination, Money


class FailureKind(Enum):
    NO_PRODUCT_SELECTED = "NO_PRODUCT_SELECTED"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    CHANGE_UNAVAILABLE = "CHANGE_UNAVAILABLE"


def format_coins(coins: list[Denomination]) -> str:
    """Render coins as ``$1.00, $0.50``."""
    return ", ".join(str(Money(c.value)) for c in coins)


@dataclass(frozen=True)
class Failure:
    """Output: a purchase attempt that changed nothing."""

    kind: FailureKind
    message: str
    shortfall: int = 0  # minor units still missing (funds or change)
    success: bool = field(default=False, init=False)


@dataclass(frozen=True)
class PurchaseOutcome:
    """Output: a committed purchase."""

    product_id: str
    product_name: str
    change_coins: list[Denomination]
    success: bool = field(default=True, init=False)

    @property
    def change_total(self) -> int:
        return sum(c.value for c in self.change_coins)

    @property
    def message(self) -> str:
        if self.change_coins:
            return (
                f"Dispensed {self.product_name}. "
                f"Change returned: {format_coins(self.change_coins)}"
            )
        return f"Dispensed {self.product_name}. No change"


@dataclass(frozen=True)
class RefundOutcome:
    """Output: coins handed back by a cancel."""

    refunded_coins: list[Denomination]

    @property
    def total(self) -> int:
        return sum(c.value for c in self.refunded_coins)

    @property
    def message(self) -> str:
        if not self.refunded_coins:
            return "Nothing to cancel."
        return (
            f"Transaction cancelled, returned {len(self.refunded_coins)} coin(s): "
            f"{format_coins(self.refunded_coins)}"
        )


@dataclass(frozen=True)
class ProductLine:
    id: str
    name: str
    price: int
    stock: int

    @property
    def price_display(self) -> str:
        return str(Money(self.price))


@dataclass(frozen=True)
class MachineStatus:
    """Output: read-only snapshot of the machine for display."""

    products: list[ProductLine]
    selected_product_id: str | None
    total_inserted: int
    inserted_coins: list[Denomination]
    coin_inventory: dict[Denomination, int]
    items_remaining: int
    coins_in_machine: int
