"""Transaction: the in-progress customer session.

Selection and inserted coins are independent fields.  A customer may
insert money and then pick a product, or pick and then insert; picking
again replaces the selection but keeps the money.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vending.domain.model.value_objects import Denomination, Money


@dataclass
class Transaction:

    selected_product_id: str | None = None
    inserted_coins: list[Denomination] = field(default_factory=list)

    def select(self, product_id: str) -> None:
        self.selected_product_id = product_id

    def insert_coin(self, coin: Denomination) -> None:
        self.inserted_coins.append(coin)

    def total_inserted(self) -> Money:
        return Money.sum_of(self.inserted_coins)

    def cancel(self) -> list[Denomination]:
        """Return and clear the inserted coins, in insertion order.

        The selection is left alone; only the money goes back.
        """
        refunded = list(self.inserted_coins)
        self.inserted_coins.clear()
        return refunded

    def clear(self) -> None:
        """Reset to the idle state after a committed purchase."""
        self.selected_product_id = None
        self.inserted_coins.clear()

    @property
    def is_idle(self) -> bool:
        return self.selected_product_id is None and not self.inserted_coins
