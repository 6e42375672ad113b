"""Construction-time configuration for a VendingMachine.

Holds the initial catalog and coin inventory.  Parsing from files
lives in the infrastructure layer; this module only knows the shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vending.domain.model.product import Product
from vending.domain.model.value_objects import Denomination, Money


def _default_products() -> list[Product]:
    return [
        Product(id="A1", name="Sparkling Water", price=Money(120), stock=5),
        Product(id="A2", name="Cola", price=Money(150), stock=5),
        Product(id="A3", name="Orange Juice", price=Money(180), stock=3),
        Product(id="B1", name="Energy Drink", price=Money(250), stock=2),
        Product(id="B2", name="Iced Tea", price=Money(130), stock=4),
    ]


def _default_coins() -> dict[Denomination, int]:
    return {
        Denomination.TWO_DOLLARS: 5,
        Denomination.ONE_DOLLAR: 10,
        Denomination.FIFTY_CENTS: 10,
        Denomination.TWENTY_CENTS: 20,
        Denomination.TEN_CENTS: 50,
    }


@dataclass(frozen=True)
class MachineConfig:

    product_list: list[Product] = field(default_factory=list)
    coin_inventory: dict[Denomination, int] = field(default_factory=dict)

    @staticmethod
    def default() -> MachineConfig:
        """The stock machine: five drinks and a healthy float of coins."""
        return MachineConfig(product_list=_default_products(), coin_inventory=_default_coins())
