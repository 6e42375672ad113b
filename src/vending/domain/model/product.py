"""Product entity.

Products are owned by the Catalog.  Stock only changes through a
committed purchase or an explicit restock/reset.
"""

from __future__ import annotations

from dataclasses import dataclass

from vending.domain.exceptions import OutOfStockError, ValidationError
from vending.domain.model.value_objects import Money


@dataclass
class Product:
    """A product slot in the machine.

    Invariant: ``stock`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Product id is required")
        if self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock}"
            )

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def take_one(self) -> None:
        """Remove exactly one unit (a dispensed purchase)."""
        if self.stock <= 0:
            raise OutOfStockError(f"{self.name} is out of stock")
        self.stock -= 1

    def restock(self, stock: int) -> None:
        if stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {stock}"
            )
        self.stock = stock

    def copy(self) -> Product:
        return Product(id=self.id, name=self.name, price=self.price, stock=self.stock)
