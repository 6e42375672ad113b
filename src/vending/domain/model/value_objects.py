"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum

from vending.domain.exceptions import ValidationError


def _whole_number(value: int | str) -> int:
    """Integers and integer strings only; bools and floats are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return int(value)


class Denomination(IntEnum):
    """Coin face values in minor units.

    Declaration order is largest to smallest; the change algorithm
    relies on iterating the enum in that order.
    """

    TWO_DOLLARS = 200
    ONE_DOLLAR = 100
    FIFTY_CENTS = 50
    TWENTY_CENTS = 20
    TEN_CENTS = 10

    @staticmethod
    def parse(value: int | str) -> Denomination:
        """Coerce raw caller input to a Denomination."""
        try:
            return Denomination(_whole_number(value))
        except (TypeError, ValueError) as exc:
            accepted = ", ".join(str(d.value) for d in Denomination)
            raise ValidationError(
                f"Invalid denomination {value!r} (accepted: {accepted})"
            ) from exc


@dataclass(frozen=True)
class Money:
    """Monetary amount in integer minor units (cents).

    Integers keep coin arithmetic exact; there is no currency field
    because the machine only ever handles one.
    """

    cents: int

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValidationError(
                f"Money amount must be an integer, got {type(self.cents).__name__}"
            )
        if self.cents < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.cents}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.cents + other.cents)

    def __sub__(self, other: Money) -> Money:
        result = self.cents - other.cents
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result)

    def __lt__(self, other: Money) -> bool:
        return self.cents < other.cents

    def __le__(self, other: Money) -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: Money) -> bool:
        return self.cents > other.cents

    def __ge__(self, other: Money) -> bool:
        return self.cents >= other.cents

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.cents // 100}.{self.cents % 100:02d}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: int | str) -> Money:
        """Convenient factory that coerces raw input to minor units."""
        try:
            return Money(_whole_number(amount))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def sum_of(coins: Iterable[int]) -> Money:
        return Money(sum(int(c) for c in coins))
