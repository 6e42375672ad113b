"""CoinInventory aggregate: the machine's reserve of coins for change.

The change algorithm is a greedy descent from the largest denomination
to the smallest.  It is not an optimal change-maker: with 50x1 and 20x3
in stock it cannot pay out 60 even though 20+20+20 exists, because it
commits to the 50 first.  Callers depend on that exact behavior.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from vending.domain.exceptions import PreconditionViolation, ValidationError
from vending.domain.model.value_objects import Denomination


@dataclass(frozen=True)
class ChangeResult:
    """Outcome of a change computation.

    ``change`` is only meaningful when ``success`` is True;
    ``shortfall`` is the unresolved remainder when it is False.
    """

    success: bool
    change: dict[Denomination, int] = field(default_factory=dict)
    shortfall: int = 0

    @property
    def coins(self) -> list[Denomination]:
        """Dispensed coins, largest to smallest."""
        result: list[Denomination] = []
        for denom in Denomination:
            result.extend([denom] * self.change.get(denom, 0))
        return result


class CoinInventory:
    """Count of coins per denomination.

    Invariant: every count is >= 0 after every operation.
    """

    def __init__(self, counts: Mapping[int, int] | None = None) -> None:
        self._counts: dict[Denomination, int] = {d: 0 for d in Denomination}
        for raw, count in (counts or {}).items():
            self.set_count(Denomination.parse(raw), count)

    # --- Queries --------------------------------------------------------------

    def count(self, denomination: Denomination) -> int:
        return self._counts[denomination]

    def counts(self) -> dict[Denomination, int]:
        """Copy of the counts, largest denomination first."""
        return dict(self._counts)

    @property
    def total_value(self) -> int:
        return sum(d.value * n for d, n in self._counts.items())

    @property
    def coin_count(self) -> int:
        return sum(self._counts.values())

    def copy(self) -> CoinInventory:
        clone = CoinInventory()
        clone._counts = dict(self._counts)
        return clone

    # --- Mutations ------------------------------------------------------------

    def deposit(self, coin: Denomination) -> None:
        if not isinstance(coin, Denomination):
            raise ValidationError(f"Invalid denomination {coin!r}")
        self._counts[coin] += 1

    def deposit_batch(self, coins: Iterable[Denomination]) -> None:
        for coin in coins:
            self.deposit(coin)

    def withdraw_batch(self, coins: Iterable[Denomination]) -> None:
        """Remove specific coins.

        Validates the whole batch before mutating so a shortage leaves
        the inventory untouched.
        """
        wanted: dict[Denomination, int] = {}
        for coin in coins:
            wanted[coin] = wanted.get(coin, 0) + 1
        for denom, n in wanted.items():
            if n > self._counts[denom]:
                raise ValidationError(
                    f"Cannot withdraw {n} x {denom.value} "
                    f"(only {self._counts[denom]} held)"
                )
        for denom, n in wanted.items():
            self._counts[denom] -= n

    def set_count(self, denomination: Denomination, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError(
                f"Coin count must be an integer, got {type(count).__name__}"
            )
        if count < 0:
            raise ValidationError(
                f"Coin count for {denomination.value} cannot be negative, got {count}"
            )
        self._counts[denomination] = count

    # --- Change algorithm -----------------------------------------------------

    def compute_change(self, amount: int) -> ChangeResult:
        """Greedy change for ``amount`` minor units.

        Pure: works on a private copy of the counts and never mutates
        the inventory.
        """
        if amount < 0:
            raise PreconditionViolation(f"Change amount cannot be negative, got {amount}")

        working = dict(self._counts)
        remaining = amount
        change: dict[Denomination, int] = {}

        for denom in Denomination:
            take = min(working[denom], remaining // denom.value)
            if take:
                working[denom] -= take
                remaining -= take * denom.value
                change[denom] = take

        if remaining == 0:
            return ChangeResult(success=True, change=change)
        return ChangeResult(success=False, shortfall=remaining)

    def apply_change(self, result: ChangeResult) -> None:
        """Subtract a successful change result from the live counts."""
        if not result.success:
            raise PreconditionViolation("Cannot apply a failed change computation")
        for denom, n in result.change.items():
            if n > self._counts[denom]:
                raise PreconditionViolation(
                    f"Change needs {n} x {denom.value} but only "
                    f"{self._counts[denom]} held"
                )
        for denom, n in result.change.items():
            self._counts[denom] -= n

    # --- Snapshot / rollback --------------------------------------------------

    def snapshot(self) -> dict[Denomination, int]:
        return dict(self._counts)

    def restore(self, snapshot: Mapping[Denomination, int]) -> None:
        self._counts = {d: snapshot.get(d, 0) for d in Denomination}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoinInventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        inner = ", ".join(f"{d.value}: {n}" for d, n in self._counts.items())
        return f"CoinInventory({{{inner}}})"
