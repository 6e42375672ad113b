"""Unit tests for the CoinInventory aggregate and its greedy change algorithm."""

import pytest

from vending.domain.exceptions import PreconditionViolation, ValidationError
from vending.domain.model.coin_inventory import ChangeResult, CoinInventory
from vending.domain.model.value_objects import Denomination
from tests.factories import D10, D20, D50, D100, D200, inventory


class TestCoinInventoryBasics:

    def test_every_denomination_starts_at_zero(self):
        inv = CoinInventory()
        assert all(n == 0 for n in inv.counts().values())
        assert list(inv.counts()) == list(Denomination)

    def test_construct_from_raw_keys(self):
        inv = CoinInventory({"50": 2, 10: 3})
        assert inv.count(D50) == 2
        assert inv.count(D10) == 3
        assert inv.total_value == 130
        assert inv.coin_count == 5

    def test_unknown_denomination_rejected(self):
        with pytest.raises(ValidationError, match="Invalid denomination"):
            CoinInventory({25: 1})

    def test_negative_count_rejected(self):
        inv = CoinInventory()
        with pytest.raises(ValidationError, match="cannot be negative"):
            inv.set_count(D50, -1)

    def test_deposit_increments(self):
        inv = CoinInventory()
        inv.deposit(D20)
        inv.deposit(D20)
        assert inv.count(D20) == 2

    def test_deposit_raw_int_rejected(self):
        inv = CoinInventory()
        with pytest.raises(ValidationError):
            inv.deposit(25)

    def test_deposit_batch(self):
        inv = CoinInventory()
        inv.deposit_batch([D100, D50, D50])
        assert inv.count(D100) == 1
        assert inv.count(D50) == 2


class TestWithdrawBatch:

    def test_withdraw_removes_coins(self):
        inv = inventory(d50=2, d10=1)
        inv.withdraw_batch([D50, D10])
        assert inv.count(D50) == 1
        assert inv.count(D10) == 0

    def test_shortage_leaves_inventory_untouched(self):
        inv = inventory(d50=2, d10=1)
        with pytest.raises(ValidationError, match="Cannot withdraw"):
            inv.withdraw_batch([D50, D10, D10])
        assert inv == inventory(d50=2, d10=1)


class TestComputeChange:

    def test_zero_amount_succeeds_with_no_coins(self):
        result = inventory(d50=1).compute_change(0)
        assert result.success
        assert result.coins == []

    def test_largest_coins_first(self):
        result = inventory(d200=1, d100=2, d50=4, d20=5, d10=5).compute_change(380)
        assert result.success
        assert result.coins == [D200, D100, D50, D20, D10]

    def test_respects_available_counts(self):
        result = inventory(d100=1, d50=0, d20=5).compute_change(160)
        assert result.success
        assert result.change == {D100: 1, D20: 3}

    def test_failure_reports_shortfall(self):
        result = inventory(d20=1).compute_change(30)
        assert not result.success
        assert result.shortfall == 10
        assert result.change == {}

    def test_greedy_misses_reachable_amount(self):
        # 20+20+20 would pay 60, but greedy spends the 50 first.
        result = inventory(d50=1, d20=3).compute_change(60)
        assert not result.success
        assert result.shortfall == 10

    def test_pure_and_deterministic(self):
        inv = inventory(d100=2, d50=1, d20=2, d10=1)
        before = inv.snapshot()
        first = inv.compute_change(190)
        second = inv.compute_change(190)
        assert first == second
        assert inv.snapshot() == before

    def test_negative_amount_is_a_defect(self):
        with pytest.raises(PreconditionViolation):
            inventory(d10=1).compute_change(-10)


class TestApplyChange:

    def test_apply_subtracts_dispensed_coins(self):
        inv = inventory(d100=1, d50=2, d10=3)
        result = inv.compute_change(70)
        inv.apply_change(result)
        assert inv == inventory(d100=1, d50=1, d10=1)

    def test_apply_failed_result_is_a_defect(self):
        inv = inventory(d10=1)
        with pytest.raises(PreconditionViolation, match="failed change"):
            inv.apply_change(ChangeResult(success=False, shortfall=10))
        assert inv.count(D10) == 1

    def test_apply_more_than_held_is_a_defect(self):
        inv = inventory(d10=1)
        with pytest.raises(PreconditionViolation):
            inv.apply_change(ChangeResult(success=True, change={D10: 2}))
        assert inv.count(D10) == 1


class TestSnapshotRestore:

    def test_restore_rolls_back(self):
        inv = inventory(d200=1, d50=3)
        snapshot = inv.snapshot()
        inv.deposit(D20)
        inv.apply_change(inv.compute_change(100))
        inv.restore(snapshot)
        assert inv == inventory(d200=1, d50=3)

    def test_copy_is_independent(self):
        inv = inventory(d50=1)
        clone = inv.copy()
        clone.deposit(D50)
        assert inv.count(D50) == 1
        assert clone.count(D50) == 2
