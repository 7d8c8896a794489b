"""
Tests for savings progress and contribution distribution.
"""

from decimal import Decimal

import pytest

from finsight.utils.exceptions import InvalidAmountError, InvalidDistributionError
from finsight.utils.savings_calculator import (
    DistributionShare,
    calculate_progress,
    distribute_contribution,
    progress_ratio,
)


def shares(*weights):
    return [DistributionShare(bucket_id=i + 1, weight=Decimal(str(w))) for i, w in enumerate(weights)]


def amounts(result):
    return [a.amount for a in result.allocations]


class TestProgress:
    def test_partial(self):
        assert calculate_progress(Decimal("250"), Decimal("1000")) == 25.0

    def test_over_target_is_clamped(self):
        assert calculate_progress(Decimal("1500"), Decimal("1000")) == 100.0
        assert progress_ratio(Decimal("1500"), Decimal("1000")) == Decimal("150")

    def test_negative_balance_is_clamped(self):
        assert calculate_progress(Decimal("-5"), Decimal("100")) == 0.0

    @pytest.mark.parametrize("target", [None, Decimal("0"), Decimal("-10")])
    def test_no_target(self, target):
        assert calculate_progress(Decimal("500"), target) == 0.0
        assert progress_ratio(Decimal("500"), target) is None


class TestDistributeContribution:
    """Largest-remainder split in currency units."""

    def test_exact_split(self):
        result = distribute_contribution(Decimal("1000"), shares(33, 33, 34))

        assert amounts(result) == [Decimal("330.00"), Decimal("330.00"), Decimal("340.00")]
        assert result.distributed == Decimal("1000.00")
        assert result.undistributed == Decimal("0")

    def test_leftover_goes_to_largest_remainder(self):
        result = distribute_contribution(Decimal("0.10"), shares(33, 33, 34))

        assert amounts(result) == [Decimal("0.03"), Decimal("0.03"), Decimal("0.04")]

    def test_tie_goes_to_first_listed(self):
        result = distribute_contribution(Decimal("0.05"), shares(50, 50))

        assert amounts(result) == [Decimal("0.03"), Decimal("0.02")]

    def test_several_ties_follow_input_order(self):
        result = distribute_contribution(Decimal("0.02"), shares(25, 25, 25, 25))

        assert amounts(result) == [Decimal("0.01"), Decimal("0.01"), Decimal("0.00"), Decimal("0.00")]

    def test_weights_below_100_leave_a_rest(self):
        result = distribute_contribution(Decimal("100"), shares(50, 20))

        assert amounts(result) == [Decimal("50.00"), Decimal("20.00")]
        assert result.distributed == Decimal("70.00")
        assert result.undistributed == Decimal("30.00")

    def test_no_buckets(self):
        result = distribute_contribution(Decimal("25"), [])

        assert result.allocations == []
        assert result.undistributed == Decimal("25")

    def test_zero_total(self):
        result = distribute_contribution(Decimal("0"), shares(60, 40))

        assert amounts(result) == [Decimal("0.00"), Decimal("0.00")]

    @pytest.mark.parametrize(
        "total,weights",
        [
            ("1000", (33.33, 33.33, 33.34)),
            ("99.99", (10, 20, 30, 40)),
            ("0.07", (33, 33, 34)),
            ("12345.67", (12.5, 37.5, 49.99)),
            ("1", (1, 1, 1)),
        ],
    )
    def test_allocations_add_up_to_distributed(self, total, weights):
        result = distribute_contribution(Decimal(total), shares(*weights))

        assert sum(amounts(result), Decimal("0")) == result.distributed
        assert result.distributed + result.undistributed == Decimal(total)
        for allocation, weight in zip(result.allocations, weights):
            raw = Decimal(total) * Decimal(str(weight)) / 100
            assert abs(allocation.amount - raw) < Decimal("0.01")

    def test_custom_unit(self):
        result = distribute_contribution(Decimal("10"), shares(50, 50), unit=Decimal("1"))

        assert amounts(result) == [Decimal("5"), Decimal("5")]

    def test_weights_over_100_raise(self):
        with pytest.raises(InvalidDistributionError):
            distribute_contribution(Decimal("100"), shares(60, 50))

    def test_weight_out_of_range_raises(self):
        with pytest.raises(InvalidDistributionError):
            distribute_contribution(Decimal("100"), shares(101))

    def test_duplicate_bucket_raises(self):
        duplicated = [DistributionShare(1, Decimal("10")), DistributionShare(1, Decimal("20"))]
        with pytest.raises(InvalidDistributionError):
            distribute_contribution(Decimal("100"), duplicated)

    def test_negative_total_raises(self):
        with pytest.raises(InvalidAmountError):
            distribute_contribution(Decimal("-1"), shares(100))

    def test_sub_unit_total_raises(self):
        with pytest.raises(InvalidAmountError):
            distribute_contribution(Decimal("10.005"), shares(100))
