"""
Savings goal progress and contribution apportioning.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Hashable, List, Optional, Sequence

from finsight.utils.exceptions import InvalidAmountError, InvalidDistributionError
from finsight.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
DEFAULT_UNIT = Decimal("0.01")


def progress_ratio(current_balance: Decimal, target_amount: Optional[Decimal]) -> Optional[Decimal]:
    """Unclamped balance / target * 100, or None when the goal has no target."""
    if target_amount is None or target_amount <= 0:
        return None
    return current_balance / target_amount * HUNDRED


def calculate_progress(current_balance: Decimal, target_amount: Optional[Decimal]) -> float:
    # a goal without a target is open-ended, not complete
    ratio = progress_ratio(current_balance, target_amount)
    if ratio is None:
        return 0.0
    return float(min(max(ratio, ZERO), HUNDRED))


@dataclass(frozen=True)
class DistributionShare:
    bucket_id: Hashable
    weight: Decimal


@dataclass(frozen=True)
class Allocation:
    bucket_id: Any
    amount: Decimal


@dataclass(frozen=True)
class DistributionResult:
    allocations: List[Allocation]
    distributed: Decimal
    undistributed: Decimal


def _validate_shares(shares: Sequence[DistributionShare]) -> Decimal:
    seen = set()
    weight_total = ZERO
    for share in shares:
        if share.bucket_id in seen:
            raise InvalidDistributionError(
                "Bucket listed more than once", details={"bucket_id": share.bucket_id}
            )
        seen.add(share.bucket_id)
        weight = to_decimal(share.weight)
        if weight < 0 or weight > HUNDRED:
            raise InvalidDistributionError(
                "Weight must be between 0 and 100",
                details={"bucket_id": share.bucket_id, "weight": weight},
            )
        weight_total += weight
    if weight_total > HUNDRED:
        raise InvalidDistributionError(
            "Weights add up to more than 100%", details={"total_weight": weight_total}
        )
    return weight_total


def distribute_contribution(
    total: Decimal,
    shares: Sequence[DistributionShare],
    unit: Decimal = DEFAULT_UNIT,
) -> DistributionResult:
    """
    Split a contribution across buckets by weight without losing a unit.

    Every raw share (total * weight / 100) is floored to ``unit`` and the
    units still missing from the distributed portion go one at a time to the
    shares with the largest fractional remainders. Equal remainders are
    resolved in the order the shares were given.

    When the weights add up to less than 100 the rest of the contribution is
    reported as ``undistributed``; it is up to the caller to keep it or send
    it elsewhere.

    Args:
        total: Contribution to split, a whole number of ``unit``
        shares: Buckets taking part and their weights in percent
        unit: Smallest amount handed out

    Returns:
        DistributionResult whose allocation amounts add up to ``distributed``

    Raises:
        InvalidAmountError: if total is negative or not a multiple of unit
        InvalidDistributionError: if a weight is out of range, a bucket
            repeats or the weights exceed 100
    """
    total = to_decimal(total)
    unit = to_decimal(unit)
    if unit <= 0:
        raise InvalidAmountError("Distribution unit must be positive", details={"unit": unit})
    if total < 0:
        raise InvalidAmountError("Contribution cannot be negative", details={"total": total})
    if total % unit != 0:
        raise InvalidAmountError(
            "Contribution is not a whole number of units",
            details={"total": total, "unit": unit},
        )

    weight_total = _validate_shares(shares)

    total_units = total / unit
    # everything is counted in whole units from here on
    target_units = (total_units * weight_total / HUNDRED).to_integral_value(rounding=ROUND_FLOOR)

    floors: List[Decimal] = []
    remainders: List[Decimal] = []
    for share in shares:
        raw_units = total_units * to_decimal(share.weight) / HUNDRED
        floor_units = raw_units.to_integral_value(rounding=ROUND_FLOOR)
        floors.append(floor_units)
        remainders.append(raw_units - floor_units)

    leftover = int(target_units - sum(floors, ZERO))
    # sorted() is stable, so equal remainders keep the input order
    order = sorted(range(len(shares)), key=lambda i: remainders[i], reverse=True)
    for index in order[:leftover]:
        floors[index] += 1

    allocations = [
        Allocation(bucket_id=share.bucket_id, amount=(units * unit).quantize(unit))
        for share, units in zip(shares, floors)
    ]
    distributed = (target_units * unit).quantize(unit)
    result = DistributionResult(
        allocations=allocations,
        distributed=distributed,
        undistributed=total - distributed,
    )
    logger.debug(
        f"Distributed {distributed} of {total} across {len(allocations)} buckets "
        f"({weight_total}% weighted)"
    )
    return result
