import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from finsight.utils.constants import AlertLevel

# Rows are checked in ascending order and the first bound the percentage is
# below wins, so every tier covers a right-open interval. Anything below zero
# (over-refunded category) lands in the first row and reads as safe.
ALERT_THRESHOLDS: tuple[tuple[float, AlertLevel], ...] = (
    (50.0, AlertLevel.SAFE),
    (75.0, AlertLevel.WARNING),
    (100.0, AlertLevel.DANGER),
)
ABOVE_THRESHOLDS = AlertLevel.CRITICAL

ALERT_COLORS = {
    AlertLevel.SAFE: "green",
    AlertLevel.WARNING: "yellow",
    AlertLevel.DANGER: "orange",
    AlertLevel.CRITICAL: "red",
}
DEFAULT_ALERT_COLOR = "gray"


def get_alert_level(percentage: float) -> AlertLevel:
    percentage = float(percentage)
    if math.isnan(percentage):
        raise ValueError("Budget percentage is NaN")
    for upper_bound, level in ALERT_THRESHOLDS:
        if percentage < upper_bound:
            return level
    return ABOVE_THRESHOLDS


def get_alert_color(level) -> str:
    """Colour token for a level; unknown levels get the neutral token."""
    try:
        return ALERT_COLORS[AlertLevel(level)]
    except ValueError:
        return DEFAULT_ALERT_COLOR


@dataclass(frozen=True)
class BudgetStatus:
    """
    Consumption of one budget.

    Attributes:
        allocated: Amount budgeted for the category
        spent: Amount spent in the category
        remaining: allocated - spent, negative when overspent
        raw_percentage: spent / allocated * 100, unclamped
        percentage: raw_percentage rounded to two places
        progress: percentage clamped to [0, 100] for progress bars
        alert_level: tier derived from raw_percentage
        alert_color: colour token for alert_level
    """

    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    raw_percentage: float
    percentage: float
    progress: float
    alert_level: AlertLevel
    alert_color: str


def calculate_budget_status(allocated: Decimal, spent: Decimal) -> BudgetStatus:
    if allocated == 0:
        raw_percentage = 0.0
    else:
        raw_percentage = float(spent / allocated * 100)
    level = get_alert_level(raw_percentage)
    return BudgetStatus(
        allocated=allocated,
        spent=spent,
        remaining=allocated - spent,
        raw_percentage=raw_percentage,
        percentage=round(raw_percentage, 2),
        progress=min(max(raw_percentage, 0.0), 100.0),
        alert_level=level,
        alert_color=get_alert_color(level),
    )


def budgets_needing_attention(statuses: Iterable, key=lambda s: s) -> List:
    """
    Items whose budget reached the danger tier or worse, most consumed first.

    ``key`` maps an item to its BudgetStatus so callers can pass richer rows.
    """
    flagged = [
        item
        for item in statuses
        if key(item).alert_level in (AlertLevel.DANGER, AlertLevel.CRITICAL)
    ]
    return sorted(flagged, key=lambda item: key(item).raw_percentage, reverse=True)
