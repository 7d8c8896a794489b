"""
Month summary aggregation.

Reduces a month's income and expense records into totals, a per-category
breakdown and a recurring-expense view normalised to monthly equivalents.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from finsight.utils.constants import RecurringFrequency
from finsight.utils.exceptions import InvalidAmountError, UnknownFrequencyError
from finsight.utils.money import ZERO, percentage_of, sum_money

logger = logging.getLogger(__name__)

# (multiplier, divisor) turning one occurrence into an average month
MONTHLY_EQUIVALENT_FACTORS: Dict[RecurringFrequency, tuple[int, int]] = {
    RecurringFrequency.MONTHLY: (1, 1),
    RecurringFrequency.WEEKLY: (52, 12),
    RecurringFrequency.YEARLY: (1, 12),
}


@dataclass(frozen=True)
class IncomeRecord:
    amount: Decimal
    source: Optional[str] = None


@dataclass(frozen=True)
class ExpenseRecord:
    amount: Decimal
    category_id: int
    category_name: str = ""
    is_recurring: bool = False
    frequency: Optional[str] = None


@dataclass(frozen=True)
class CategoryTotal:
    category_id: int
    category_name: str
    total: Decimal
    percentage: float


@dataclass(frozen=True)
class MonthSummary:
    month: str
    total_income: Decimal
    total_expenses: Decimal
    net_savings: Decimal
    savings_rate: float
    expenses_by_category: List[CategoryTotal]
    recurring_expenses_total: Decimal
    variable_expenses_total: Decimal
    monthly_recurring_expenses: Decimal
    total_expenses_with_recurring: Decimal
    net_savings_with_recurring: Decimal
    savings_rate_with_recurring: float
    income_count: int
    expense_count: int


def to_frequency(value) -> RecurringFrequency:
    if isinstance(value, RecurringFrequency):
        return value
    try:
        return RecurringFrequency(value)
    except ValueError:
        raise UnknownFrequencyError(
            "Unrecognised recurring frequency", details={"frequency": value}
        ) from None


def monthly_equivalent(amount: Decimal, frequency) -> Decimal:
    """
    Average amount a recurring charge costs per month.

    WEEKLY uses 52 weeks over 12 months rather than a flat four weeks, and
    YEARLY is spread evenly over twelve months.
    """
    multiplier, divisor = MONTHLY_EQUIVALENT_FACTORS[to_frequency(frequency)]
    if multiplier == divisor:
        return amount
    return amount * multiplier / divisor


def savings_rate(income: Decimal, net: Decimal) -> float:
    # zero income has no meaningful rate, report 0 rather than failing
    if income <= 0:
        return 0.0
    return float(net / income * 100)


def _check_amounts(records: Iterable, kind: str):
    for index, record in enumerate(records):
        if record.amount < 0:
            raise InvalidAmountError(
                f"Negative {kind} amount",
                details={"index": index, "amount": record.amount},
            )


def _category_breakdown(
    expenses: Sequence[ExpenseRecord],
    total_expenses: Decimal,
    categories: Optional[Mapping[int, str]],
) -> List[CategoryTotal]:
    # dict keeps first-appearance order, so output is stable for a given input
    grouped: Dict[int, Decimal] = {}
    names: Dict[int, str] = {}
    for expense in expenses:
        grouped[expense.category_id] = grouped.get(expense.category_id, ZERO) + expense.amount
        if expense.category_id not in names:
            if categories is not None and expense.category_id in categories:
                names[expense.category_id] = categories[expense.category_id]
            else:
                names[expense.category_id] = expense.category_name

    return [
        CategoryTotal(
            category_id=category_id,
            category_name=names[category_id],
            total=total,
            percentage=percentage_of(total, total_expenses),
        )
        for category_id, total in grouped.items()
    ]


def calculate_month_summary(
    month: str,
    incomes: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    categories: Optional[Mapping[int, str]] = None,
) -> MonthSummary:
    """
    Build the summary for one month.

    Args:
        month: Month label in YYYY-MM form, echoed into the result
        incomes: Income records belonging to the month
        expenses: Expense records belonging to the month
        categories: Optional category id to name lookup, preferred over the
            names carried on the expense records

    Returns:
        MonthSummary with every figure computed, never a partial result

    Raises:
        InvalidAmountError: if any amount is negative
        UnknownFrequencyError: if a recurring expense has no recognised frequency
    """
    _check_amounts(incomes, "income")
    _check_amounts(expenses, "expense")

    recurring = [e for e in expenses if e.is_recurring]
    variable = [e for e in expenses if not e.is_recurring]

    # resolve frequencies before any total is produced
    monthly_amounts = [monthly_equivalent(e.amount, e.frequency) for e in recurring]

    total_income = sum_money(i.amount for i in incomes)
    total_expenses = sum_money(e.amount for e in expenses)
    net_savings = total_income - total_expenses

    recurring_total = sum_money(e.amount for e in recurring)
    variable_total = sum_money(e.amount for e in variable)
    monthly_recurring = sum_money(monthly_amounts)

    total_with_recurring = variable_total + monthly_recurring
    net_with_recurring = total_income - total_with_recurring

    summary = MonthSummary(
        month=month,
        total_income=total_income,
        total_expenses=total_expenses,
        net_savings=net_savings,
        savings_rate=savings_rate(total_income, net_savings),
        expenses_by_category=_category_breakdown(expenses, total_expenses, categories),
        recurring_expenses_total=recurring_total,
        variable_expenses_total=variable_total,
        monthly_recurring_expenses=monthly_recurring,
        total_expenses_with_recurring=total_with_recurring,
        net_savings_with_recurring=net_with_recurring,
        savings_rate_with_recurring=savings_rate(total_income, net_with_recurring),
        income_count=len(incomes),
        expense_count=len(expenses),
    )
    logger.debug(
        f"Summary for {month}: income={total_income} expenses={total_expenses} "
        f"recurring_monthly={monthly_recurring}"
    )
    return summary
