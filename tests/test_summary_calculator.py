"""
Tests for the month summary aggregation.
"""

from decimal import Decimal

import pytest

from finsight.utils.constants import RecurringFrequency
from finsight.utils.exceptions import InvalidAmountError, UnknownFrequencyError
from finsight.utils.summary_calculator import (
    ExpenseRecord,
    IncomeRecord,
    calculate_month_summary,
    monthly_equivalent,
    savings_rate,
)


def expense(amount, category_id=1, name="Food & Dining", recurring=False, frequency=None):
    return ExpenseRecord(
        amount=Decimal(amount),
        category_id=category_id,
        category_name=name,
        is_recurring=recurring,
        frequency=frequency,
    )


class TestMonthlyEquivalent:
    """Normalising recurring charges to one month."""

    def test_monthly_is_unchanged(self):
        assert monthly_equivalent(Decimal("99.99"), "MONTHLY") == Decimal("99.99")

    def test_weekly_uses_52_weeks(self):
        result = monthly_equivalent(Decimal("100"), RecurringFrequency.WEEKLY)
        assert result == Decimal("100") * 52 / 12
        assert abs(result - Decimal("433.33")) < Decimal("0.01")

    def test_yearly_is_spread_over_twelve_months(self):
        assert monthly_equivalent(Decimal("1200"), "YEARLY") == Decimal("100")

    def test_unknown_frequency_raises(self):
        with pytest.raises(UnknownFrequencyError):
            monthly_equivalent(Decimal("10"), "DAILY")


class TestSavingsRate:
    def test_regular_rate(self):
        assert savings_rate(Decimal("5000"), Decimal("1000")) == pytest.approx(20.0)

    def test_zero_income_is_zero(self):
        assert savings_rate(Decimal("0"), Decimal("-250")) == 0.0

    def test_negative_net_gives_negative_rate(self):
        assert savings_rate(Decimal("100"), Decimal("-50")) == pytest.approx(-50.0)


class TestCalculateMonthSummary:
    """End-to-end aggregation of income and expense records."""

    def test_empty_month(self):
        summary = calculate_month_summary("2024-06", [], [])

        assert summary.month == "2024-06"
        assert summary.total_income == Decimal("0")
        assert summary.total_expenses == Decimal("0")
        assert summary.net_savings == Decimal("0")
        assert summary.savings_rate == 0.0
        assert summary.savings_rate_with_recurring == 0.0
        assert summary.expenses_by_category == []
        assert summary.income_count == 0
        assert summary.expense_count == 0

    def test_totals_and_rates(self):
        incomes = [IncomeRecord(Decimal("4000"), "Salary"), IncomeRecord(Decimal("1000"), "Freelance")]
        expenses = [expense("600"), expense("400", category_id=2, name="Transport")]

        summary = calculate_month_summary("2024-06", incomes, expenses)

        assert summary.total_income == Decimal("5000")
        assert summary.total_expenses == Decimal("1000")
        assert summary.net_savings == Decimal("4000")
        assert summary.savings_rate == pytest.approx(80.0)
        assert summary.income_count == 2
        assert summary.expense_count == 2

    def test_expenses_without_income(self):
        summary = calculate_month_summary("2024-06", [], [expense("250")])

        assert summary.net_savings == Decimal("-250")
        assert summary.savings_rate == 0.0

    def test_category_breakdown_keeps_first_appearance_order(self):
        expenses = [
            expense("50", category_id=2, name="Transport"),
            expense("100", category_id=1),
            expense("50", category_id=2, name="Transport"),
        ]

        breakdown = calculate_month_summary("2024-06", [], expenses).expenses_by_category

        assert [c.category_id for c in breakdown] == [2, 1]
        assert breakdown[0].total == Decimal("100")
        assert breakdown[0].percentage == pytest.approx(50.0)
        assert breakdown[1].category_name == "Food & Dining"

    def test_category_percentages_add_up_to_100(self):
        expenses = [expense("10", category_id=i) for i in (1, 2, 3)]

        breakdown = calculate_month_summary("2024-06", [], expenses).expenses_by_category

        assert sum(c.percentage for c in breakdown) == pytest.approx(100.0)

    def test_catalog_names_win_over_record_names(self):
        summary = calculate_month_summary(
            "2024-06", [], [expense("10", name="stale")], categories={1: "Food & Dining"}
        )

        assert summary.expenses_by_category[0].category_name == "Food & Dining"

    def test_recurring_view(self):
        incomes = [IncomeRecord(Decimal("5000"))]
        expenses = [
            expense("200"),
            expense("100", recurring=True, frequency="WEEKLY"),
            expense("1200", category_id=3, recurring=True, frequency="YEARLY"),
            expense("50", category_id=8, recurring=True, frequency="MONTHLY"),
        ]

        summary = calculate_month_summary("2024-06", incomes, expenses)

        assert summary.total_expenses == Decimal("1550")
        assert summary.recurring_expenses_total == Decimal("1350")
        assert summary.variable_expenses_total == Decimal("200")
        expected_monthly = Decimal("100") * 52 / 12 + Decimal("100") + Decimal("50")
        assert summary.monthly_recurring_expenses == expected_monthly
        assert summary.total_expenses_with_recurring == Decimal("200") + expected_monthly
        assert summary.net_savings_with_recurring == Decimal("5000") - (Decimal("200") + expected_monthly)
        assert summary.savings_rate_with_recurring == pytest.approx(
            float((Decimal("4800") - expected_monthly) / Decimal("5000") * 100)
        )

    def test_same_input_gives_same_summary(self):
        incomes = [IncomeRecord(Decimal("3000"))]
        expenses = [expense("20", category_id=4), expense("30", recurring=True, frequency="WEEKLY")]

        assert calculate_month_summary("2024-06", incomes, expenses) == calculate_month_summary(
            "2024-06", incomes, expenses
        )

    def test_negative_income_raises(self):
        with pytest.raises(InvalidAmountError):
            calculate_month_summary("2024-06", [IncomeRecord(Decimal("-1"))], [])

    def test_negative_expense_raises(self):
        with pytest.raises(InvalidAmountError):
            calculate_month_summary("2024-06", [], [expense("-5")])

    def test_recurring_expense_without_frequency_raises(self):
        with pytest.raises(UnknownFrequencyError):
            calculate_month_summary("2024-06", [], [expense("5", recurring=True)])

    def test_frequency_is_ignored_for_variable_expenses(self):
        summary = calculate_month_summary("2024-06", [], [expense("5", frequency="DAILY")])

        assert summary.variable_expenses_total == Decimal("5")
