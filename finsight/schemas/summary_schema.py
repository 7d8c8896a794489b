from typing import List

from finsight.schemas.general_schema import CamelModel, MoneyStr


class CategoryBreakdown(CamelModel):
    category_id: int
    category_name: str
    total: MoneyStr
    percentage: float


class MonthSummary(CamelModel):
    month: str
    total_income: MoneyStr
    total_expenses: MoneyStr
    net_savings: MoneyStr
    savings_rate: float
    expenses_by_category: List[CategoryBreakdown]
    recurring_expenses_total: MoneyStr
    variable_expenses_total: MoneyStr
    monthly_recurring_expenses: MoneyStr
    total_expenses_with_recurring: MoneyStr
    net_savings_with_recurring: MoneyStr
    savings_rate_with_recurring: float
    income_count: int
    expense_count: int
