from sqlalchemy.orm import Session

from finsight.repositories import category_crud, expense_crud, income_crud
from finsight.utils.money import to_money
from finsight.utils.summary_calculator import MonthSummary, calculate_month_summary


def get_month_summary(db: Session, user_id: int, month: str) -> MonthSummary:
    incomes = income_crud.get_income_records(db, user_id, month)
    expenses = expense_crud.get_expense_records(db, user_id, month)
    return calculate_month_summary(
        month, incomes, expenses, categories=category_crud.get_category_names(db)
    )


def format_summary(summary: MonthSummary) -> dict:
    return {
        "month": summary.month,
        "total_income": to_money(summary.total_income),
        "total_expenses": to_money(summary.total_expenses),
        "net_savings": to_money(summary.net_savings),
        "savings_rate": round(summary.savings_rate, 2),
        "expenses_by_category": [
            {
                "category_id": c.category_id,
                "category_name": c.category_name,
                "total": to_money(c.total),
                "percentage": c.percentage,
            }
            for c in summary.expenses_by_category
        ],
        "recurring_expenses_total": to_money(summary.recurring_expenses_total),
        "variable_expenses_total": to_money(summary.variable_expenses_total),
        "monthly_recurring_expenses": to_money(summary.monthly_recurring_expenses),
        "total_expenses_with_recurring": to_money(summary.total_expenses_with_recurring),
        "net_savings_with_recurring": to_money(summary.net_savings_with_recurring),
        "savings_rate_with_recurring": round(summary.savings_rate_with_recurring, 2),
        "income_count": summary.income_count,
        "expense_count": summary.expense_count,
    }
