from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from finsight.models.model import Expense
from finsight.repositories.category_crud import format_category, get_category_or_404
from finsight.schemas.expense_schema import ExpenseCreate, ExpenseUpdate
from finsight.utils.constants import RecurringFrequency
from finsight.utils.money import ZERO
from finsight.utils.months import month_range, wall_clock
from finsight.utils.summary_calculator import ExpenseRecord


def _value(enum_or_none):
    return enum_or_none.value if enum_or_none is not None else None


def format_expense(expense: Expense) -> dict:
    return {
        "id": expense.expense_id,
        "date": expense.date,
        "merchant": expense.merchant,
        "category_id": expense.category_id,
        "category": format_category(expense.category),
        "amount": expense.amount,
        "payment_method": expense.payment_method,
        "note": expense.note,
        "is_recurring": expense.is_recurring,
        "frequency": expense.frequency,
        "recurring_expense_id": expense.recurring_expense_id,
        "created_at": expense.created_at,
    }


def get_expenses_for_month(db: Session, user_id: int, month: str) -> List[Expense]:
    first_day, last_day = month_range(month)
    return (
        db.query(Expense)
        .options(joinedload(Expense.category))
        .filter(
            Expense.user_id == user_id,
            Expense.deleted_at.is_(None),
            Expense.date >= first_day,
            Expense.date <= last_day,
        )
        .order_by(Expense.date, Expense.expense_id)
        .all()
    )


def get_expense_records(db: Session, user_id: int, month: str) -> List[ExpenseRecord]:
    return [
        ExpenseRecord(
            amount=expense.amount,
            category_id=expense.category_id,
            category_name=expense.category.name,
            is_recurring=expense.is_recurring,
            frequency=expense.frequency,
        )
        for expense in get_expenses_for_month(db, user_id, month)
    ]


def get_spending_by_category(db: Session, user_id: int, month: str) -> Dict[int, Decimal]:
    spending: Dict[int, Decimal] = {}
    for expense in get_expenses_for_month(db, user_id, month):
        spending[expense.category_id] = spending.get(expense.category_id, ZERO) + expense.amount
    return spending


def get_expense_or_404(db: Session, user_id: int, expense_id: int) -> Expense:
    expense = (
        db.query(Expense)
        .filter(
            Expense.expense_id == expense_id,
            Expense.user_id == user_id,
            Expense.deleted_at.is_(None),
        )
        .first()
    )
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found"
        )
    return expense


def create_expense(db: Session, user_id: int, expense: ExpenseCreate) -> Expense:
    get_category_or_404(db, expense.category_id)

    db_expense = Expense(
        user_id=user_id,
        category_id=expense.category_id,
        date=wall_clock(expense.date),
        merchant=expense.merchant,
        amount=expense.amount,
        payment_method=_value(expense.payment_method),
        note=expense.note,
        is_recurring=expense.is_recurring,
        frequency=_value(expense.frequency),
    )
    db.add(db_expense)
    db.commit()
    db.refresh(db_expense)
    return db_expense


def update_expense(
    db: Session, user_id: int, expense_id: int, expense_update: ExpenseUpdate
) -> Expense:
    db_expense = get_expense_or_404(db, user_id, expense_id)

    if expense_update.category_id is not None:
        get_category_or_404(db, expense_update.category_id)
        db_expense.category_id = expense_update.category_id
    if expense_update.date is not None:
        db_expense.date = wall_clock(expense_update.date)
    if expense_update.merchant is not None:
        db_expense.merchant = expense_update.merchant
    if expense_update.amount is not None:
        db_expense.amount = expense_update.amount
    if expense_update.payment_method is not None:
        db_expense.payment_method = expense_update.payment_method.value
    if expense_update.note is not None:
        db_expense.note = expense_update.note
    if expense_update.is_recurring is not None:
        db_expense.is_recurring = expense_update.is_recurring
    if expense_update.frequency is not None:
        db_expense.frequency = expense_update.frequency.value

    # keep the row consistent with the create-time rules
    if db_expense.is_recurring and db_expense.frequency is None:
        db_expense.frequency = RecurringFrequency.MONTHLY.value
    if not db_expense.is_recurring:
        db_expense.frequency = None

    db.commit()
    db.refresh(db_expense)
    return db_expense


def delete_expense(db: Session, user_id: int, expense_id: int):
    db_expense = get_expense_or_404(db, user_id, expense_id)
    db_expense.deleted_at = datetime.now()
    db.commit()
