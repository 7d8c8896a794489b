from datetime import date, datetime
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from finsight.models.model import RecurringExpense
from finsight.repositories.category_crud import format_category, get_category_or_404
from finsight.schemas.recurring_schema import (
    RecurringExpenseCreate,
    RecurringExpenseUpdate,
)
from finsight.utils.money import to_money
from finsight.utils.summary_calculator import monthly_equivalent


def format_recurring_expense(recurring: RecurringExpense) -> dict:
    return {
        "id": recurring.recurring_expense_id,
        "name": recurring.name,
        "category_id": recurring.category_id,
        "category": format_category(recurring.category),
        "amount": recurring.amount,
        "monthly_equivalent": to_money(monthly_equivalent(recurring.amount, recurring.frequency)),
        "frequency": recurring.frequency,
        "start_date": recurring.start_date,
        "end_date": recurring.end_date,
        "auto_add": recurring.auto_add,
        "last_processed_month": recurring.last_processed_month,
        "created_at": recurring.created_at,
    }


def get_recurring_expenses(
    db: Session, user_id: int, include_deleted: bool = False
) -> List[RecurringExpense]:
    query = (
        db.query(RecurringExpense)
        .options(joinedload(RecurringExpense.category))
        .filter(RecurringExpense.user_id == user_id)
    )
    if not include_deleted:
        query = query.filter(RecurringExpense.deleted_at.is_(None))
    return query.order_by(RecurringExpense.created_at.desc()).all()


def get_active_auto_add(db: Session, on_date: date) -> List[RecurringExpense]:
    """Templates of every user that should book expenses on on_date."""
    return (
        db.query(RecurringExpense)
        .filter(
            RecurringExpense.auto_add == True,
            RecurringExpense.deleted_at.is_(None),
            RecurringExpense.start_date <= on_date,
            or_(
                RecurringExpense.end_date.is_(None),
                RecurringExpense.end_date >= on_date,
            ),
        )
        .order_by(RecurringExpense.recurring_expense_id)
        .all()
    )


def get_recurring_expense_or_404(
    db: Session, user_id: int, recurring_expense_id: int
) -> RecurringExpense:
    recurring = (
        db.query(RecurringExpense)
        .filter(
            RecurringExpense.recurring_expense_id == recurring_expense_id,
            RecurringExpense.user_id == user_id,
            RecurringExpense.deleted_at.is_(None),
        )
        .first()
    )
    if not recurring:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recurring expense not found",
        )
    return recurring


def _check_dates(start_date: date, end_date: date | None):
    if end_date is not None and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date cannot be before start date",
        )


def create_recurring_expense(
    db: Session, user_id: int, recurring: RecurringExpenseCreate
) -> RecurringExpense:
    get_category_or_404(db, recurring.category_id)
    _check_dates(recurring.start_date, recurring.end_date)

    db_recurring = RecurringExpense(
        user_id=user_id,
        category_id=recurring.category_id,
        name=recurring.name,
        amount=recurring.amount,
        frequency=recurring.frequency.value,
        start_date=recurring.start_date,
        end_date=recurring.end_date,
        auto_add=recurring.auto_add,
    )
    db.add(db_recurring)
    db.commit()
    db.refresh(db_recurring)
    return db_recurring


def update_recurring_expense(
    db: Session,
    user_id: int,
    recurring_expense_id: int,
    recurring_update: RecurringExpenseUpdate,
) -> RecurringExpense:
    db_recurring = get_recurring_expense_or_404(db, user_id, recurring_expense_id)

    if recurring_update.category_id is not None:
        get_category_or_404(db, recurring_update.category_id)
        db_recurring.category_id = recurring_update.category_id
    if recurring_update.name is not None:
        db_recurring.name = recurring_update.name
    if recurring_update.amount is not None:
        db_recurring.amount = recurring_update.amount
    if recurring_update.frequency is not None:
        db_recurring.frequency = recurring_update.frequency.value
    if recurring_update.start_date is not None:
        db_recurring.start_date = recurring_update.start_date
    if recurring_update.end_date is not None:
        db_recurring.end_date = recurring_update.end_date
    if recurring_update.auto_add is not None:
        db_recurring.auto_add = recurring_update.auto_add

    _check_dates(db_recurring.start_date, db_recurring.end_date)

    db.commit()
    db.refresh(db_recurring)
    return db_recurring


def delete_recurring_expense(db: Session, user_id: int, recurring_expense_id: int):
    db_recurring = get_recurring_expense_or_404(db, user_id, recurring_expense_id)
    db_recurring.deleted_at = datetime.now()
    db.commit()
