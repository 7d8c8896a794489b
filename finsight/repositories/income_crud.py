from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from finsight.models.model import Income
from finsight.schemas.income_schema import IncomeCreate, IncomeUpdate
from finsight.utils.months import month_range, wall_clock
from finsight.utils.summary_calculator import IncomeRecord


def format_income(income: Income) -> dict:
    return {
        "id": income.income_id,
        "date": income.date,
        "source": income.source,
        "amount": income.amount,
        "note": income.note,
        "created_at": income.created_at,
    }


def get_incomes_for_month(db: Session, user_id: int, month: str) -> List[Income]:
    first_day, last_day = month_range(month)
    return (
        db.query(Income)
        .filter(
            Income.user_id == user_id,
            Income.date >= first_day,
            Income.date <= last_day,
        )
        .order_by(Income.date.desc(), Income.income_id.desc())
        .all()
    )


def get_income_records(db: Session, user_id: int, month: str) -> List[IncomeRecord]:
    return [
        IncomeRecord(amount=income.amount, source=income.source)
        for income in get_incomes_for_month(db, user_id, month)
    ]


def get_income_or_404(db: Session, user_id: int, income_id: int) -> Income:
    income = (
        db.query(Income)
        .filter(Income.income_id == income_id, Income.user_id == user_id)
        .first()
    )
    if not income:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Income not found"
        )
    return income


def create_income(db: Session, user_id: int, income: IncomeCreate) -> Income:
    db_income = Income(
        user_id=user_id,
        date=wall_clock(income.date),
        source=income.source,
        amount=income.amount,
        note=income.note,
    )
    db.add(db_income)
    db.commit()
    db.refresh(db_income)
    return db_income


def update_income(
    db: Session, user_id: int, income_id: int, income_update: IncomeUpdate
) -> Income:
    db_income = get_income_or_404(db, user_id, income_id)

    if income_update.date is not None:
        db_income.date = wall_clock(income_update.date)
    if income_update.source is not None:
        db_income.source = income_update.source
    if income_update.amount is not None:
        db_income.amount = income_update.amount
    if income_update.note is not None:
        db_income.note = income_update.note

    db.commit()
    db.refresh(db_income)
    return db_income


def delete_income(db: Session, user_id: int, income_id: int):
    db_income = get_income_or_404(db, user_id, income_id)
    db.delete(db_income)
    db.commit()
