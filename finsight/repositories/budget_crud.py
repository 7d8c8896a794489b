import logging
from datetime import datetime, timezone
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from finsight.models.model import Budget, Category
from finsight.repositories import expense_crud
from finsight.repositories.category_crud import format_category
from finsight.schemas.budget_schema import BudgetAllocation
from finsight.utils.budget_alerts import (
    BudgetStatus,
    budgets_needing_attention,
    calculate_budget_status,
)
from finsight.utils.money import ZERO

logger = logging.getLogger(__name__)


def format_budget(budget: Budget, budget_status: BudgetStatus) -> dict:
    return {
        "id": budget.budget_id,
        "category_id": budget.category_id,
        "category": format_category(budget.category),
        "month": budget.month,
        "amount": budget_status.allocated,
        "spent": budget_status.spent,
        "remaining": budget_status.remaining,
        "percentage": budget_status.percentage,
        "progress": budget_status.progress,
        "alert_level": budget_status.alert_level,
        "alert_color": budget_status.alert_color,
    }


def get_budgets_for_month(db: Session, user_id: int, month: str) -> List[Budget]:
    return (
        db.query(Budget)
        .join(Category, Budget.category_id == Category.category_id)
        .options(joinedload(Budget.category))
        .filter(Budget.user_id == user_id, Budget.month == month)
        .order_by(Category.sort_order, Budget.budget_id)
        .all()
    )


def get_budget_statuses(db: Session, user_id: int, month: str) -> List[tuple[Budget, BudgetStatus]]:
    spending = expense_crud.get_spending_by_category(db, user_id, month)
    return [
        (budget, calculate_budget_status(budget.amount, spending.get(budget.category_id, ZERO)))
        for budget in get_budgets_for_month(db, user_id, month)
    ]


def get_budget_alerts(db: Session, user_id: int, month: str) -> List[tuple[Budget, BudgetStatus]]:
    return budgets_needing_attention(
        get_budget_statuses(db, user_id, month), key=lambda row: row[1]
    )


def upsert_budgets(
    db: Session, user_id: int, month: str, allocations: List[BudgetAllocation]
) -> int:
    category_ids = {a.category_id for a in allocations}
    known = {
        category_id
        for (category_id,) in db.query(Category.category_id)
        .filter(Category.category_id.in_(category_ids))
        .all()
    }
    if known != category_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown category id(s): {sorted(category_ids - known)}",
        )

    existing = {
        b.category_id: b
        for b in db.query(Budget).filter(Budget.user_id == user_id, Budget.month == month).all()
    }
    now = datetime.now(timezone.utc)
    for allocation in allocations:
        budget = existing.get(allocation.category_id)
        if budget is None:
            budget = Budget(
                user_id=user_id,
                category_id=allocation.category_id,
                month=month,
                amount=allocation.amount,
            )
            db.add(budget)
            existing[allocation.category_id] = budget
        else:
            budget.amount = allocation.amount
            budget.updated_at = now

    db.commit()
    logger.info(f"Saved {len(allocations)} budgets for user {user_id} in {month}")
    return len(allocations)


def copy_budgets(db: Session, user_id: int, from_month: str, to_month: str) -> int:
    previous = db.query(Budget).filter(Budget.user_id == user_id, Budget.month == from_month).all()
    if not previous:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No budgets found for the specified month",
        )
    return upsert_budgets(
        db,
        user_id,
        to_month,
        [BudgetAllocation(category_id=b.category_id, amount=b.amount) for b in previous],
    )
