import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import expense_crud
from finsight.schemas import expense_schema, general_schema
from finsight.security.user_security import get_current_user
from finsight.utils.months import MONTH_PATTERN, current_month

logger = logging.getLogger(__name__)

expense_Router = APIRouter(prefix="/expense")


@expense_Router.get("", response_model=list[expense_schema.Expense], tags=["expenses"])
def get_expenses(
    month: Optional[str] = Query(
        default=None, pattern=MONTH_PATTERN, description="Month as YYYY-MM, defaults to the current month"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    expenses = expense_crud.get_expenses_for_month(db, user.user_id, month or current_month())
    return [expense_crud.format_expense(e) for e in expenses]


@expense_Router.post(
    "",
    response_model=expense_schema.Expense,
    status_code=status.HTTP_201_CREATED,
    tags=["expenses"],
)
def create_expense(
    expense: expense_schema.ExpenseCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return expense_crud.format_expense(expense_crud.create_expense(db, user.user_id, expense))
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error creating expense: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while creating the expense.",
        )


@expense_Router.patch(
    "/{expense_id}", response_model=expense_schema.Expense, tags=["expenses"]
)
def update_expense(
    expense_id: int,
    expense_update: expense_schema.ExpenseUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    expense = expense_crud.update_expense(db, user.user_id, expense_id, expense_update)
    return expense_crud.format_expense(expense)


@expense_Router.delete(
    "/{expense_id}", response_model=general_schema.MessageResponse, tags=["expenses"]
)
def delete_expense(
    expense_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    expense_crud.delete_expense(db, user.user_id, expense_id)
    return {"message": "expense deleted successfully"}
