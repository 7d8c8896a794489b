import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import recurring_crud
from finsight.repositories.settings import settings
from finsight.schemas import general_schema, recurring_schema
from finsight.security.user_security import get_current_user
from finsight.services.recurring_service import RecurringService
from finsight.utils.months import MONTH_PATTERN, current_month

logger = logging.getLogger(__name__)

recurring_Router = APIRouter(prefix="/recurring")


def verify_cron_secret(authorization: Optional[str] = Header(default=None)):
    if settings.CRON_SECRET and authorization != f"Bearer {settings.CRON_SECRET}":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )


@recurring_Router.get(
    "", response_model=list[recurring_schema.RecurringExpense], tags=["recurring"]
)
def get_recurring_expenses(
    include_deleted: bool = Query(default=False, alias="includeDeleted"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recurring = recurring_crud.get_recurring_expenses(db, user.user_id, include_deleted)
    return [recurring_crud.format_recurring_expense(r) for r in recurring]


@recurring_Router.post(
    "",
    response_model=recurring_schema.RecurringExpense,
    status_code=status.HTTP_201_CREATED,
    tags=["recurring"],
)
def create_recurring_expense(
    recurring: recurring_schema.RecurringExpenseCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        created = recurring_crud.create_recurring_expense(db, user.user_id, recurring)
        return recurring_crud.format_recurring_expense(created)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error creating recurring expense: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while creating the recurring expense.",
        )


@recurring_Router.post(
    "/process",
    response_model=recurring_schema.RecurringProcessResponse,
    dependencies=[Depends(verify_cron_secret)],
    tags=["recurring"],
)
def process_recurring_expenses(
    month: Optional[str] = Query(default=None, pattern=MONTH_PATTERN),
    db: Session = Depends(get_db),
):
    try:
        return RecurringService.process_month(db, month or current_month())
    except Exception as e:
        logger.error(f"Error processing recurring expenses: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process recurring expenses",
        )


@recurring_Router.patch(
    "/{recurring_expense_id}",
    response_model=recurring_schema.RecurringExpense,
    tags=["recurring"],
)
def update_recurring_expense(
    recurring_expense_id: int,
    recurring_update: recurring_schema.RecurringExpenseUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    updated = recurring_crud.update_recurring_expense(
        db, user.user_id, recurring_expense_id, recurring_update
    )
    return recurring_crud.format_recurring_expense(updated)


@recurring_Router.delete(
    "/{recurring_expense_id}",
    response_model=general_schema.MessageResponse,
    tags=["recurring"],
)
def delete_recurring_expense(
    recurring_expense_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recurring_crud.delete_recurring_expense(db, user.user_id, recurring_expense_id)
    return {"message": "recurring expense deleted successfully"}
