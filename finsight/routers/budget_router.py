import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import budget_crud
from finsight.schemas import budget_schema, general_schema
from finsight.security.user_security import get_current_user
from finsight.utils.months import MONTH_PATTERN

logger = logging.getLogger(__name__)

budget_Router = APIRouter(prefix="/budgets")


@budget_Router.get("", response_model=list[budget_schema.Budget], tags=["budgets"])
def get_budgets(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month as YYYY-MM"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = budget_crud.get_budget_statuses(db, user.user_id, month)
    return [budget_crud.format_budget(budget, budget_status) for budget, budget_status in rows]


@budget_Router.get(
    "/alerts", response_model=list[budget_schema.Budget], tags=["budgets"]
)
def get_budget_alerts(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month as YYYY-MM"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = budget_crud.get_budget_alerts(db, user.user_id, month)
    return [budget_crud.format_budget(budget, budget_status) for budget, budget_status in rows]


@budget_Router.post("", response_model=general_schema.MessageResponse, tags=["budgets"])
def save_budgets(
    request: budget_schema.BudgetUpsert,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        budget_crud.upsert_budgets(db, user.user_id, request.month, request.budgets)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error saving budgets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save budgets",
        )
    return {"message": "budgets saved successfully"}


@budget_Router.patch(
    "", response_model=budget_schema.BudgetCopyResponse, tags=["budgets"]
)
def copy_budgets(
    request: budget_schema.BudgetCopy,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        count = budget_crud.copy_budgets(db, user.user_id, request.from_month, request.to_month)
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error copying budgets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to copy budgets",
        )
    return {"count": count}
