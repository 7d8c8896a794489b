import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import income_crud
from finsight.schemas import general_schema, income_schema
from finsight.security.user_security import get_current_user
from finsight.utils.constants import IncomeSource
from finsight.utils.months import MONTH_PATTERN, current_month

logger = logging.getLogger(__name__)

income_Router = APIRouter(prefix="/income")


@income_Router.get("", response_model=list[income_schema.Income], tags=["income"])
def get_incomes(
    month: Optional[str] = Query(
        default=None, pattern=MONTH_PATTERN, description="Month as YYYY-MM, defaults to the current month"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    incomes = income_crud.get_incomes_for_month(db, user.user_id, month or current_month())
    return [income_crud.format_income(i) for i in incomes]


@income_Router.get("/sources", response_model=list[str], tags=["income"])
def get_income_sources(user: User = Depends(get_current_user)):
    return [source.value for source in IncomeSource]


@income_Router.post(
    "",
    response_model=income_schema.Income,
    status_code=status.HTTP_201_CREATED,
    tags=["income"],
)
def create_income(
    income: income_schema.IncomeCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return income_crud.format_income(income_crud.create_income(db, user.user_id, income))
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error creating income: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while creating the income.",
        )


@income_Router.patch("/{income_id}", response_model=income_schema.Income, tags=["income"])
def update_income(
    income_id: int,
    income_update: income_schema.IncomeUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    income = income_crud.update_income(db, user.user_id, income_id, income_update)
    return income_crud.format_income(income)


@income_Router.delete(
    "/{income_id}", response_model=general_schema.MessageResponse, tags=["income"]
)
def delete_income(
    income_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    income_crud.delete_income(db, user.user_id, income_id)
    return {"message": "income deleted successfully"}
