import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import summary_crud
from finsight.schemas import summary_schema
from finsight.security.user_security import get_current_user
from finsight.utils.exceptions import FinanceCalculationError
from finsight.utils.months import MONTH_PATTERN, current_month

logger = logging.getLogger(__name__)

summary_Router = APIRouter(prefix="/summary")


@summary_Router.get("", response_model=summary_schema.MonthSummary, tags=["summary"])
def get_month_summary(
    month: Optional[str] = Query(
        default=None, pattern=MONTH_PATTERN, description="Month as YYYY-MM, defaults to the current month"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    month = month or current_month()
    try:
        summary = summary_crud.get_month_summary(db, user.user_id, month)
    except FinanceCalculationError as e:
        logger.error(f"Summary for {month} rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching summary for {month}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch summary",
        )
    return summary_crud.format_summary(summary)
