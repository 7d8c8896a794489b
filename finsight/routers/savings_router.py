import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import savings_crud
from finsight.schemas import general_schema, savings_schema
from finsight.security.user_security import get_current_user
from finsight.utils.exceptions import FinanceCalculationError
from finsight.utils.months import current_month
from finsight.utils.savings_calculator import DistributionShare

logger = logging.getLogger(__name__)

savings_Router = APIRouter(prefix="/savings")


@savings_Router.get(
    "", response_model=list[savings_schema.SavingsBucket], tags=["savings"]
)
def get_savings_buckets(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [savings_crud.format_bucket(b) for b in savings_crud.get_buckets(db, user.user_id)]


@savings_Router.post(
    "",
    response_model=savings_schema.SavingsBucket,
    status_code=status.HTTP_201_CREATED,
    tags=["savings"],
)
def create_savings_bucket(
    bucket: savings_schema.SavingsBucketCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return savings_crud.format_bucket(savings_crud.create_bucket(db, user.user_id, bucket))
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error creating savings bucket: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create savings bucket",
        )


@savings_Router.post(
    "/distribution/plan",
    response_model=savings_schema.DistributionPlanResponse,
    tags=["savings"],
)
def plan_distribution(
    request: savings_schema.DistributionPlanRequest,
    user: User = Depends(get_current_user),
):
    shares = [DistributionShare(bucket_id=b.bucket_id, weight=b.weight) for b in request.buckets]
    try:
        plan = savings_crud.plan_distribution(request.total_contribution, shares)
    except FinanceCalculationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {
        "allocations": [
            {"bucket_id": a.bucket_id, "amount": a.amount} for a in plan.allocations
        ],
        "distributed": plan.distributed,
        "undistributed": plan.undistributed,
    }


@savings_Router.post(
    "/distribute",
    response_model=savings_schema.DistributeResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["savings"],
)
def distribute_savings(
    request: savings_schema.DistributeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        created = savings_crud.record_distributions(
            db, user.user_id, request.month or current_month(), request.distributions
        )
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error(f"Error distributing savings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to distribute savings",
        )
    return {"distributions": [savings_crud.format_distribution(d) for d in created]}


@savings_Router.put(
    "/distribute",
    response_model=savings_schema.AutoDistributeResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["savings"],
)
def auto_distribute_savings(
    request: savings_schema.AutoDistributeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        created, undistributed = savings_crud.auto_distribute(
            db, user.user_id, request.month or current_month(), request.total_savings
        )
    except HTTPException as e:
        raise e
    except FinanceCalculationError as e:
        logger.error(f"Auto-distribution rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error auto-distributing savings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to auto-distribute savings",
        )
    return {
        "distributions": [savings_crud.format_distribution(d) for d in created],
        "undistributed": undistributed,
    }


@savings_Router.patch(
    "/{bucket_id}", response_model=savings_schema.SavingsBucket, tags=["savings"]
)
def update_savings_bucket(
    bucket_id: int,
    bucket_update: savings_schema.SavingsBucketUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    bucket = savings_crud.update_bucket(db, user.user_id, bucket_id, bucket_update)
    return savings_crud.format_bucket(bucket)


@savings_Router.delete(
    "/{bucket_id}", response_model=general_schema.MessageResponse, tags=["savings"]
)
def delete_savings_bucket(
    bucket_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    savings_crud.delete_bucket(db, user.user_id, bucket_id)
    return {"message": "savings bucket deleted successfully"}
