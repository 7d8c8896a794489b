import logging
from decimal import Decimal
from typing import Dict, List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from finsight.models.model import SavingsBucket, SavingsDistribution
from finsight.repositories.settings import settings
from finsight.schemas.savings_schema import (
    DistributionEntry,
    SavingsBucketCreate,
    SavingsBucketUpdate,
)
from finsight.utils.savings_calculator import (
    DistributionResult,
    DistributionShare,
    calculate_progress,
    distribute_contribution,
)

logger = logging.getLogger(__name__)

RECENT_DISTRIBUTIONS = 10


def format_distribution(distribution: SavingsDistribution) -> dict:
    return {
        "id": distribution.distribution_id,
        "bucket_id": distribution.bucket_id,
        "month": distribution.month,
        "amount": distribution.amount,
        "note": distribution.note,
        "created_at": distribution.created_at,
    }


def format_bucket(bucket: SavingsBucket) -> dict:
    return {
        "id": bucket.bucket_id,
        "name": bucket.name,
        "type": bucket.type,
        "current_balance": bucket.current_balance,
        "target_amount": bucket.target_amount,
        "target_date": bucket.target_date,
        "monthly_contribution": bucket.monthly_contribution,
        "auto_distribute_percent": (
            float(bucket.auto_distribute_percent)
            if bucket.auto_distribute_percent is not None
            else None
        ),
        "sort_order": bucket.sort_order,
        "progress": calculate_progress(bucket.current_balance, bucket.target_amount),
        "distributions": [
            format_distribution(d) for d in bucket.distributions[:RECENT_DISTRIBUTIONS]
        ],
    }


def get_buckets(db: Session, user_id: int) -> List[SavingsBucket]:
    return (
        db.query(SavingsBucket)
        .options(selectinload(SavingsBucket.distributions))
        .filter(SavingsBucket.user_id == user_id)
        .order_by(SavingsBucket.sort_order, SavingsBucket.bucket_id)
        .all()
    )


def get_bucket_or_404(db: Session, user_id: int, bucket_id: int) -> SavingsBucket:
    bucket = (
        db.query(SavingsBucket)
        .filter(SavingsBucket.bucket_id == bucket_id, SavingsBucket.user_id == user_id)
        .first()
    )
    if not bucket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Savings bucket not found"
        )
    return bucket


def _check_name_free(db: Session, user_id: int, name: str, bucket_id: int | None = None):
    query = db.query(SavingsBucket).filter(
        SavingsBucket.user_id == user_id, SavingsBucket.name == name
    )
    if bucket_id is not None:
        query = query.filter(SavingsBucket.bucket_id != bucket_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Savings bucket name already exists",
        )


def create_bucket(db: Session, user_id: int, bucket: SavingsBucketCreate) -> SavingsBucket:
    _check_name_free(db, user_id, bucket.name)
    db_bucket = SavingsBucket(
        user_id=user_id,
        name=bucket.name,
        type=bucket.type.value,
        current_balance=0,
        target_amount=bucket.target_amount,
        target_date=bucket.target_date,
        monthly_contribution=bucket.monthly_contribution,
        auto_distribute_percent=bucket.auto_distribute_percent,
    )
    db.add(db_bucket)
    db.commit()
    db.refresh(db_bucket)
    return db_bucket


def update_bucket(
    db: Session, user_id: int, bucket_id: int, bucket_update: SavingsBucketUpdate
) -> SavingsBucket:
    db_bucket = get_bucket_or_404(db, user_id, bucket_id)
    # only fields present in the request change, an explicit null clears the value
    changes = bucket_update.model_dump(exclude_unset=True)

    if "name" in changes and changes["name"] is not None:
        _check_name_free(db, user_id, changes["name"], bucket_id=bucket_id)
        db_bucket.name = changes["name"]
    if "type" in changes and changes["type"] is not None:
        db_bucket.type = changes["type"].value
    if "sort_order" in changes and changes["sort_order"] is not None:
        db_bucket.sort_order = changes["sort_order"]
    for field in ("target_amount", "target_date", "monthly_contribution", "auto_distribute_percent"):
        if field in changes:
            setattr(db_bucket, field, changes[field])

    db.commit()
    db.refresh(db_bucket)
    return db_bucket


def delete_bucket(db: Session, user_id: int, bucket_id: int):
    db_bucket = get_bucket_or_404(db, user_id, bucket_id)
    if db_bucket.current_balance > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete bucket with balance. Withdraw funds first.",
        )
    db.delete(db_bucket)
    db.commit()


def record_distributions(
    db: Session, user_id: int, month: str, entries: List[DistributionEntry]
) -> List[SavingsDistribution]:
    """
    Add each entry to its bucket's balance and keep a distribution row for it.

    Runs as one unit: an unknown bucket or a second distribution to the same
    bucket in a month rejects the whole request.
    """
    bucket_ids = [e.bucket_id for e in entries]
    buckets = {
        b.bucket_id: b
        for b in db.query(SavingsBucket)
        .filter(SavingsBucket.bucket_id.in_(bucket_ids), SavingsBucket.user_id == user_id)
        .all()
    }
    if len(set(bucket_ids)) != len(bucket_ids) or set(bucket_ids) != set(buckets):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid bucket(s)"
        )

    created = []
    try:
        for entry in entries:
            distribution = SavingsDistribution(
                user_id=user_id,
                bucket_id=entry.bucket_id,
                month=month,
                amount=entry.amount,
                note=entry.note,
            )
            db.add(distribution)
            # increment in SQL so concurrent deposits to one bucket all land
            db.query(SavingsBucket).filter(SavingsBucket.bucket_id == entry.bucket_id).update(
                {SavingsBucket.current_balance: SavingsBucket.current_balance + entry.amount},
                synchronize_session=False,
            )
            created.append(distribution)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Distribution already exists for this bucket and month",
        )

    for distribution in created:
        db.refresh(distribution)
    logger.info(
        f"Recorded {len(created)} savings distributions for user {user_id} in {month}"
    )
    return created


def plan_distribution(total, shares: List[DistributionShare]) -> DistributionResult:
    return distribute_contribution(total, shares, unit=settings.CURRENCY_UNIT)


def plan_auto_distribution(
    db: Session, user_id: int, total
) -> Tuple[DistributionResult, Dict[int, Decimal]]:
    """Plan a split over the buckets that carry a weight; returns the plan and those weights."""
    weights = {
        b.bucket_id: b.auto_distribute_percent
        for b in get_buckets(db, user_id)
        if b.auto_distribute_percent is not None
    }
    if not weights:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No buckets configured for auto-distribution",
        )
    plan = plan_distribution(
        total,
        [DistributionShare(bucket_id=bucket_id, weight=weight) for bucket_id, weight in weights.items()],
    )
    return plan, weights


def auto_distribute(
    db: Session, user_id: int, month: str, total
) -> Tuple[List[SavingsDistribution], Decimal]:
    """
    Split total over the weighted buckets and record it.

    Returns the created distributions and the part of total the weights
    left undistributed.
    """
    plan, weights = plan_auto_distribution(db, user_id, total)
    entries = [
        DistributionEntry(
            bucket_id=a.bucket_id,
            amount=a.amount,
            note=f"Auto-distributed {weights[a.bucket_id]}%",
        )
        for a in plan.allocations
        if a.amount > 0
    ]
    if not entries:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nothing to distribute with the configured weights",
        )
    return record_distributions(db, user_id, month, entries), plan.undistributed
