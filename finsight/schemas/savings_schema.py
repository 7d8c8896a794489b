from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from finsight.schemas.general_schema import CamelModel, MoneyStr, OptionalMoneyStr
from finsight.utils.constants import SavingsBucketType
from finsight.utils.months import MONTH_PATTERN


class SavingsBucketCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: SavingsBucketType
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=15, decimal_places=2)
    target_date: Optional[date] = None
    monthly_contribution: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    auto_distribute_percent: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)


class SavingsBucketUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[SavingsBucketType] = None
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=15, decimal_places=2)
    target_date: Optional[date] = None
    monthly_contribution: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    auto_distribute_percent: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)
    sort_order: Optional[int] = None


class SavingsDistributionRecord(CamelModel):
    id: int
    bucket_id: int
    month: str
    amount: MoneyStr
    note: Optional[str] = None
    created_at: datetime


class SavingsBucket(CamelModel):
    id: int
    name: str
    type: SavingsBucketType
    current_balance: MoneyStr
    target_amount: OptionalMoneyStr = None
    target_date: Optional[date] = None
    monthly_contribution: OptionalMoneyStr = None
    auto_distribute_percent: Optional[float] = None
    sort_order: int
    progress: float
    distributions: List[SavingsDistributionRecord] = []


class DistributionEntry(CamelModel):
    bucket_id: int
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    note: Optional[str] = Field(None, max_length=500)


class DistributeRequest(CamelModel):
    month: Optional[str] = Field(None, pattern=MONTH_PATTERN)
    distributions: List[DistributionEntry] = Field(..., min_length=1)


class AutoDistributeRequest(CamelModel):
    month: Optional[str] = Field(None, pattern=MONTH_PATTERN)
    total_savings: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)


class DistributeResponse(CamelModel):
    distributions: List[SavingsDistributionRecord]


class AutoDistributeResponse(DistributeResponse):
    undistributed: MoneyStr


class PlanBucket(CamelModel):
    bucket_id: int
    weight: Decimal = Field(..., ge=0, le=100)


class DistributionPlanRequest(CamelModel):
    total_contribution: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    buckets: List[PlanBucket]


class PlannedAllocation(CamelModel):
    bucket_id: int
    amount: MoneyStr


class DistributionPlanResponse(CamelModel):
    allocations: List[PlannedAllocation]
    distributed: MoneyStr
    undistributed: MoneyStr
