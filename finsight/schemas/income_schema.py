from datetime import datetime
from typing import Optional

from pydantic import Field

from finsight.schemas.general_schema import CamelModel, MoneyStr


class IncomeCreate(CamelModel):
    date: datetime
    source: str = Field(..., min_length=1, max_length=100)
    amount: MoneyStr = Field(..., gt=0, max_digits=15, decimal_places=2)
    note: Optional[str] = Field(None, max_length=500)


class IncomeUpdate(CamelModel):
    date: Optional[datetime] = None
    source: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[MoneyStr] = Field(None, gt=0, max_digits=15, decimal_places=2)
    note: Optional[str] = Field(None, max_length=500)


class Income(IncomeCreate):
    id: int
    created_at: datetime
