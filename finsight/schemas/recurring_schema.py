from datetime import date, datetime
from typing import Optional

from pydantic import Field

from finsight.schemas.category_schema import Category
from finsight.schemas.general_schema import CamelModel, MoneyStr
from finsight.utils.constants import RecurringFrequency


class RecurringExpenseCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category_id: int = Field(..., gt=0)
    amount: MoneyStr = Field(..., gt=0, max_digits=15, decimal_places=2)
    frequency: RecurringFrequency = RecurringFrequency.MONTHLY
    start_date: date
    end_date: Optional[date] = None
    auto_add: bool = True


class RecurringExpenseUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category_id: Optional[int] = Field(None, gt=0)
    amount: Optional[MoneyStr] = Field(None, gt=0, max_digits=15, decimal_places=2)
    frequency: Optional[RecurringFrequency] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    auto_add: Optional[bool] = None


class RecurringExpense(CamelModel):
    id: int
    name: str
    category_id: int
    category: Category
    amount: MoneyStr
    monthly_equivalent: MoneyStr
    frequency: RecurringFrequency
    start_date: date
    end_date: Optional[date] = None
    auto_add: bool
    last_processed_month: Optional[str] = None
    created_at: datetime


class RecurringProcessResponse(CamelModel):
    month: str
    processed: int
    skipped: int
