from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from finsight.schemas.category_schema import Category
from finsight.schemas.general_schema import CamelModel, MoneyStr
from finsight.utils.constants import PaymentMethodType, RecurringFrequency


class ExpenseCreate(CamelModel):
    date: datetime
    merchant: str = Field(..., min_length=1, max_length=200)
    category_id: int = Field(..., gt=0)
    amount: MoneyStr = Field(..., gt=0, max_digits=15, decimal_places=2)
    payment_method: Optional[PaymentMethodType] = None
    note: Optional[str] = Field(None, max_length=500)
    is_recurring: bool = False
    frequency: Optional[RecurringFrequency] = None

    @model_validator(mode="after")
    def default_recurring_frequency(self):
        # a recurring expense without a stated frequency is a monthly one
        if self.is_recurring and self.frequency is None:
            self.frequency = RecurringFrequency.MONTHLY
        if not self.is_recurring:
            self.frequency = None
        return self


class ExpenseUpdate(CamelModel):
    date: Optional[datetime] = None
    merchant: Optional[str] = Field(None, min_length=1, max_length=200)
    category_id: Optional[int] = Field(None, gt=0)
    amount: Optional[MoneyStr] = Field(None, gt=0, max_digits=15, decimal_places=2)
    payment_method: Optional[PaymentMethodType] = None
    note: Optional[str] = Field(None, max_length=500)
    is_recurring: Optional[bool] = None
    frequency: Optional[RecurringFrequency] = None


class Expense(CamelModel):
    id: int
    date: datetime
    merchant: str
    category_id: int
    category: Category
    amount: MoneyStr
    payment_method: Optional[PaymentMethodType] = None
    note: Optional[str] = None
    is_recurring: bool
    frequency: Optional[RecurringFrequency] = None
    recurring_expense_id: Optional[int] = None
    created_at: datetime
