from typing import List

from pydantic import Field

from finsight.schemas.category_schema import Category
from finsight.schemas.general_schema import CamelModel, MoneyStr
from finsight.utils.constants import AlertLevel
from finsight.utils.months import MONTH_PATTERN


class BudgetAllocation(CamelModel):
    category_id: int = Field(..., gt=0)
    amount: MoneyStr = Field(..., ge=0, max_digits=15, decimal_places=2)


class BudgetUpsert(CamelModel):
    month: str = Field(..., pattern=MONTH_PATTERN)
    budgets: List[BudgetAllocation] = Field(..., min_length=1)


class BudgetCopy(CamelModel):
    from_month: str = Field(..., pattern=MONTH_PATTERN)
    to_month: str = Field(..., pattern=MONTH_PATTERN)


class BudgetCopyResponse(CamelModel):
    count: int


class Budget(CamelModel):
    id: int
    category_id: int
    category: Category
    month: str
    amount: MoneyStr
    spent: MoneyStr
    remaining: MoneyStr
    percentage: float
    progress: float
    alert_level: AlertLevel
    alert_color: str
