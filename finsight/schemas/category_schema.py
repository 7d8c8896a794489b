from typing import Optional

from finsight.schemas.general_schema import CamelModel


class Category(CamelModel):
    id: int
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: int = 0
