from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import category_crud
from finsight.schemas import category_schema
from finsight.security.user_security import get_current_user

category_Router = APIRouter(prefix="/category")


@category_Router.get(
    "/list", response_model=list[category_schema.Category], tags=["categories"]
)
def get_categories(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [category_crud.format_category(c) for c in category_crud.get_categories(db)]
