import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from finsight.models.model import Category
from finsight.utils.constants import PREDEFINED_CATEGORIES

logger = logging.getLogger(__name__)


def format_category(category: Category) -> dict:
    return {
        "id": category.category_id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
        "sort_order": category.sort_order,
    }


def seed_categories(db: Session) -> int:
    """Insert any predefined category that is missing; existing rows are left alone."""
    existing = {name for (name,) in db.query(Category.name).all()}
    created = 0
    for sort_order, category in enumerate(PREDEFINED_CATEGORIES, start=1):
        if category["name"] in existing:
            continue
        db.add(Category(sort_order=sort_order, **category))
        created += 1
    if created:
        db.commit()
        logger.info(f"Seeded {created} categories")
    return created


def get_categories(db: Session):
    return db.query(Category).order_by(Category.sort_order, Category.category_id).all()


def get_category_names(db: Session) -> dict[int, str]:
    return {c.category_id: c.name for c in get_categories(db)}


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.category_id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    return category
