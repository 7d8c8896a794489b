from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from finsight.models.model import User
from finsight.schemas.user_schema import UserCreate, UserUpdate
from finsight.security.passwords import hash_password


def format_user(user: User) -> dict:
    return {
        "id": user.user_id,
        "full_name": user.full_name,
        "username": user.username,
        "email": user.email,
        "created_at": user.created_at,
    }


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def _check_email_free(db: Session, email: str, user_id: int | None = None):
    query = db.query(User).filter(User.email == email)
    if user_id is not None:
        query = query.filter(User.user_id != user_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )


def create_user(db: Session, user: UserCreate) -> User:
    if get_user_by_username(db, user.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered",
        )
    _check_email_free(db, user.email)

    db_user = User(
        full_name=user.full_name,
        username=user.username,
        email=user.email,
        hashed_password=hash_password(user.password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, db_user: User, user_update: UserUpdate) -> User:
    if user_update.full_name is not None:
        db_user.full_name = user_update.full_name
    if user_update.email is not None:
        _check_email_free(db, user_update.email, user_id=db_user.user_id)
        db_user.email = user_update.email
    db_user.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_user)
    return db_user
