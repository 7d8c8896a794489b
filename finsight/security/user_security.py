"""
Bearer-token authentication.

Tokens are HS256 JWTs whose subject is the username; every data route
resolves the caller through get_current_user.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import user_crud
from finsight.repositories.settings import settings
from finsight.security.passwords import verify_password

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="user/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(user: User) -> str:
    expires_at = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {"sub": user.username, "exp": expires_at}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _user_from_token(token: str, db: Session) -> User:
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid token")

    username = claims.get("sub")
    if not username:
        raise _unauthorized("Invalid token")
    user = user_crud.get_user_by_username(db=db, username=username)
    if user is None:
        raise _unauthorized("User not found")
    return user


def verify_token(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> str:
    return _user_from_token(token, db).username


def authenticate_user(username: str, password: str, db: Session):
    user = user_crud.get_user_by_username(db=db, username=username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    return _user_from_token(token, db)
