from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from finsight.database.connection import get_db
from finsight.models.model import User
from finsight.repositories import user_crud
from finsight.schemas import general_schema, user_schema
from finsight.security.user_security import (
    authenticate_user,
    create_access_token,
    get_current_user,
    oauth2_scheme,
    verify_token,
)

user_Router = APIRouter(prefix="/user")


@user_Router.post(
    "/create",
    response_model=general_schema.RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["users"],
)
def register(user: user_schema.UserCreate, db: Session = Depends(get_db)):
    user_crud.create_user(db=db, user=user)
    return {"message": "user created successfully"}


@user_Router.post("/login", response_model=user_schema.TokenResponse, tags=["users"])
def login(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    user = authenticate_user(form_data.username, form_data.password, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"access_token": create_access_token(user), "token_type": "bearer"}


@user_Router.post(
    "/verify-token", response_model=general_schema.MessageResponse, tags=["users"]
)
def check_token(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    verify_token(token=token, db=db)
    return {"message": "token is valid"}


@user_Router.get("/me", response_model=user_schema.UserProfile, tags=["users"])
def get_profile(user: User = Depends(get_current_user)):
    return user_crud.format_user(user)


@user_Router.patch("/me", response_model=user_schema.UserProfile, tags=["users"])
def update_profile(
    user_update: user_schema.UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_crud.format_user(user_crud.update_user(db, user, user_update))
