from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from finsight.schemas.general_schema import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8)


class UserUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100, pattern=EMAIL_PATTERN)


class UserProfile(CamelModel):
    id: int
    full_name: str
    username: str
    email: str
    created_at: datetime


# OAuth2 clients expect these exact snake_case keys
class TokenResponse(BaseModel):
    access_token: str
    token_type: str
