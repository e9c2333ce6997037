from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    full_name: Optional[str] = None


class SignInRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class EmailRequest(BaseModel):
    email: str = Field(min_length=3)


class PasswordUpdateRequest(BaseModel):
    password: str = Field(min_length=1)


class UserRead(BaseModel):
    id: str
    email: str
    email_confirmed: bool


class ProfileRead(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class SessionResponse(BaseModel):
    user: UserRead
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    profile: Optional[ProfileRead] = None
