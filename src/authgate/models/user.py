"""
Auth DTOs. User is returned by the backend and passed through untouched.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str | int] = None
    email: Optional[str] = None
    username: Optional[str] = None
    email_verified: Optional[bool] = None


class RegisterRequest(BaseModel):
    email: str
    username: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str
