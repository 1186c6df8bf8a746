from datetime import datetime
from typing import Optional

from .common import CamelModel


class RegisterRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    """Public user record, never includes the password hash."""
    id: str
    username: str
    email: str
    created_at: datetime


class AuthOut(CamelModel):
    user: UserOut
    token: str
