from datetime import datetime
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class User(SQLModel, table=True):
    """A registered account.

    Attributes:
        id: Unique identifier
        username: Display name, unique across users
        email: Login email, unique across users
        hashed_password: bcrypt hash, the plaintext is never stored
        created_at: Registration timestamp
    """
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    username: str = Field(index=True, unique=True, max_length=100)
    email: str = Field(index=True, unique=True, max_length=255)
    hashed_password: str
    created_at: datetime = Field(default_factory=utcnow)
