from datetime import datetime
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class Review(SQLModel, table=True):
    """A user's rating of one of their own tasks."""
    __tablename__ = "reviews"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    task_id: str = Field(index=True)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(default="", max_length=1000)
    created_at: datetime = Field(default_factory=utcnow)
