from datetime import datetime
from typing import Optional
from sqlmodel import Field, SQLModel

from .common import new_id, utcnow


class Task(SQLModel, table=True):
    """A single to-do item.

    Attributes:
        id: Unique identifier for the task
        user_id: Owning user, None when authentication is disabled
        text: Trimmed, non-empty task text
        completed: Whether the task is completed
        created_at: Timestamp when task was created
        updated_at: Timestamp when task was last updated
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True)
    text: str = Field(max_length=1000)
    completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
