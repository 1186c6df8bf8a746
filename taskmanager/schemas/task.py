from datetime import datetime
from typing import Optional

from .common import CamelModel


class TaskCreate(CamelModel):
    # text is validated by the store so a missing field gets the same error as a blank one
    text: Optional[str] = None


class TaskUpdate(CamelModel):
    text: Optional[str] = None
    completed: Optional[bool] = None


class TaskOut(CamelModel):
    """Public representation of a task."""
    id: str
    user_id: Optional[str] = None
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime
