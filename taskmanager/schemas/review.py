from datetime import datetime
from typing import Optional

from .common import CamelModel


class ReviewCreate(CamelModel):
    task_id: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewOut(CamelModel):
    id: str
    user_id: str
    task_id: str
    rating: int
    comment: str
    created_at: datetime
