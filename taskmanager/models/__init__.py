"""Models package."""
from .user import User
from .task import Task
from .review import Review
from .common import new_id, utcnow

__all__ = ["User", "Task", "Review", "new_id", "utcnow"]
