"""One-review-per-user-per-task storage."""

from typing import List, Optional
import logging

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import Review
from ..repositories import Repository
from .tasks import TaskStore

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewStore:
    """Reviews of tasks by their owners."""

    def __init__(self, reviews: Repository[Review], task_store: TaskStore):
        self.reviews = reviews
        self.task_store = task_store

    def list_for_task(self, task_id: str) -> List[Review]:
        """Get all reviews for a task. No ownership check."""
        return self.reviews.find(lambda r: r.task_id == task_id)

    def create(
        self,
        user_id: str,
        task_id: Optional[str],
        rating: Optional[int],
        comment: Optional[str] = None,
    ) -> Review:
        """Review one of the caller's tasks.

        Raises:
            ValidationError: If the task id is missing or the rating is not 1-5
            NotFoundError: If the task is missing or not owned by the reviewer
            ConflictError: If this user already reviewed this task
        """
        if not task_id or rating is None or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError("Task ID and rating (1-5) are required")

        # raises NotFoundError for missing and foreign tasks alike
        self.task_store.get(user_id, task_id)

        existing = self.reviews.first(lambda r: r.task_id == task_id and r.user_id == user_id)
        if existing:
            raise ConflictError("You have already reviewed this task")

        review = self.reviews.add(
            Review(
                user_id=user_id,
                task_id=task_id,
                rating=int(rating),
                comment=comment or "",
            )
        )
        logger.info(f"Created review {review.id} for task {task_id}")
        return review
