"""Owner-scoped task storage."""

from typing import List, Optional
import logging

from ..errors import NotFoundError, ValidationError
from ..models import Task, utcnow
from ..repositories import Repository

logger = logging.getLogger(__name__)


class TaskStore:
    """Create, read, update and delete tasks.

    Every operation takes the caller's ``owner_id``. Passing ``None`` runs the
    operation unscoped, which is how the API behaves with authentication
    disabled.

    Attributes:
        tasks: Repository holding the task records
    """

    def __init__(self, tasks: Repository[Task]):
        self.tasks = tasks

    @staticmethod
    def _owned_by(task: Task, owner_id: Optional[str]) -> bool:
        return owner_id is None or task.user_id == owner_id

    def list(self, owner_id: Optional[str]) -> List[Task]:
        """Get all tasks of an owner, in insertion order."""
        return self.tasks.find(lambda t: self._owned_by(t, owner_id))

    def get(self, owner_id: Optional[str], task_id: str) -> Task:
        """Get a specific task.

        Raises:
            NotFoundError: If the task is missing or belongs to someone else
        """
        task = self.tasks.get(task_id)
        if task is None or not self._owned_by(task, owner_id):
            raise NotFoundError("Task not found")
        return task

    def create(self, owner_id: Optional[str], text: Optional[str]) -> Task:
        """Add a new task.

        Args:
            owner_id: Owning user
            text: Task text, stored trimmed

        Returns:
            The newly created Task object
        """
        if text is None or not text.strip():
            raise ValidationError("Task text is required")

        now = utcnow()
        task = self.tasks.add(
            Task(
                user_id=owner_id,
                text=text.strip(),
                completed=False,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(f"Created task {task.id} for owner {owner_id}")
        return task

    def update(
        self,
        owner_id: Optional[str],
        task_id: str,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        """Apply the supplied fields and refresh ``updated_at``."""
        task = self.get(owner_id, task_id)

        if text is not None:
            if not text.strip():
                raise ValidationError("Task text cannot be empty")
            task.text = text.strip()

        if completed is not None:
            task.completed = bool(completed)

        task.updated_at = utcnow()
        task = self.tasks.save(task)
        logger.info(f"Updated task {task.id}")
        return task

    def delete(self, owner_id: Optional[str], task_id: str) -> Task:
        """Delete a task and return the removed record."""
        task = self.get(owner_id, task_id)
        self.tasks.remove(task.id)
        logger.info(f"Deleted task {task.id}")
        return task

    def clear(self, owner_id: Optional[str]) -> int:
        """Delete all tasks of an owner.

        Returns:
            Number of tasks removed
        """
        removed = 0
        for task in self.list(owner_id):
            self.tasks.remove(task.id)
            removed += 1
        logger.info(f"Cleared {removed} tasks for owner {owner_id}")
        return removed
