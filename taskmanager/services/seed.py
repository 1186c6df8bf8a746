"""Demo data created at startup when SEED_DEMO_DATA is on."""

import logging

from ..models import Review, Task, User
from .reviews import ReviewStore
from .session import Authenticator
from .tasks import TaskStore

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password"


def seed_demo_data(authenticator: Authenticator, task_store: TaskStore, review_store: ReviewStore) -> User:
    """Create the demo account with a welcome task and a review of it.

    Does nothing beyond returning the existing account when it is already there.
    """
    existing = authenticator.users.first(lambda u: u.email == DEMO_EMAIL)
    if existing:
        return existing

    user = authenticator.register(DEMO_USERNAME, DEMO_EMAIL, DEMO_PASSWORD).user
    task: Task = task_store.create(user.id, "Welcome to Task Manager API!")
    review: Review = review_store.create(user.id, task.id, 5, "Great task management app!")
    logger.info(f"Seeded demo user {user.id} with task {task.id} and review {review.id}")
    return user
