from fastapi import Request

from ..services.reviews import ReviewStore
from ..services.tasks import TaskStore


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.task_store


def get_review_store(request: Request) -> ReviewStore:
    return request.app.state.review_store
