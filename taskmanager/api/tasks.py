from typing import Optional
from fastapi import APIRouter, Depends, status

from ..dependencies.auth import get_owner_id
from ..dependencies.stores import get_task_store
from ..schemas import TaskCreate, TaskOut, TaskUpdate, envelope
from ..services.tasks import TaskStore

router = APIRouter()


@router.get("/tasks")
def get_tasks(
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    tasks = [TaskOut.model_validate(task) for task in store.list(owner_id)]
    return envelope(data=tasks, count=len(tasks))


@router.get("/tasks/{task_id}")
def get_task(
    task_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    task = store.get(owner_id, task_id)
    return envelope(data=TaskOut.model_validate(task))


@router.post("/tasks")
def create_task(
    payload: TaskCreate,
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    task = store.create(owner_id, payload.text)
    return envelope(
        data=TaskOut.model_validate(task),
        message="Task created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/tasks/{task_id}")
def update_task(
    task_id: str,
    payload: TaskUpdate,
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    task = store.update(owner_id, task_id, text=payload.text, completed=payload.completed)
    return envelope(data=TaskOut.model_validate(task), message="Task updated successfully")


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    task = store.delete(owner_id, task_id)
    return envelope(data=TaskOut.model_validate(task), message="Task deleted successfully")


@router.delete("/tasks")
def delete_all_tasks(
    owner_id: Optional[str] = Depends(get_owner_id),
    store: TaskStore = Depends(get_task_store),
):
    removed = store.clear(owner_id)
    return envelope(message=f"Deleted {removed} tasks successfully")
