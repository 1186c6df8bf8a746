"""Local-first task list that mirrors its changes to the API.

Every mutation is applied to the local list and written to device storage
first. When a session exists the change is then sent to the server once; a
failed call is logged, the local change stays, and the record is marked
``local_only`` until a later mutation or a full refresh retries it.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

import pydantic
from pydantic import Field

from ..errors import AuthError, NotFoundError, ValidationError
from ..models import new_id, utcnow
from ..schemas import CamelModel
from .api import ApiError, TaskApiClient
from .storage import LocalStorage

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
USER_KEY = "user"
ANALYTICS_KEY = "analytics"
LANGUAGE_KEY = "language"

SUPPORTED_LANGUAGES = ("en", "es", "fr")
DEFAULT_LANGUAGE = "en"


class SyncStatus(str, Enum):
    """Where a record stands relative to the server."""
    LOCAL = "local"            # only on the device, no session
    SYNCING = "syncing"        # server call in flight
    SYNCED = "synced"          # server confirmed
    LOCAL_ONLY = "local_only"  # server call failed, retried on the next mutation


class LocalTask(CamelModel):
    id: str = Field(default_factory=new_id)
    remote_id: Optional[str] = None
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    sync_status: SyncStatus = SyncStatus.LOCAL

    @classmethod
    def from_remote(cls, data: Dict[str, Any]) -> "LocalTask":
        return cls(
            id=data["id"],
            remote_id=data["id"],
            text=data["text"],
            completed=data.get("completed", False),
            created_at=data["createdAt"],
            sync_status=SyncStatus.SYNCED,
        )


class Analytics(CamelModel):
    """Usage counters kept on the device."""
    app_opens: int = 0
    tasks_created: int = 0
    tasks_completed: int = 0
    tasks_deleted: int = 0
    reviews_submitted: int = 0


class UserSession(CamelModel):
    user: Dict[str, Any]
    token: str


class TaskListSync:
    """The app's task list and the device state around it.

    Attributes:
        storage: Device key/value storage
        api: Client for the remote API
        tasks: Local task list, display order
        session: Logged-in user and token, None when logged out
        analytics: Usage counters
        language: Selected locale code
    """

    def __init__(self, storage: LocalStorage, api: TaskApiClient):
        self.storage = storage
        self.api = api
        self.tasks: List[LocalTask] = []
        self.session: Optional[UserSession] = None
        self.analytics = Analytics()
        self.language = DEFAULT_LANGUAGE

    @property
    def has_session(self) -> bool:
        return self.session is not None

    # --- Persistence ---

    def load(self) -> None:
        """Load every stored key. A broken key falls back to its default."""
        try:
            self.tasks = [LocalTask.model_validate(t) for t in self.storage.get_json(TASKS_KEY, [])]
        except (ValueError, pydantic.ValidationError) as e:
            logger.error(f"Error loading tasks: {e}")
            self.tasks = []

        try:
            stored_user = self.storage.get_json(USER_KEY)
            self.session = UserSession.model_validate(stored_user) if stored_user else None
        except (ValueError, pydantic.ValidationError) as e:
            logger.error(f"Error loading user: {e}")
            self.session = None
        self.api.token = self.session.token if self.session else None

        try:
            self.analytics = Analytics.model_validate(self.storage.get_json(ANALYTICS_KEY, {}))
        except (ValueError, pydantic.ValidationError) as e:
            logger.error(f"Error loading analytics: {e}")
            self.analytics = Analytics()

        try:
            language = self.storage.get_json(LANGUAGE_KEY, DEFAULT_LANGUAGE)
        except ValueError as e:
            logger.error(f"Error loading language: {e}")
            language = DEFAULT_LANGUAGE
        self.language = language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE

        self.analytics.app_opens += 1
        self._save_analytics()

    def _save(self, key: str, value: Any) -> None:
        try:
            self.storage.set_json(key, value)
        except (OSError, ValueError) as e:
            logger.error(f"Error saving {key}: {e}")

    def _save_tasks(self) -> None:
        self._save(TASKS_KEY, [t.model_dump(mode="json", by_alias=True) for t in self.tasks])

    def _save_analytics(self) -> None:
        self._save(ANALYTICS_KEY, self.analytics.model_dump(mode="json", by_alias=True))

    # --- Remote mirroring ---

    def _push_create(self, task: LocalTask) -> None:
        task.sync_status = SyncStatus.SYNCING
        try:
            task.remote_id = self.api.create_task(task.text)["id"]
            if task.completed:
                self.api.update_task(task.remote_id, completed=True)
        except ApiError as e:
            logger.warning(f"Could not sync new task {task.id}: {e.message}")
            task.sync_status = SyncStatus.LOCAL_ONLY
        else:
            task.sync_status = SyncStatus.SYNCED

    def _push_update(self, task: LocalTask) -> None:
        task.sync_status = SyncStatus.SYNCING
        try:
            self.api.update_task(task.remote_id, text=task.text, completed=task.completed)
        except ApiError as e:
            logger.warning(f"Could not sync task {task.id}: {e.message}")
            task.sync_status = SyncStatus.LOCAL_ONLY
        else:
            task.sync_status = SyncStatus.SYNCED

    def _mirror(self, task: LocalTask) -> None:
        if not self.has_session:
            return
        if task.remote_id is None:
            self._push_create(task)
        else:
            self._push_update(task)
        self._save_tasks()

    def _retry_pending(self) -> None:
        """Push records written while logged out or left behind by a failed call."""
        if not self.has_session:
            return
        for task in self.tasks:
            if task.sync_status in (SyncStatus.LOCAL, SyncStatus.LOCAL_ONLY):
                self._mirror(task)

    def pending(self) -> List[LocalTask]:
        """Tasks the server has not confirmed."""
        return [t for t in self.tasks if t.sync_status != SyncStatus.SYNCED]

    def refresh(self) -> bool:
        """Replace the local list with the server's.

        Tasks the server has never accepted are kept after the server list so
        they can be retried.

        Returns:
            True if the server list was applied
        """
        if not self.has_session:
            return False
        self._retry_pending()
        try:
            remote_tasks = self.api.list_tasks()
        except ApiError as e:
            logger.warning(f"Could not fetch tasks: {e.message}")
            return False
        unconfirmed = [t for t in self.tasks if t.remote_id is None]
        self.tasks = [LocalTask.from_remote(t) for t in remote_tasks] + unconfirmed
        self._save_tasks()
        return True

    # --- Task mutations ---

    def _find(self, local_id: str) -> LocalTask:
        for task in self.tasks:
            if task.id == local_id:
                return task
        raise NotFoundError("Task not found")

    def add_task(self, text: Optional[str]) -> LocalTask:
        if not text or not text.strip():
            raise ValidationError("Please enter a task description")
        self._retry_pending()

        task = LocalTask(text=text.strip())
        self.tasks.append(task)
        self.analytics.tasks_created += 1
        self._save_tasks()
        self._save_analytics()
        self._mirror(task)
        return task

    def toggle_task(self, local_id: str) -> LocalTask:
        self._retry_pending()
        task = self._find(local_id)
        task.completed = not task.completed
        if task.completed:
            self.analytics.tasks_completed += 1
            self._save_analytics()
        self._save_tasks()
        self._mirror(task)
        return task

    def update_text(self, local_id: str, text: Optional[str]) -> LocalTask:
        if not text or not text.strip():
            raise ValidationError("Task text cannot be empty")
        self._retry_pending()
        task = self._find(local_id)
        task.text = text.strip()
        self._save_tasks()
        self._mirror(task)
        return task

    def delete_task(self, local_id: str) -> LocalTask:
        self._retry_pending()
        task = self._find(local_id)
        self.tasks.remove(task)
        self.analytics.tasks_deleted += 1
        self._save_tasks()
        self._save_analytics()

        if self.has_session and task.remote_id is not None:
            try:
                self.api.delete_task(task.remote_id)
            except ApiError as e:
                logger.warning(f"Could not delete task {task.remote_id} on server: {e.message}")
        return task

    def clear_all(self) -> int:
        removed = len(self.tasks)
        self.tasks = []
        self.analytics.tasks_deleted += removed
        self._save_tasks()
        self._save_analytics()

        if self.has_session:
            try:
                self.api.clear_tasks()
            except ApiError as e:
                logger.warning(f"Could not clear tasks on server: {e.message}")
        return removed

    # --- Explicit user actions, failures propagate ---

    def _start_session(self, data: Dict[str, Any]) -> UserSession:
        self.session = UserSession(user=data["user"], token=data["token"])
        self.api.token = self.session.token
        self._save(USER_KEY, self.session.model_dump(mode="json", by_alias=True))
        self.refresh()
        return self.session

    def login(self, email: str, password: str) -> UserSession:
        return self._start_session(self.api.login(email, password))

    def register(self, username: str, email: str, password: str) -> UserSession:
        return self._start_session(self.api.register(username, email, password))

    def logout(self) -> None:
        self.session = None
        self.api.token = None
        try:
            self.storage.remove_item(USER_KEY)
        except (OSError, ValueError) as e:
            logger.error(f"Error removing user: {e}")

    def submit_review(self, local_id: str, rating: int, comment: Optional[str] = None) -> Dict[str, Any]:
        if not self.has_session:
            raise AuthError("Login required to submit a review")
        if not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")
        task = self._find(local_id)
        if task.remote_id is None:
            raise ValidationError("Task is not synced yet")

        review = self.api.create_review(task.remote_id, rating, comment)
        self.analytics.reviews_submitted += 1
        self._save_analytics()
        return review

    # --- Preferences ---

    def set_language(self, code: str) -> None:
        if code not in SUPPORTED_LANGUAGES:
            raise ValidationError(f"Unsupported language: {code}")
        self.language = code
        self._save(LANGUAGE_KEY, code)
