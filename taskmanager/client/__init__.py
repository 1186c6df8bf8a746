"""Client side of the Task Manager: device storage and server sync."""
from .api import ApiError, ClientConfig, TaskApiClient
from .storage import LocalStorage
from .sync import Analytics, LocalTask, SyncStatus, TaskListSync, UserSession

__all__ = [
    "ApiError",
    "ClientConfig",
    "TaskApiClient",
    "LocalStorage",
    "Analytics",
    "LocalTask",
    "SyncStatus",
    "TaskListSync",
    "UserSession",
]
