"""Error taxonomy shared by the stores, the router and the client."""

from typing import Optional


class TaskManagerError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(TaskManagerError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(TaskManagerError):
    """Bad credentials (401) or an invalid/expired token (403)."""
    status_code = 401


class NotFoundError(TaskManagerError):
    """Missing or foreign-owned resource."""
    status_code = 404


class ConflictError(TaskManagerError):
    """Duplicate registration or duplicate review."""
    status_code = 400


class UnexpectedError(TaskManagerError):
    """Anything else. The caller only ever sees a generic message."""
    status_code = 500

    def __init__(self, message: str = "Something went wrong!"):
        super().__init__(message)
