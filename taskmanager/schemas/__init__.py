"""Request and response schemas."""
from .common import ApiResponse, CamelModel, envelope, error_envelope
from .review import ReviewCreate, ReviewOut
from .task import TaskCreate, TaskOut, TaskUpdate
from .user import AuthOut, LoginRequest, RegisterRequest, UserOut

__all__ = [
    "ApiResponse",
    "CamelModel",
    "envelope",
    "error_envelope",
    "ReviewCreate",
    "ReviewOut",
    "TaskCreate",
    "TaskOut",
    "TaskUpdate",
    "AuthOut",
    "LoginRequest",
    "RegisterRequest",
    "UserOut",
]
