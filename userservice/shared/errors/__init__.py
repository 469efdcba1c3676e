from .base import (
    AppError,
    DeadlineExceededError,
    InfrastructureError,
    InvalidCursorError,
    InvalidUserIdError,
    NotificationError,
    PersistenceError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DeadlineExceededError",
    "InfrastructureError",
    "InvalidCursorError",
    "InvalidUserIdError",
    "NotificationError",
    "PersistenceError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
