from .base import (
    AppError,
    DomainError,
    ForbiddenError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from .http import error_response, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "ForbiddenError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",
    "error_response",
    "register_error_handler",
]
