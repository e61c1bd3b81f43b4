from app.errors.base import (
    BaseAppError,
    create_exception_handler,
    create_unhandled_exception_handler,
    unhandled_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    database_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "create_exception_handler",
    "create_unhandled_exception_handler",
    "database_exception_handler",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
