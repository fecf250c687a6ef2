"""
Q&A Forum Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the three failure classes the API
       exposes.
How:   Each exception carries a client-safe `message` and an optional
       `context` dict. Global exception handlers (registered in main.py) turn
       them into `{"message": ...}` JSON responses with the matching status.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    QAForumError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

The `context` dict is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


INVALID_REQUEST_MESSAGE = "Invalid request data."
INVALID_VOTE_MESSAGE = "Invalid vote value."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class QAForumError(Exception):
    """
    Base exception for all Q&A Forum application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = UNEXPECTED_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QAForumError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Request-body schema failures reach the client through FastAPI's
    RequestValidationError, which main.py maps onto the same response.
    """

    def __init__(
        self,
        message: str = INVALID_REQUEST_MESSAGE,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(QAForumError):
    """
    Raised when a referenced row does not exist, or when a listing is empty.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        message: str = "The requested resource was not found.",
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(QAForumError):
    """
    Raised when a database operation fails.

    HTTP: 500 Internal Server Error

    Covers connectivity loss, constraint violations (including the foreign-key
    violation raised when an answer targets a missing question) and any other
    SQLAlchemyError. The message is the operation's generic failure text; the
    driver error goes into `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
