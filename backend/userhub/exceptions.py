"""
UserHub Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions, one per error class of the API.
How:   Each exception carries a client-facing message and an optional context
       dict. Global handlers registered in main.py turn them into
       `{"message": ...}` JSON bodies with the matching status code.
Who:   Raised by the service layer; caught by the global handlers.

Exception Hierarchy:
    UserHubError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class UserHubError(Exception):
    """
    Base exception for all UserHub application errors.

    Attributes:
        message:  Client-facing error description (returned in the response body)
        context:  Extra debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(UserHubError):
    """
    Raised when client input breaks a User invariant.

    When:  Missing required field, empty name, malformed email, duplicate
           email (surfaced from the storage UNIQUE constraint).
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(UserHubError):
    """
    Raised when an identifier does not resolve to an existing record.

    The client-facing message is always "<Resource> not found"; the id
    only goes into the log context.

    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "user",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class DatabaseError(UserHubError):
    """
    Raised when the storage backend fails for any reason other than a
    constraint violation (connectivity, internal fault).

    The original driver error is kept in `context` for the server log.

    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
