"""
Snippetbox — Custom Exception Hierarchy
=========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let the store and the form binder report failures
       without knowing anything about HTTP. Global exception handlers
       (registered in main.py) translate them into status codes.
How:   Each exception class carries a message and optional context dict.
       The message is safe to show; the context is only ever logged.

Exception Hierarchy:
    SnippetboxError (base)
    ├── NotFoundError       → 404 Not Found (missing, expired or malformed id)
    ├── ClientDecodeError   → 400 Bad Request (form body could not be decoded)
    └── StorageError        → 500 Internal Server Error (any database failure)

Field validation failures are deliberately NOT exceptions: they travel on the
form's Validator and produce a 422 re-render of the form.
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SnippetboxError):
    """
    Raised when a requested snippet does not exist or is no longer live.

    An expired snippet and one that never existed produce the same error, so
    callers cannot tell them apart. Not logged as an error: asking for a
    snippet that has expired is a normal event.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ClientDecodeError(SnippetboxError):
    """
    Raised when a submitted form body cannot be decoded into a form object.

    What:    Malformed body, or a value of the wrong type (e.g. expires=abc).
    HTTP:    400 Bad Request, with no echo of the submitted body.

    The binder does not tell the caller which field failed; the details are
    kept in the context for the warning log line.
    """

    def __init__(
        self,
        message: str = "The submitted form could not be decoded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(SnippetboxError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert or row conversion failed.
    When:    Connection lost mid-query, constraint violation, bad row data.
    HTTP:    500 Internal Server Error

    Security Note:
        The response body is always generic. The underlying error type and
        message are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
