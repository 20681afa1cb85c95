"""
StarterKit Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the client-correctable failures.
How:   Each exception carries a user-facing message and the HTTP status it maps to.
       The global handler registered in main.py turns any of them into
       `{"error": message}` with that status.
Who:   Raised by route handlers and request dependencies.

Exception Hierarchy:
    StarterKitError (base)
    ├── ValidationError   → 400 Bad Request (missing/malformed input)
    ├── AuthError         → 401 Unauthorized (missing/malformed bearer header)
    ├── NotFoundError     → 404 Not Found (unknown API endpoint)
    └── PayloadTooLargeError → 413 Payload Too Large (body over the limit)

Anything else raised by a handler is an unhandled error and becomes a 500.
"""

from typing import Any, Dict, Optional


class StarterKitError(Exception):
    """
    Base exception for all StarterKit application errors.

    Attributes:
        message:      User-facing error description (returned as `error`)
        status_code:  HTTP status the global handler responds with
        context:      Additional debug info (logged, never returned)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StarterKitError):
    """
    Raised when client input fails validation.

    When:    Missing `name`/`email` on user creation, malformed JSON body.
    HTTP:    400 Bad Request
    """

    status_code = 400

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


class AuthError(StarterKitError):
    """
    Raised when the Authorization header is missing or not a bearer header.

    Only the `Bearer ` prefix is checked; the token itself is never decoded.
    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StarterKitError):
    """
    Raised when a request under the API base path matches no route.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "API endpoint not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(StarterKitError):
    """
    Raised when a streamed request body grows past `max_body_size`.

    Bodies that declare an oversized Content-Length are rejected by
    BodyLimitMiddleware before the route runs; this covers chunked uploads.
    HTTP:    413 Payload Too Large
    """

    status_code = 413

    def __init__(
        self,
        message: str = "Payload too large",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
