"""
handlers/errors.py
------------------
Exceptions that map directly to an HTTP status and a client-safe message.
Anything else raised inside a handler is reported as a generic 500.
"""


class HandlerError(Exception):
    """Base class for errors returned to the client as-is."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(HandlerError):
    """A required field is missing, empty or malformed."""

    status_code = 400


class NotFoundError(HandlerError):
    """The row does not exist, or exists but belongs to someone else."""

    status_code = 404


class MethodNotAllowedError(HandlerError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class RateLimitError(HandlerError):
    """The caller exceeded the request budget for this endpoint."""

    status_code = 429

    def __init__(self, message: str = "Too many requests", retry_after: int = 60):
        super().__init__(message)
        self.retry_after = retry_after
