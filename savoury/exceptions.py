"""Savoury exceptions."""


class SavouryError(Exception):
    """Base exception for Savoury."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ServiceError(SavouryError):
    """The REST backend answered with a non-2xx status or could not be reached."""


class NotFoundError(ServiceError):
    """Recipe, user or other resource not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class AuthenticationError(ServiceError):
    """Missing or rejected credentials."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class RateLimitError(ServiceError):
    """Rate limit exceeded."""

    def __init__(self, retry_after: int | None = None):
        msg = "Rate limit exceeded"
        if retry_after:
            msg += f". Retry after {retry_after}s"
        super().__init__(msg, status_code=429)
        self.retry_after = retry_after


class SessionError(SavouryError):
    """A session token failed verification."""

    def __init__(self, message: str = "Invalid session"):
        super().__init__(message, status_code=401)


class PageNotFound(SavouryError):
    """Raised by page handlers to render the not-found boundary."""

    def __init__(self, message: str = "Page not found", title: str = "Not Found"):
        super().__init__(message, status_code=404)
        self.title = title
