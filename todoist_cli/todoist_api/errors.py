"""Exceptions raised by the Todoist API layer."""

from typing import Optional


class TodoistError(Exception):
    """Base exception for everything the client can raise."""
    pass


class NetworkError(TodoistError):
    """Raised when the request never produced an HTTP response."""
    pass


class AuthError(TodoistError):
    """Raised on 401/403 responses."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class APIError(TodoistError):
    """Raised when the API returns an error status (>= 400)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "APIError":
        return cls(f"API error ({status_code}): {body}", status_code, body)


class NotFoundError(APIError):
    """Raised when a name lookup finds no matching resource."""

    def __init__(self, message: str):
        super().__init__(message)


class RateLimitedError(APIError):
    """A 429 response. Retried internally by the transport."""

    def __init__(self, retry_after: float, body: str = ""):
        self.retry_after = retry_after
        super().__init__(f"rate limited, retry after {retry_after:g}s", 429, body)


class RetriesExceededError(TodoistError):
    """Raised when every attempt was rate limited."""

    def __init__(self, last_error: RateLimitedError):
        self.last_error = last_error
        super().__init__(f"max retries exceeded: {last_error}")


class MarshalError(TodoistError):
    """Raised when a request or response body cannot be (de)serialized."""
    pass


class RequestCancelled(TodoistError):
    """Raised when a call is aborted through its CancelToken."""

    def __init__(self, message: str = "request cancelled"):
        super().__init__(message)


class ConfigError(TodoistError):
    """Raised when the stored configuration cannot be read or written."""
    pass


class NotConfiguredError(ConfigError):
    """Raised when no API token is available."""
    pass
