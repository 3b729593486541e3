"""
Todoist API layer package.
Implements the REST transport, typed resource operations and name lookups.
"""

from .cancel import CancelToken
from .client import TodoistClient
from .errors import (
    APIError,
    AuthError,
    MarshalError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestCancelled,
    RetriesExceededError,
    TodoistError,
)
from .transport import ClientConfig

__all__ = [
    'APIError',
    'AuthError',
    'CancelToken',
    'ClientConfig',
    'MarshalError',
    'NetworkError',
    'NotFoundError',
    'RateLimitedError',
    'RequestCancelled',
    'RetriesExceededError',
    'TodoistClient',
    'TodoistError',
]
