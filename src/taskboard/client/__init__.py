"""Task client: HTTP API wrapper, list view state, and terminal front end."""

from .api import ApiError, ApiErrorKind, TaskApiClient
from .console import ConsoleApp
from .view import ReconcileMode, TaskListView, ViewStatus

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "ConsoleApp",
    "ReconcileMode",
    "TaskApiClient",
    "TaskListView",
    "ViewStatus",
]
