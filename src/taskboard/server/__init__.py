"""HTTP surface of the task board: app factory and task router."""

from .api import create_app
from .task_api import create_task_router

__all__ = ["create_app", "create_task_router"]
