"""Relational task store.

SQLAlchemy mappings for users and tasks, repositories over them, and the
bootstrap helpers that create the schema and the placeholder default user.
"""

from .bootstrap import ensure_default_user, ensure_schema
from .container import Container
from .errors import NotFoundError, StoreError
from .interfaces import TaskRepository, UserRepository
from .models import Task, User

__all__ = [
    "Container",
    "NotFoundError",
    "StoreError",
    "Task",
    "TaskRepository",
    "User",
    "UserRepository",
    "ensure_default_user",
    "ensure_schema",
]
