"""Task CRUD operations over the store.

Each public method performs one read-modify-write unit against the
repositories and returns an :data:`Outcome`. Store failures are logged and
reported as ``ErrorKind.STORE``; nothing is raised for expected failures.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from ..models import TaskDto
from ..store.bootstrap import ensure_default_user
from ..store.errors import NotFoundError, StoreError
from ..store.interfaces import TaskRepository, UserRepository
from ..store.models import Task
from .outcomes import Failure, Outcome, Success

TITLE_REQUIRED = "Title is required"


def _not_found(task_id: int) -> Failure:
    return Failure.not_found(f"Task with id {task_id} not found")


def _clean_title(title: Optional[str]) -> Optional[str]:
    """Return the trimmed title, or ``None`` if nothing is left."""
    if title is None:
        return None
    trimmed = title.strip()
    return trimmed or None


class TaskService:
    def __init__(self, tasks: TaskRepository, users: UserRepository) -> None:
        self._tasks = tasks
        self._users = users

    def list_tasks(self) -> Outcome:
        try:
            records = self._tasks.list()
        except StoreError as exc:
            return Failure.store("An error occurred while fetching tasks", exc)
        return Success([TaskDto.from_record(t) for t in records])

    def get_task(self, task_id: int) -> Outcome:
        try:
            record = self._tasks.get(task_id)
        except StoreError as exc:
            return Failure.store("An error occurred while fetching the task", exc)
        if record is None:
            return _not_found(task_id)
        return Success(TaskDto.from_record(record))

    def create_task(self, title: Optional[str], user_id: Optional[int] = None) -> Outcome:
        """Create a task owned by *user_id*, or by the default user when omitted.

        Without *user_id* the default user is created first if the store has no
        users at all. An unknown *user_id* is rejected before anything is written.
        """
        clean = _clean_title(title)
        if clean is None:
            return Failure.validation(TITLE_REQUIRED)

        try:
            if user_id is None:
                owner_id = ensure_default_user(self._users).id
            elif self._users.get(user_id) is not None:
                owner_id = user_id
            else:
                return Failure.validation(f"User with id {user_id} not found")

            record = self._tasks.insert(Task(title=clean, is_done=False, user_id=owner_id))
        except StoreError as exc:
            return Failure.store("An error occurred while creating the task", exc)

        logger.info("Created task {} for user {}", record.id, record.user_id)
        return Success(TaskDto.from_record(record), status_code=201)

    def update_task(self, task_id: int, title: Optional[str], is_done: bool) -> Outcome:
        clean = _clean_title(title)
        if clean is None:
            return Failure.validation(TITLE_REQUIRED)

        try:
            record = self._tasks.get(task_id)
            if record is None:
                return _not_found(task_id)
            record.title = clean
            record.is_done = is_done
            record = self._tasks.update(record)
        except NotFoundError:
            # Deleted between the read and the write.
            return _not_found(task_id)
        except StoreError as exc:
            return Failure.store("An error occurred while updating the task", exc)

        logger.info("Updated task {} (done={})", record.id, record.is_done)
        return Success(TaskDto.from_record(record))

    def delete_task(self, task_id: int) -> Outcome:
        try:
            self._tasks.delete(task_id)
        except NotFoundError:
            return _not_found(task_id)
        except StoreError as exc:
            return Failure.store("An error occurred while deleting the task", exc)

        logger.info("Deleted task {}", task_id)
        return Success(None, status_code=204)
