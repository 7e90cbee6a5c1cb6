"""Client-side task list state.

:class:`TaskListView` mirrors the server's task list in memory and applies
user actions through :class:`~taskboard.client.api.TaskApiClient`. After a
successful mutation the local list is reconciled either by refetching the
whole list or by patching the returned task in place; both converge to the
same displayed state. Failed actions never raise: they leave a message in
``view.error`` and remember how to retry.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from loguru import logger

from ..models import TaskDto
from .api import ApiError, ApiErrorKind, TaskApiClient


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class ReconcileMode(str, Enum):
    REFETCH = "refetch"
    PATCH = "patch"


def error_text(exc: ApiError, fallback: str) -> str:
    """User-facing text for *exc*, preferring what the server said."""
    if exc.kind == ApiErrorKind.NETWORK:
        return f"{fallback}: could not reach the server"
    return exc.detail or fallback


class TaskListView:
    def __init__(self, api: TaskApiClient, mode: ReconcileMode = ReconcileMode.REFETCH) -> None:
        self.api = api
        self.mode = mode
        self.status = ViewStatus.IDLE
        self.tasks: list[TaskDto] = []
        self.error: Optional[str] = None
        self.new_title = ""
        self.drafts: dict[int, str] = {}
        self.pending_delete: Optional[int] = None
        self._retry: Optional[Callable[[], object]] = None

    # -- queries ------------------------------------------------------------

    def task(self, task_id: int) -> Optional[TaskDto]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def is_editing(self, task_id: int) -> bool:
        return task_id in self.drafts

    # -- loading ------------------------------------------------------------

    def load(self) -> None:
        """Fetch the full list. Previous contents survive a failed fetch."""
        self.status = ViewStatus.LOADING
        try:
            tasks = self.api.list_tasks()
        except ApiError as exc:
            self._fail(exc, "Failed to load tasks", self.load, errored=True)
            return
        self.tasks = tasks
        self.status = ViewStatus.READY
        self.error = None
        self._retry = None

    def retry(self) -> None:
        action = self._retry or self.load
        self.error = None
        self._retry = None
        action()

    def dismiss_error(self) -> None:
        self.error = None
        self._retry = None
        if self.status == ViewStatus.ERRORED:
            self.status = ViewStatus.READY

    # -- actions ------------------------------------------------------------

    def create(self, title: Optional[str] = None) -> bool:
        """Submit *title* (or the current input). Returns ``True`` on success.

        The input is cleared on submit and restored if the request fails.
        """
        submitted = self.new_title if title is None else title
        clean = submitted.strip()
        if not clean:
            self.error = "Title is required"
            return False

        self.new_title = ""
        try:
            created = self.api.create_task(clean)
        except ApiError as exc:
            self.new_title = submitted
            self._fail(exc, "Failed to create task", lambda: self.create(submitted))
            return False

        self._clear_error()
        if self.mode == ReconcileMode.PATCH:
            self.tasks.append(created)
        else:
            self.load()
        return True

    def toggle(self, task_id: int) -> bool:
        task = self.task(task_id)
        if task is None:
            return False
        return self._update(task_id, task.title, not task.is_done)

    def begin_edit(self, task_id: int) -> None:
        task = self.task(task_id)
        if task is not None:
            self.drafts[task_id] = task.title

    def set_draft(self, task_id: int, text: str) -> None:
        if task_id in self.drafts:
            self.drafts[task_id] = text

    def cancel_edit(self, task_id: int) -> None:
        self.drafts.pop(task_id, None)

    def commit_edit(self, task_id: int) -> bool:
        """Save the draft title; the draft is kept if saving fails."""
        task = self.task(task_id)
        draft = self.drafts.get(task_id)
        if task is None or draft is None:
            return False
        if not draft.strip():
            self.error = "Title is required"
            return False
        if not self._update(task_id, draft.strip(), task.is_done):
            return False
        self.drafts.pop(task_id, None)
        return True

    def request_delete(self, task_id: int) -> None:
        """First step of a delete; nothing is sent until :meth:`confirm_delete`."""
        if self.task(task_id) is not None:
            self.pending_delete = task_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        task_id = self.pending_delete
        if task_id is None:
            return False
        self.pending_delete = None
        try:
            self.api.delete_task(task_id)
        except ApiError as exc:
            if exc.kind == ApiErrorKind.NOT_FOUND:
                self._drop(task_id)
            self._fail(exc, "Failed to delete task", lambda: self._retry_delete(task_id))
            return False

        self._clear_error()
        self._drop(task_id)
        if self.mode == ReconcileMode.REFETCH:
            self.load()
        return True

    # -- internals ----------------------------------------------------------

    def _retry_delete(self, task_id: int) -> None:
        self.pending_delete = task_id
        self.confirm_delete()

    def _update(self, task_id: int, title: str, is_done: bool) -> bool:
        try:
            updated = self.api.update_task(task_id, title, is_done)
        except ApiError as exc:
            if exc.kind == ApiErrorKind.NOT_FOUND:
                self._drop(task_id)
            self._fail(exc, "Failed to update task", lambda: self._update(task_id, title, is_done))
            return False

        self._clear_error()
        if self.mode == ReconcileMode.PATCH:
            self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        else:
            self.load()
        return True

    def _drop(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.drafts.pop(task_id, None)

    def _clear_error(self) -> None:
        self.error = None
        self._retry = None

    def _fail(
        self,
        exc: ApiError,
        fallback: str,
        retry: Callable[[], object],
        errored: bool = False,
    ) -> None:
        self.error = error_text(exc, fallback)
        self._retry = retry
        if errored:
            self.status = ViewStatus.ERRORED
        elif self.status == ViewStatus.LOADING:
            self.status = ViewStatus.READY
        logger.debug("View action failed ({}): {}", exc.kind.value, self.error)
