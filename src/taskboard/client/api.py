"""HTTP client for the task API."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import httpx
from loguru import logger

from ..models import CreateTaskRequest, TaskDto, UpdateTaskRequest


class ApiErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER = "server"
    NETWORK = "network"


class ApiError(Exception):
    """A failed API call.

    ``error`` and ``message`` carry the server's error body when one was
    received. Network failures have no status code.
    """

    def __init__(
        self,
        kind: ApiErrorKind,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(error or message or kind.value)
        self.kind = kind
        self.status_code = status_code
        self.error = error
        self.message = message

    @property
    def detail(self) -> Optional[str]:
        """Most specific text the server gave us, if any."""
        if self.error and self.message:
            return f"{self.error}: {self.message}"
        return self.error or self.message


def _kind_for_status(status_code: int) -> ApiErrorKind:
    if status_code == 404:
        return ApiErrorKind.NOT_FOUND
    if 400 <= status_code < 500:
        return ApiErrorKind.VALIDATION
    return ApiErrorKind.SERVER


def _error_from_response(response: httpx.Response) -> ApiError:
    error = message = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        message = body.get("message")
    return ApiError(_kind_for_status(response.status_code), response.status_code, error, message)


class TaskApiClient:
    """Thin wrapper over ``/api/tasks``.

    Pass ``client`` to reuse an existing :class:`httpx.Client` (for example
    FastAPI's ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TransportError as exc:
            logger.warning("{} {} failed: {}", method, path, exc)
            raise ApiError(ApiErrorKind.NETWORK, message=str(exc)) from exc
        # Only 2xx counts as success, 201 and 204 included.
        if not 200 <= response.status_code < 300:
            raise _error_from_response(response)
        return response

    def list_tasks(self) -> list[TaskDto]:
        response = self._request("GET", "/api/tasks")
        return [TaskDto.model_validate(item) for item in response.json()]

    def get_task(self, task_id: int) -> TaskDto:
        response = self._request("GET", f"/api/tasks/{task_id}")
        return TaskDto.model_validate(response.json())

    def create_task(self, title: str, user_id: Optional[int] = None) -> TaskDto:
        body = CreateTaskRequest(title=title, user_id=user_id).model_dump(by_alias=True, exclude_none=True)
        response = self._request("POST", "/api/tasks", json=body)
        return TaskDto.model_validate(response.json())

    def update_task(self, task_id: int, title: str, is_done: bool) -> TaskDto:
        body = UpdateTaskRequest(title=title, is_done=is_done).to_wire()
        response = self._request("PUT", f"/api/tasks/{task_id}", json=body)
        return TaskDto.model_validate(response.json())

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")
