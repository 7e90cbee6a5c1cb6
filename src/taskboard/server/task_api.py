"""Task API endpoints.

This module provides a FastAPI router with the task CRUD surface. It is
mounted under ``/api/tasks`` by the main ``create_app`` factory. Every
handler delegates to :class:`~taskboard.service.TaskService` and maps the
returned outcome onto a JSON response.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from ..models import CreateTaskRequest, ErrorResponse, TaskDto, UpdateTaskRequest
from ..service import Failure, Outcome, TaskService


def outcome_response(outcome: Outcome) -> Response:
    """Translate a service outcome into an HTTP response."""
    if isinstance(outcome, Failure):
        body = ErrorResponse(error=outcome.error, message=outcome.message)
        return JSONResponse(status_code=outcome.status_code, content=body.to_wire())

    if outcome.status_code == 204:
        return Response(status_code=204)

    value = outcome.value
    content: Any
    if isinstance(value, list):
        content = [item.to_wire() for item in value]
    else:
        content = value.to_wire()
    return JSONResponse(status_code=outcome.status_code, content=content)


def create_task_router(get_service: Callable[[], TaskService]) -> APIRouter:
    """Create the task API router.

    Parameters
    ----------
    get_service:
        A zero-argument callable returning the :class:`TaskService` for the
        current request.
    """
    router = APIRouter(prefix="/api/tasks", tags=["tasks"])

    @router.get("", response_model=list[TaskDto])
    async def list_tasks() -> Response:
        return outcome_response(get_service().list_tasks())

    @router.get("/{task_id}", response_model=TaskDto)
    async def get_task(task_id: int) -> Response:
        return outcome_response(get_service().get_task(task_id))

    @router.post("", response_model=TaskDto, status_code=201)
    async def create_task(body: CreateTaskRequest) -> Response:
        return outcome_response(get_service().create_task(body.title, body.user_id))

    @router.put("/{task_id}", response_model=TaskDto)
    async def update_task(task_id: int, body: UpdateTaskRequest) -> Response:
        return outcome_response(get_service().update_task(task_id, body.title, body.is_done))

    @router.delete("/{task_id}", status_code=204)
    async def delete_task(task_id: int) -> Response:
        return outcome_response(get_service().delete_task(task_id))

    return router
