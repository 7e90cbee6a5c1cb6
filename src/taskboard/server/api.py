"""FastAPI web server for the task board."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..config import Settings
from ..models import ErrorResponse
from ..service import TaskService
from ..store import Container
from .task_api import create_task_router


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    if loc == ["title"]:
        return "Title is required"
    where = ".".join(loc)
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {where}: {msg}" if where else f"Invalid request: {msg}"


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        container: Store container; built from ``settings.database_url`` when omitted.
        enable_cors: Whether to enable CORS.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or Settings.from_env()
    container = container or Container(settings.database_url)

    app = FastAPI(
        title="Taskboard API",
        description="CRUD API for the task board",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.settings = settings
    app.state.container = container
    app.state.service = TaskService(container.tasks, container.users)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = _describe_validation_error(exc)
        logger.info("Rejected {} {}: {}", request.method, request.url.path, error)
        return JSONResponse(status_code=400, content=ErrorResponse(error=error).to_wire())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error for {} {}", request.method, request.url.path)
        body = ErrorResponse(error="Internal server error", message=str(exc))
        return JSONResponse(status_code=500, content=body.to_wire())

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Taskboard API",
            "version": __version__,
            "status": "running",
        }

    app.include_router(create_task_router(lambda: app.state.service))

    return app
