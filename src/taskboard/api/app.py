# src/taskboard/api/app.py

"""
FastAPI application for the task API.

Routes are thin: they call TaskWorkflow and wrap results in wire models.
Failures are raised as TaskError subclasses and rendered by the exception
handlers below as problem JSON ({type, title, status, detail, traceId, ...}).
The HTTP middleware is the global error boundary for anything unexpected.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.errors import OperationFailedError, TaskError
from ..core.state import AppState
from ..tasks.task_workflow import TaskWorkflow
from .schemas import (
    CreateTaskRequest,
    ErrorResponse,
    TaskListResponse,
    TaskResponse,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-Id"
GENERIC_ERROR_DETAIL = "An error occurred while processing your request"


def _trace_id(request: Request) -> str:
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
        request.state.trace_id = trace_id
    return trace_id


def _problem_response(body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=body.status,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _field_key(loc: tuple[Any, ...]) -> str:
    """("body", "title") -> "title"; ("path", "task_id") -> "task_id"."""
    if not loc:
        return "request"
    parts = [str(p) for p in loc[1:] if not isinstance(p, int)]
    return ".".join(parts) or str(loc[0])


def get_workflow(request: Request) -> TaskWorkflow:
    state: AppState = request.app.state.app_state
    return state.workflow


WorkflowDep = Annotated[TaskWorkflow, Depends(get_workflow)]

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(workflow: WorkflowDep) -> TaskListResponse:
    return TaskListResponse.from_task_list(workflow.list_tasks())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, workflow: WorkflowDep) -> TaskResponse:
    return TaskResponse.from_task(workflow.get_task(task_id))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: CreateTaskRequest,
    request: Request,
    response: Response,
    workflow: WorkflowDep,
) -> TaskResponse:
    task = workflow.create_task(body.title, body.description)
    response.headers["Location"] = str(request.url_for("get_task", task_id=task.id))
    return TaskResponse.from_task(task)


@router.patch("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(task_id: int, workflow: WorkflowDep) -> TaskResponse:
    return TaskResponse.from_task(workflow.toggle_completion(task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(task_id: int, workflow: WorkflowDep) -> Response:
    workflow.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _install_error_handlers(app: FastAPI, settings: object) -> None:
    @app.exception_handler(TaskError)
    async def _handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
        trace_id = _trace_id(request)

        if isinstance(exc, OperationFailedError):
            # Internal inconsistency: keep the reason in the logs only.
            logger.error("Operation failed trace_id=%s: %s", trace_id, exc)
            detail = GENERIC_ERROR_DETAIL
        else:
            logger.warning("%s trace_id=%s: %s", exc.error_type, trace_id, exc)
            detail = str(exc)

        return _problem_response(
            ErrorResponse(
                type=exc.error_type,
                title=exc.title,
                status=exc.status_code,
                detail=detail,
                trace_id=trace_id,
                extensions=exc.extensions(),
            )
        )

    @app.exception_handler(RequestValidationError)
    async def _handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        trace_id = _trace_id(request)

        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            key = _field_key(tuple(err.get("loc") or ()))
            errors.setdefault(key, []).append(str(err.get("msg", "Invalid value")))

        logger.warning("Request validation failed trace_id=%s fields=%s", trace_id, sorted(errors))
        return _problem_response(
            ValidationErrorResponse(detail="Task validation failed", trace_id=trace_id, errors=errors)
        )

    @app.middleware("http")
    async def _trace_and_guard(request: Request, call_next):
        trace_id = _trace_id(request)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled error method=%s path=%s trace_id=%s",
                request.method,
                request.url.path,
                trace_id,
            )
            verbose = bool(getattr(settings, "is_development", False))
            response = _problem_response(
                ErrorResponse(
                    type="InternalError",
                    title="Internal Server Error",
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(exc) if verbose else GENERIC_ERROR_DETAIL,
                    trace_id=trace_id,
                )
            )

        response.headers[TRACE_HEADER] = trace_id
        logger.info(
            "%s %s -> %s (%.1f ms) trace_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000.0,
            trace_id,
        )
        return response


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an already wired AppState."""
    settings = state.settings
    app_name = str(getattr(settings, "app_name", "taskboard"))

    app = FastAPI(title=f"{app_name} API")
    app.state.app_state = state

    app.include_router(router)
    _install_error_handlers(app, settings)

    # Added last so it wraps the error boundary and error responses get CORS headers too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", None) or ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", TRACE_HEADER],
    )

    logger.info("API app created (%s routes)", len(app.routes))
    return app
