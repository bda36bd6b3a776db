# src/taskboard/api/schemas.py

"""Pydantic wire models. JSON uses camelCase; Python attributes stay snake_case."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..tasks.task_models import Task, TaskList


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTaskRequest(_CamelModel):
    """
    Request body for POST /api/tasks.

    Title emptiness and length limits are enforced by the workflow so they
    surface as InvalidTask; only the structure is checked here.
    """

    title: str | None = Field(default=None, description="Task title (required, 1-200 characters)")
    description: str | None = Field(default=None, description="Optional description (max 1000)")


class TaskResponse(_CamelModel):
    id: int
    title: str
    description: str | None = None
    is_completed: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> TaskResponse:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            is_completed=task.is_completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            is_completed=self.is_completed,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class TaskListResponse(_CamelModel):
    tasks: list[TaskResponse] = Field(default_factory=list)
    total_count: int = 0

    @classmethod
    def from_task_list(cls, task_list: TaskList) -> TaskListResponse:
        return cls(
            tasks=[TaskResponse.from_task(t) for t in task_list.tasks],
            total_count=task_list.count,
        )


class ErrorResponse(_CamelModel):
    type: str
    title: str
    status: int
    detail: str
    trace_id: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    extensions: dict[str, Any] | None = None


class ValidationErrorResponse(ErrorResponse):
    type: str = "ValidationError"
    title: str = "One or more validation errors occurred"
    status: int = 400
    errors: dict[str, list[str]] = Field(default_factory=dict)
