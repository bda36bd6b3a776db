# src/taskboard/tasks/task_workflow.py

from __future__ import annotations

"""
Task workflow.

Validation and orchestration above the store:
- validate input first (no store access on invalid input),
- serialize read-modify-write sequences per id,
- turn "absent" results from the store into TaskNotFoundError,
- return plain Task values; failures are raised as TaskError subclasses.

Transport concerns (status codes, JSON, trace ids) belong to the API layer.
"""

import logging
from dataclasses import replace

from ..core.errors import InvalidTaskError, OperationFailedError, TaskNotFoundError
from ..core.ports import TaskRepo
from .task_models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskDraft,
    TaskList,
)

logger = logging.getLogger(__name__)


def _require_positive_id(task_id: int) -> int:
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise InvalidTaskError(f"Task ID must be an integer, got {task_id!r}", "id")
    if task_id <= 0:
        raise InvalidTaskError(f"Task ID must be a positive integer, got {task_id}", "id")
    return task_id


def normalize_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise InvalidTaskError("Task title cannot be empty", "title")
    clean = title.strip()
    if len(clean) > TITLE_MAX_LENGTH:
        raise InvalidTaskError(
            f"Task title cannot be longer than {TITLE_MAX_LENGTH} characters", "title"
        )
    return clean


def normalize_description(description: str | None) -> str | None:
    """Trim; an empty or whitespace-only description is stored as None."""
    if description is None:
        return None
    clean = description.strip()
    if not clean:
        return None
    if len(clean) > DESCRIPTION_MAX_LENGTH:
        raise InvalidTaskError(
            f"Task description cannot be longer than {DESCRIPTION_MAX_LENGTH} characters",
            "description",
        )
    return clean


class TaskWorkflow:
    def __init__(self, task_store: TaskRepo) -> None:
        if task_store is None:
            raise ValueError("task_store is required")
        self._store = task_store

    def list_tasks(self) -> TaskList:
        logger.info("Retrieving all tasks")
        return TaskList(tasks=self._store.get_all())

    def get_task(self, task_id: int) -> Task:
        task_id = _require_positive_id(task_id)
        logger.info("Retrieving task id=%s", task_id)

        task = self._store.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create_task(self, title: str | None, description: str | None = None) -> Task:
        draft = TaskDraft(
            title=normalize_title(title),
            description=normalize_description(description),
        )
        task = self._store.create(draft)
        logger.info("Created task id=%s title=%r", task.id, task.title)
        return task

    def toggle_completion(self, task_id: int) -> Task:
        task_id = _require_positive_id(task_id)
        logger.info("Toggling completion for task id=%s", task_id)

        with self._store.lock_task(task_id):
            existing = self._store.get_by_id(task_id)
            if existing is None:
                raise TaskNotFoundError(task_id)

            updated = self._store.update(replace(existing, is_completed=not existing.is_completed))
            if updated is None:
                logger.error("Task id=%s vanished between lookup and update", task_id)
                raise OperationFailedError(
                    f"Task with ID {task_id} disappeared while toggling completion", task_id
                )

        logger.info("Task id=%s -> %s", task_id, updated.state.value)
        return updated

    def delete_task(self, task_id: int) -> None:
        task_id = _require_positive_id(task_id)
        logger.info("Deleting task id=%s", task_id)

        with self._store.lock_task(task_id):
            # Look up first so "already absent" is reported, not silently ignored.
            if self._store.get_by_id(task_id) is None:
                raise TaskNotFoundError(task_id)

            if not self._store.delete(task_id):
                logger.error("Task id=%s vanished between lookup and delete", task_id)
                raise OperationFailedError(
                    f"Task with ID {task_id} disappeared while deleting", task_id
                )
