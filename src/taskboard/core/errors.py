# src/taskboard/core/errors.py

"""
Error taxonomy shared by the workflow and the transport layer.

Each error carries what the HTTP layer needs to render a problem response
(error_type / title / status_code), so the workflow never imports web code.
"""

from __future__ import annotations

from typing import Any


class TaskError(Exception):
    """Base class for expected task-workflow failures."""

    error_type = "TaskError"
    title = "Task Error"
    status_code = 500

    def extensions(self) -> dict[str, Any] | None:
        return None


class InvalidTaskError(TaskError):
    """Caller-supplied id or field failed a precondition (400)."""

    error_type = "InvalidTask"
    title = "Invalid Task"
    status_code = 400

    def __init__(self, message: str, property_name: str | None = None) -> None:
        super().__init__(message)
        self.property_name = property_name

    def extensions(self) -> dict[str, Any] | None:
        if not self.property_name:
            return None
        return {"propertyName": self.property_name}


class TaskNotFoundError(TaskError):
    """The referenced id does not exist in the store (404)."""

    error_type = "TaskNotFound"
    title = "Task Not Found"
    status_code = 404

    def __init__(self, task_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Task with ID {task_id} was not found")
        self.task_id = task_id

    def extensions(self) -> dict[str, Any] | None:
        return {"taskId": self.task_id}


class OperationFailedError(TaskError):
    """
    A write that should have succeeded found no record (500).

    The message is for logs only; the HTTP layer does not expose it.
    """

    error_type = "OperationFailed"
    title = "Operation Failed"
    status_code = 500

    def __init__(self, message: str, task_id: int | None = None) -> None:
        super().__init__(message)
        self.task_id = task_id
