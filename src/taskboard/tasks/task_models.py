# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskState(StrEnum):
    """
    Task lifecycle state.

    Derived from is_completed; the only transitions are ACTIVE <-> COMPLETED
    via toggle. Deletion ends the lifecycle and is not a state.
    """

    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_completed(cls, is_completed: bool) -> TaskState:
        return cls.COMPLETED if is_completed else cls.ACTIVE


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str | None
    is_completed: bool
    created_at: datetime
    updated_at: datetime

    @property
    def state(self) -> TaskState:
        return TaskState.from_completed(self.is_completed)


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Validated input for TaskStore.create (title already trimmed)."""

    title: str
    description: str | None = None


@dataclass(slots=True)
class TaskList:
    tasks: list[Task] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.tasks)
