# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The workflow depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Callable, Protocol

from ..tasks.task_models import Task, TaskDraft

Clock = Callable[[], datetime]
# Returns a timezone-aware "now"; injected so tests can control time.


class TaskRepo(Protocol):
    """
    Task storage.

    "Not found" is never an exception here: lookups return None and
    delete returns False. Turning absence into an error is the workflow's job.
    """

    def get_all(self) -> list[Task]: ...
    def get_by_id(self, task_id: int) -> Task | None: ...
    def create(self, draft: TaskDraft) -> Task: ...
    def update(self, task: Task) -> Task | None: ...
    def delete(self, task_id: int) -> bool: ...
    def count(self) -> int: ...

    # Serializes read-modify-write sequences on a single id.
    def lock_task(self, task_id: int) -> AbstractContextManager[None]: ...
