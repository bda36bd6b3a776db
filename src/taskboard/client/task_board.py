# src/taskboard/client/task_board.py

from __future__ import annotations

"""
Client-side task list state.

Mirrors what a dashboard keeps in memory between requests:
- the current list (newest first, as the server returns it)
- optimistic toggle/delete: the local list changes immediately, the server
  answer replaces the optimistic value, and an error restores the previous state
- derived views: active/completed lists and summary stats
"""

import logging
import threading
from dataclasses import dataclass, replace

from ..tasks.task_models import Task
from .api_client import TaskApiClient

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class BoardStats:
    total: int
    active: int
    completed: int
    completion_percentage: int


class TaskBoard:
    def __init__(self, api: TaskApiClient) -> None:
        self._api = api
        self._tasks: list[Task] = []
        self._lock = threading.Lock()

    @property
    def tasks(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks]

    @property
    def active_tasks(self) -> list[Task]:
        return [t for t in self.tasks if not t.is_completed]

    @property
    def completed_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.is_completed]

    def find(self, task_id: int) -> Task | None:
        with self._lock:
            for t in self._tasks:
                if t.id == task_id:
                    return replace(t)
        return None

    def stats(self) -> BoardStats:
        tasks = self.tasks
        total = len(tasks)
        completed = sum(1 for t in tasks if t.is_completed)
        pct = 0 if total == 0 else round(completed * 100 / total)
        return BoardStats(
            total=total,
            active=total - completed,
            completed=completed,
            completion_percentage=pct,
        )

    def refresh(self) -> list[Task]:
        task_list = self._api.fetch_tasks()
        with self._lock:
            self._tasks = list(task_list.tasks)
        logger.debug("Board refreshed: %d tasks", task_list.count)
        return self.tasks

    def add(self, title: str, description: str | None = None) -> Task:
        """
        Create a task on the server and put it on top of the list.

        Blank titles are rejected locally (ValueError) without a request.
        Not optimistic: the id only exists once the server has answered.
        """
        if not title or not title.strip():
            raise ValueError("Please enter a task title")

        task = self._api.create_task(title, description or None)
        with self._lock:
            self._tasks.insert(0, task)
        return replace(task)

    def toggle(self, task_id: int) -> Task:
        with self._lock:
            idx = self._index_of(task_id)
            previous = self._tasks[idx] if idx is not None else None
            if previous is not None:
                self._tasks[idx] = replace(previous, is_completed=not previous.is_completed)

        try:
            updated = self._api.toggle_task(task_id)
        except Exception:
            if previous is not None:
                with self._lock:
                    idx = self._index_of(task_id)
                    if idx is not None:
                        self._tasks[idx] = previous
            logger.warning("Toggle failed for task id=%s; local change rolled back", task_id)
            raise

        with self._lock:
            idx = self._index_of(task_id)
            if idx is not None:
                self._tasks[idx] = updated
        return replace(updated)

    def delete(self, task_id: int) -> None:
        with self._lock:
            idx = self._index_of(task_id)
            removed = self._tasks.pop(idx) if idx is not None else None

        try:
            self._api.delete_task(task_id)
        except Exception:
            if removed is not None and idx is not None:
                with self._lock:
                    self._tasks.insert(min(idx, len(self._tasks)), removed)
            logger.warning("Delete failed for task id=%s; local change rolled back", task_id)
            raise

    def _index_of(self, task_id: int) -> int | None:
        # Caller must hold self._lock.
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None
