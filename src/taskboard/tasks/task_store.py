# src/taskboard/tasks/task_store.py

from __future__ import annotations

import contextlib
import itertools
import logging
import threading
from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from ..core.ports import Clock
from .task_models import Task, TaskDraft

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryTaskStore:
    """
    In-memory task store.

    Lives for the lifetime of the process; nothing is persisted.

    Ids:
    - assigned from a monotonically increasing counter starting at 1
    - never reused, even after delete or clear()

    Timestamps:
    - taken from the injected clock (UTC by default)
    - every write gets a timestamp strictly greater than the previous write,
      so a toggle always moves updated_at forward even on a coarse clock

    Thread-safety:
    - one lock guards the backing dict, the id counter and the last timestamp
    - lock_task(id) hands out a per-id lock for read-modify-write sequences;
      different ids never share a lock, and the entry is dropped once the
      last holder or waiter leaves
    - callers only ever get copies, so mutating a returned Task has no effect
      until it is passed back to update()
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or utc_now
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._last_ts: datetime | None = None
        self._lock = threading.Lock()
        # id -> (lock, number of holders plus waiters); dropped when nobody uses it
        self._task_locks: dict[int, tuple[threading.Lock, int]] = {}
        logger.info("TaskStore ready (in-memory)")

    # ---- low-level helpers ----

    def _next_timestamp(self) -> datetime:
        # Caller must hold self._lock.
        now = self._clock()
        if self._last_ts is not None and now <= self._last_ts:
            now = self._last_ts + _TICK
        self._last_ts = now
        return now

    @staticmethod
    def _copy(task: Task) -> Task:
        return replace(task)

    # ---- public API ----

    @contextlib.contextmanager
    def lock_task(self, task_id: int) -> Iterator[None]:
        key = int(task_id)
        with self._lock:
            task_lock, users = self._task_locks.get(key, (None, 0))
            if task_lock is None:
                task_lock = threading.Lock()
            self._task_locks[key] = (task_lock, users + 1)
        try:
            with task_lock:
                yield
        finally:
            with self._lock:
                _, users = self._task_locks[key]
                if users <= 1:
                    del self._task_locks[key]
                else:
                    self._task_locks[key] = (task_lock, users - 1)

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def get_all(self) -> list[Task]:
        """Snapshot of all tasks, newest first (ties broken by higher id first)."""
        with self._lock:
            snapshot = [self._copy(t) for t in self._tasks.values()]
        snapshot.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return snapshot

    def get_by_id(self, task_id: int) -> Task | None:
        with self._lock:
            task = self._tasks.get(int(task_id))
            return self._copy(task) if task is not None else None

    def create(self, draft: TaskDraft) -> Task:
        with self._lock:
            now = self._next_timestamp()
            task = Task(
                id=next(self._ids),
                title=draft.title,
                description=draft.description,
                is_completed=False,
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task
            logger.debug("Task added id=%s title_len=%s", task.id, len(task.title))
            return self._copy(task)

    def update(self, task: Task) -> Task | None:
        """
        Overwrite title/description/is_completed of an existing task.

        Returns None when the id is not stored; id and created_at are never
        taken from the argument.
        """
        with self._lock:
            existing = self._tasks.get(int(task.id))
            if existing is None:
                return None

            existing.title = task.title
            existing.description = task.description
            existing.is_completed = bool(task.is_completed)
            existing.updated_at = self._next_timestamp()
            logger.debug(
                "Task updated id=%s is_completed=%s updated_at=%s",
                existing.id,
                existing.is_completed,
                existing.updated_at.isoformat(),
            )
            return self._copy(existing)

    def delete(self, task_id: int) -> bool:
        with self._lock:
            removed = self._tasks.pop(int(task_id), None)
            if removed is None:
                return False
            logger.debug("Task deleted id=%s", removed.id)
            return True

    def clear(self) -> None:
        """Drop every task. The id counter keeps running."""
        with self._lock:
            n = len(self._tasks)
            self._tasks.clear()
        logger.info("TaskStore cleared (%s tasks removed)", n)
