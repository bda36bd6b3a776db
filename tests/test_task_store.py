# tests/test_task_store.py

from __future__ import annotations

from dataclasses import replace

import pytest

from taskboard.core.errors import TaskNotFoundError
from taskboard.tasks.task_models import TaskDraft
from taskboard.tasks.task_store import InMemoryTaskStore
from taskboard.tasks.task_workflow import TaskWorkflow

from .fakes import FakeClock


def test_create_assigns_ids_and_timestamps(store: InMemoryTaskStore, clock: FakeClock) -> None:
    start = clock.now
    t1 = store.create(TaskDraft(title="first"))
    clock.advance()
    t2 = store.create(TaskDraft(title="second", description="details"))

    assert (t1.id, t2.id) == (1, 2)
    assert t1.is_completed is False
    assert t1.created_at == t1.updated_at == start
    assert t2.description == "details"
    assert store.count() == 2

    fetched = store.get_by_id(t1.id)
    assert fetched == t1


def test_get_all_is_newest_first(store: InMemoryTaskStore, clock: FakeClock) -> None:
    titles = ["a", "b", "c"]
    for title in titles:
        store.create(TaskDraft(title=title))
        clock.advance(5)

    assert [t.title for t in store.get_all()] == ["c", "b", "a"]


def test_get_all_on_empty_store(store: InMemoryTaskStore) -> None:
    assert store.get_all() == []
    assert store.count() == 0


def test_returned_tasks_are_copies(store: InMemoryTaskStore) -> None:
    task = store.create(TaskDraft(title="original"))
    task.title = "mutated outside"

    assert store.get_by_id(task.id).title == "original"

    listed = store.get_all()[0]
    listed.is_completed = True
    assert store.get_by_id(task.id).is_completed is False


def test_update_overwrites_fields_and_bumps_updated_at(store: InMemoryTaskStore) -> None:
    task = store.create(TaskDraft(title="t", description="d"))

    updated = store.update(replace(task, title="t2", description=None, is_completed=True))

    assert updated is not None
    assert updated.id == task.id
    assert updated.title == "t2"
    assert updated.description is None
    assert updated.is_completed is True
    assert updated.created_at == task.created_at
    # Frozen clock: the store still moves the write timestamp forward.
    assert updated.updated_at > task.updated_at


def test_update_ignores_created_at_from_caller(store: InMemoryTaskStore, clock: FakeClock) -> None:
    task = store.create(TaskDraft(title="t"))
    clock.advance(60)

    updated = store.update(replace(task, created_at=clock.now))

    assert updated is not None
    assert updated.created_at == task.created_at


def test_update_missing_returns_none(store: InMemoryTaskStore) -> None:
    task = store.create(TaskDraft(title="t"))
    store.delete(task.id)

    assert store.update(task) is None
    assert store.get_by_id(task.id) is None


def test_delete_reports_whether_removed(store: InMemoryTaskStore) -> None:
    task = store.create(TaskDraft(title="t"))

    assert store.delete(task.id) is True
    assert store.delete(task.id) is False
    assert store.delete(12345) is False


def test_ids_are_never_reused(store: InMemoryTaskStore) -> None:
    t1 = store.create(TaskDraft(title="a"))
    t2 = store.create(TaskDraft(title="b"))
    store.delete(t2.id)
    store.clear()

    t3 = store.create(TaskDraft(title="c"))

    assert t3.id > t2.id > t1.id
    assert [t.id for t in store.get_all()] == [t3.id]


def test_write_timestamps_strictly_increase_on_frozen_clock() -> None:
    clock = FakeClock()
    store = InMemoryTaskStore(clock=clock)

    stamps = []
    task = store.create(TaskDraft(title="t"))
    stamps.append(task.updated_at)
    for _ in range(5):
        task = store.update(replace(task, is_completed=not task.is_completed))
        stamps.append(task.updated_at)

    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)


def test_default_clock_is_timezone_aware() -> None:
    task = InMemoryTaskStore().create(TaskDraft(title="t"))
    assert task.created_at.tzinfo is not None
    assert task.updated_at >= task.created_at


def test_task_locks_are_dropped_after_use(store: InMemoryTaskStore) -> None:
    workflow = TaskWorkflow(store)
    kept = workflow.create_task("kept")

    for missing_id in range(1000, 1200):
        with pytest.raises(TaskNotFoundError):
            workflow.toggle_completion(missing_id)
        with pytest.raises(TaskNotFoundError):
            workflow.delete_task(missing_id)

    workflow.toggle_completion(kept.id)
    gone = workflow.create_task("gone")
    workflow.delete_task(gone.id)

    assert store.count() == 1
    assert store._task_locks == {}
