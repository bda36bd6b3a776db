# tests/test_task_board.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.client.api_client import ApiError, TaskApiClient
from taskboard.client.task_board import BoardStats, TaskBoard

from .fakes import FlakyTaskApi


@pytest.fixture()
def flaky_api(client: TestClient) -> FlakyTaskApi:
    return FlakyTaskApi(TaskApiClient(http=client))


@pytest.fixture()
def board(flaky_api: FlakyTaskApi) -> TaskBoard:
    return TaskBoard(flaky_api)  # type: ignore[arg-type]


def test_add_puts_new_task_on_top(board: TaskBoard) -> None:
    first = board.add("first")
    second = board.add("second", "with details")

    assert [t.id for t in board.tasks] == [second.id, first.id]
    assert board.tasks[0].description == "with details"


def test_add_rejects_blank_title_locally(board: TaskBoard, flaky_api: FlakyTaskApi) -> None:
    with pytest.raises(ValueError, match="Please enter a task title"):
        board.add("   ")

    assert flaky_api.calls == []


def test_add_treats_empty_description_as_absent(board: TaskBoard) -> None:
    assert board.add("title", "").description is None


def test_refresh_loads_server_state(client: TestClient, board: TaskBoard) -> None:
    client.post("/api/tasks", json={"title": "from elsewhere"})

    tasks = board.refresh()

    assert [t.title for t in tasks] == ["from elsewhere"]


def test_toggle_reconciles_with_server(board: TaskBoard) -> None:
    task = board.add("toggle me")

    updated = board.toggle(task.id)

    assert updated.is_completed is True
    assert board.find(task.id) == updated
    assert [t.id for t in board.completed_tasks] == [task.id]
    assert board.active_tasks == []


def test_toggle_failure_rolls_back(board: TaskBoard, flaky_api: FlakyTaskApi) -> None:
    task = board.add("stays active")
    flaky_api.fail_writes = True

    with pytest.raises(ApiError):
        board.toggle(task.id)

    assert board.find(task.id) == task
    assert board.find(task.id).is_completed is False


def test_find_and_tasks_hand_out_copies(board: TaskBoard) -> None:
    task = board.add("original")

    task.title = "scribbled"
    board.find(task.id).title = "scribbled"
    board.tasks[0].is_completed = True

    assert board.find(task.id).title == "original"
    assert [t.is_completed for t in board.tasks] == [False]


def test_delete_removes_locally_and_on_server(board: TaskBoard, flaky_api: FlakyTaskApi) -> None:
    task = board.add("bye")

    board.delete(task.id)

    assert board.find(task.id) is None
    assert flaky_api.api.fetch_tasks().count == 0


def test_delete_failure_restores_position(board: TaskBoard, flaky_api: FlakyTaskApi) -> None:
    a = board.add("a")
    b = board.add("b")
    c = board.add("c")
    flaky_api.fail_writes = True

    with pytest.raises(ApiError):
        board.delete(b.id)

    assert [t.id for t in board.tasks] == [c.id, b.id, a.id]


def test_delete_of_unknown_task_surfaces_not_found(board: TaskBoard) -> None:
    with pytest.raises(ApiError) as excinfo:
        board.delete(404)

    assert excinfo.value.status == 404
    assert board.tasks == []


def test_stats(board: TaskBoard) -> None:
    assert board.stats() == BoardStats(total=0, active=0, completed=0, completion_percentage=0)

    tasks = [board.add(f"t{i}") for i in range(3)]
    board.toggle(tasks[0].id)

    assert board.stats() == BoardStats(total=3, active=2, completed=1, completion_percentage=33)
