# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from taskboard.api.app import create_app
from taskboard.cli.bootstrap import create_initial_state
from taskboard.core.state import AppState
from taskboard.tasks.task_store import InMemoryTaskStore
from taskboard.tasks.task_workflow import TaskWorkflow

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the API.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        environment="production",
        is_development=False,
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        host="127.0.0.1",
        port=5082,
        cors_origins=["*"],
        api_base_url="http://testserver",
        client_timeout_seconds=5.0,
        seed_sample_tasks=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> InMemoryTaskStore:
    return InMemoryTaskStore(clock=clock)


@pytest.fixture()
def workflow(store: InMemoryTaskStore) -> TaskWorkflow:
    return TaskWorkflow(store)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired the same way `taskboard serve` wires it (real clock)."""
    return create_initial_state(settings=settings)


@pytest.fixture()
def client(state: AppState) -> TestClient:
    return TestClient(create_app(state))
