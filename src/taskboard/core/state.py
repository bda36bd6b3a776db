# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import InMemoryTaskStore
from ..tasks.task_workflow import TaskWorkflow


@dataclass
class AppState:
    # Settings object (taskboard.config.Settings, or a test double with the same attributes).
    settings: object

    task_store: InMemoryTaskStore
    workflow: TaskWorkflow
