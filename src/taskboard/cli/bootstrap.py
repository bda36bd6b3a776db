# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the store and the workflow into AppState,
- optionally seeds sample tasks for demos.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_store import InMemoryTaskStore
from ..tasks.task_workflow import TaskWorkflow

logger = logging.getLogger(__name__)

# Oldest first, so the listing shows "Sample Task 1" on top.
SAMPLE_TASKS: tuple[tuple[str, str, bool], ...] = (
    ("Sample Task 2", "Another sample task", True),
    ("Sample Task 1", "This is a sample task for testing", False),
)


def seed_sample_tasks(workflow: TaskWorkflow) -> int:
    """Create the demo tasks through the workflow. Returns how many were created."""
    created = 0
    for title, description, completed in SAMPLE_TASKS:
        task = workflow.create_task(title, description)
        if completed:
            workflow.toggle_completion(task.id)
        created += 1
    logger.info("Seeded %d sample tasks", created)
    return created


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    task_store = InMemoryTaskStore(clock=clock)
    workflow = TaskWorkflow(task_store)

    if getattr(settings, "seed_sample_tasks", False):
        seed_sample_tasks(workflow)

    return AppState(settings=settings, task_store=task_store, workflow=workflow)
