# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..client.api_client import ApiError, ApiNetworkError
from ..client.task_board import TaskBoard
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[TaskBoard, list[str]], str]
CommandHandler3 = Callable[[TaskBoard, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        board: TaskBoard,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(board, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(board, args)
        except ApiError as e:
            return f"Server rejected /{name} ({e.status}): {e.message}"
        except ApiNetworkError as e:
            return f"{e} Is the server running?"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.is_completed else " "
    line = f"[{mark}] #{task.id} {task.title}"
    if task.description:
        line += f" - {task.description}"
    return line


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def cmd_help(board: TaskBoard, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(board: TaskBoard, args: list[str]) -> str:
    tasks = board.tasks
    if not tasks:
        return "No tasks yet. Add one with /add <title> | <description>."
    return "\n".join(format_task(t) for t in tasks)


def cmd_refresh(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Refreshing tasks from the server...")
    tasks = board.refresh()
    return f"Loaded {len(tasks)} task{'s' if len(tasks) != 1 else ''}."


def cmd_add(board: TaskBoard, args: list[str]) -> str:
    """
    /add Buy milk                -> title only
    /add Buy milk | 2 litres     -> title + description
    """
    raw = " ".join(args)
    title, sep, description = raw.partition("|")
    try:
        task = board.add(title.strip(), description.strip() if sep else None)
    except ValueError as e:
        return str(e)
    return f"Added {format_task(task)}"


def cmd_toggle(board: TaskBoard, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    task = board.toggle(task_id)
    return f"Updated {format_task(task)}"


def cmd_delete(board: TaskBoard, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    board.delete(task_id)
    return f"Deleted task #{task_id}."


def cmd_stats(board: TaskBoard, args: list[str]) -> str:
    s = board.stats()
    active = f"{s.active} task{'s' if s.active != 1 else ''} remaining"
    return (
        "Stats:\n"
        f"  Total: {s.total}\n"
        f"  Active: {active}\n"
        f"  Completed: {s.completion_percentage}%"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list (newest first).", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.")
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <description>.")
registry.register("toggle", cmd_toggle, help_text="Mark a task done / not done: /toggle <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("stats", cmd_stats, help_text="Show totals and completion percentage.")
